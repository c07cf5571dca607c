"""LLM integration."""

from job_tracker.llm.analyzer import AnalysisGateway, parse_analysis
from job_tracker.llm.errors import classify_upstream_error
from job_tracker.llm.provider import CompletionProvider, OpenAICompletionProvider

__all__ = [
    "AnalysisGateway",
    "CompletionProvider",
    "OpenAICompletionProvider",
    "classify_upstream_error",
    "parse_analysis",
]
