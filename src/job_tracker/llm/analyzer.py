"""LLM-powered job description analysis."""

import json
import time
from typing import Any

from loguru import logger
from pydantic import ValidationError

from job_tracker.config.settings import Settings
from job_tracker.exceptions import AnalysisError, Throttled, UpstreamFormatError
from job_tracker.llm.errors import classify_upstream_error
from job_tracker.llm.provider import CompletionProvider, OpenAICompletionProvider
from job_tracker.schema import AnalysisResult
from job_tracker.utils.gate import GateState, SingleFlightGate

MAX_SKILLS = 3
DEFAULT_TEMPERATURE = 0.7
DEFAULT_MAX_TOKENS = 1000

SYSTEM_PROMPT = """You are a career advisor and job analysis expert. Analyze job descriptions and provide helpful insights for job applicants.

Respond with JSON in this exact format:
{
  "summary": "A concise 2-3 sentence summary of the job role, key responsibilities, and requirements",
  "skills": [{
    "name": "Skill Name",
    "description": "Why this skill is important for this role and how to highlight it in applications"
  }]
}
Provide exactly 3 skills that are most important for the role.
Return ONLY valid JSON."""


def build_user_prompt(job_description: str) -> str:
    return f"Please analyze this job description and provide insights:\n\n{job_description}"


def parse_analysis(raw: str | None) -> AnalysisResult:
    """Parse and repair a model response.

    Extra skills beyond MAX_SKILLS are dropped; fewer are passed through.
    Anything else outside the contract raises UpstreamFormatError.
    """
    try:
        data: Any = json.loads(raw or "{}")
    except json.JSONDecodeError as e:
        raise UpstreamFormatError(f"Failed to parse response from provider: {e}", detail=str(e)) from e

    if not isinstance(data, dict):
        raise UpstreamFormatError(
            "Invalid response format from provider", detail=f"expected a JSON object, got {type(data).__name__}"
        )
    summary = data.get("summary")
    if not isinstance(summary, str) or not summary.strip():
        raise UpstreamFormatError("Invalid response format from provider", detail="summary is missing or empty")
    skills = data.get("skills")
    if not isinstance(skills, list):
        raise UpstreamFormatError("Invalid response format from provider", detail="skills is not a list")

    try:
        return AnalysisResult.model_validate({"summary": summary, "skills": skills[:MAX_SKILLS]})
    except ValidationError as e:
        raise UpstreamFormatError("Invalid response format from provider", detail=str(e)) from e


class AnalysisGateway:
    """Summarise job descriptions and extract the top skills via an LLM.

    One analysis runs at a time per gateway; concurrent callers are rejected
    with Throttled instead of piling onto a metered upstream.
    """

    def __init__(
        self,
        provider: CompletionProvider,
        temperature: float = DEFAULT_TEMPERATURE,
        max_tokens: int = DEFAULT_MAX_TOKENS,
    ):
        self.provider = provider
        self.temperature = temperature
        self.max_tokens = max_tokens
        self._gate = SingleFlightGate("job analysis")

    @classmethod
    def from_settings(cls, settings: Settings) -> "AnalysisGateway":
        provider = OpenAICompletionProvider(
            model=settings.groq_model,
            api_key=settings.groq_api_key,
            base_url=settings.groq_base_url,
            profile_log=settings.logs_dir / "api_profile.jsonl" if settings.analysis_profile else None,
        )
        return cls(provider, temperature=settings.analysis_temperature, max_tokens=settings.analysis_max_tokens)

    @property
    def state(self) -> GateState:
        return self._gate.state

    async def analyze(self, job_description: str) -> AnalysisResult:
        """Analyze a job description.

        Raises:
            Throttled: another analysis is in flight
            UpstreamFormatError: the response violates the JSON contract
            UpstreamQuotaExceeded: the provider reported rate/quota exhaustion
            UpstreamUnavailable: any other provider failure
        """
        try:
            async with self._gate.admit():
                logger.debug(f"Analyzing job description ({len(job_description)} chars)")
                t0 = time.perf_counter()
                try:
                    raw = await self.provider.complete(
                        SYSTEM_PROMPT,
                        build_user_prompt(job_description),
                        temperature=self.temperature,
                        max_tokens=self.max_tokens,
                    )
                except AnalysisError:
                    raise
                except Exception as e:
                    raise classify_upstream_error(e) from e
                result = parse_analysis(raw)
        except AnalysisError as e:
            log = logger.warning if isinstance(e, Throttled) else logger.error
            log(f"Job analysis failed: {e.message} ({e.detail or 'no detail'})")
            raise

        logger.info(
            f"Job analysis done in {time.perf_counter() - t0:.2f}s: "
            f"{[skill.name for skill in result.skills]}"
        )
        return result
