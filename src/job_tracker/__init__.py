"""Job application tracker with LLM-assisted job description analysis."""

__version__ = "0.1.0"
