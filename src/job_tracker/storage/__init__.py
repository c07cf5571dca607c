"""Storage layer."""

from job_tracker.storage.base import JobRepository
from job_tracker.storage.memory import MemoryJobRepository
from job_tracker.storage.views import filter_jobs, summarize_jobs

__all__ = ["JobRepository", "MemoryJobRepository", "filter_jobs", "summarize_jobs"]
