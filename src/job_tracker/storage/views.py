"""Read-side helpers for the dashboard: search filters and aggregate counts."""

import math
from collections import Counter
from collections.abc import Iterable

from job_tracker.schema import Job, JobStats, JobStatus


def filter_jobs(
    jobs: Iterable[Job],
    search: str | None = None,
    status: JobStatus | None = None,
) -> list[Job]:
    """Keep jobs whose title or company contains *search* (case-insensitive)
    and whose status equals *status*. Order is preserved."""
    needle = (search or "").strip().lower()
    return [
        job for job in jobs
        if (not needle or needle in job.title.lower() or needle in job.company.lower())
        and (status is None or job.status == status)
    ]


def summarize_jobs(jobs: Iterable[Job]) -> JobStats:
    counts = Counter(job.status for job in jobs)
    total = sum(counts.values())
    interviewing = counts[JobStatus.interviewing]
    offers = counts[JobStatus.offer]
    return JobStats(
        total=total,
        by_status={status: counts[status] for status in JobStatus},
        interviewing=interviewing,
        offers=offers,
        # Half-up, not banker's rounding.
        response_rate=math.floor((interviewing + offers) / total * 100 + 0.5) if total else 0,
    )
