"""In-process job store."""

from collections.abc import Callable
from datetime import UTC, datetime
from itertools import count

from loguru import logger

from job_tracker.schema import InsertJob, Job, UpdateJob

# Fields the repository owns; a partial update can never touch them.
_PROTECTED_FIELDS = {"id", "applied_date"}
# Fields where an explicit null means "not supplied" rather than "clear it".
_REQUIRED_FIELDS = frozenset({"title", "company", "application_link", "status"})


def _utcnow() -> datetime:
    return datetime.now(UTC)


class MemoryJobRepository:
    """Dict-backed JobRepository with a monotonic id counter.

    Ids start at 1 and are never reused, even after deletion. The dict keeps
    insertion order, which is what breaks ties between equal applied dates.
    State lives in this instance only and is lost on restart.
    """

    def __init__(self, clock: Callable[[], datetime] = _utcnow):
        self._jobs: dict[int, Job] = {}
        self._ids = count(1)
        self._clock = clock

    def __len__(self) -> int:
        return len(self._jobs)

    async def list_all(self) -> list[Job]:
        """Return all jobs, most recently applied first."""
        # sorted() is stable with reverse=True, so ties keep insertion order.
        return sorted(self._jobs.values(), key=lambda j: j.applied_date, reverse=True)

    async def get(self, job_id: int) -> Job | None:
        return self._jobs.get(job_id)

    async def create(self, job: InsertJob) -> Job:
        """Store a new job, stamping its id and applied date."""
        created = Job(
            **job.model_dump(),
            id=next(self._ids),
            applied_date=self._clock(),
            ai_summary=None,
            ai_skills=None,
        )
        self._jobs[created.id] = created
        logger.info(f"Created job #{created.id}: {created.title} @ {created.company}")
        return created

    async def update(self, job_id: int, changes: UpdateJob) -> Job | None:
        """Merge the supplied fields over the stored job.

        Returns None when job_id is unknown. id and applied_date are kept
        regardless of what the payload carries.
        """
        existing = self._jobs.get(job_id)
        if existing is None:
            logger.debug(f"Update skipped, job #{job_id} not found")
            return None

        supplied = changes.model_dump(exclude_unset=True, exclude=_PROTECTED_FIELDS)
        merged = {
            k: v for k, v in supplied.items()
            if not (v is None and k in _REQUIRED_FIELDS)
        }
        updated = existing.model_copy(update=merged)
        self._jobs[job_id] = updated
        logger.info(f"Updated job #{job_id}: {', '.join(merged) or 'no changes'}")
        return updated

    async def delete(self, job_id: int) -> bool:
        removed = self._jobs.pop(job_id, None) is not None
        if removed:
            logger.info(f"Deleted job #{job_id}")
        else:
            logger.debug(f"Delete skipped, job #{job_id} not found")
        return removed
