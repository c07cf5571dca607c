from typing import Protocol

from job_tracker.schema import InsertJob, Job, UpdateJob


class JobRepository(Protocol):
    """Storage capability for tracked applications.

    Absence is reported through return values (None / False), never raised.
    """

    async def list_all(self) -> list[Job]: ...
    async def get(self, job_id: int) -> Job | None: ...
    async def create(self, job: InsertJob) -> Job: ...
    async def update(self, job_id: int, changes: UpdateJob) -> Job | None: ...
    async def delete(self, job_id: int) -> bool: ...
