from functools import lru_cache
from typing import Annotated

import uvicorn
from fastapi import Depends, FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from loguru import logger

from job_tracker.config import settings
from job_tracker.exceptions import (
    AnalysisError,
    JobNotFound,
    Throttled,
    UpstreamQuotaExceeded,
)
from job_tracker.llm import AnalysisGateway
from job_tracker.schema import (
    AnalysisRequest,
    AnalysisResult,
    InsertJob,
    Job,
    JobStats,
    JobStatus,
    UpdateJob,
)
from job_tracker.storage import JobRepository, MemoryJobRepository, filter_jobs, summarize_jobs

app = FastAPI(title="Job Tracker")


# ── Dependencies ─────────────────────────────────────────────────────────────
# One repository and one gateway per process: the gateway's gate only works
# if every request goes through the same instance.

@lru_cache
def get_repository() -> JobRepository:
    return MemoryJobRepository()


@lru_cache
def get_gateway() -> AnalysisGateway:
    return AnalysisGateway.from_settings(settings)


Repository = Annotated[JobRepository, Depends(get_repository)]
Gateway = Annotated[AnalysisGateway, Depends(get_gateway)]


# ── Error mapping ────────────────────────────────────────────────────────────

_ANALYSIS_STATUS: dict[type[AnalysisError], int] = {
    Throttled: 429,
    UpstreamQuotaExceeded: 429,
}


@app.exception_handler(JobNotFound)
async def job_not_found_handler(request: Request, exc: JobNotFound):
    logger.debug(f"{request.method} {request.url.path}: {exc}")
    return JSONResponse(status_code=404, content={"message": "Job not found"})


@app.exception_handler(AnalysisError)
async def analysis_error_handler(request: Request, exc: AnalysisError):
    code = _ANALYSIS_STATUS.get(type(exc), 500)
    logger.warning(f"Error analyzing job ({type(exc).__name__}): {exc.message}")
    return JSONResponse(status_code=code, content={"message": exc.message})


@app.exception_handler(RequestValidationError)
async def validation_error_handler(request: Request, exc: RequestValidationError):
    what = "job description" if request.url.path.startswith("/api/analyze-job") else "job data"
    logger.debug(f"Rejected {request.method} {request.url.path}: {exc.errors()}")
    return JSONResponse(
        status_code=400,
        content={"message": f"Invalid {what}", "details": jsonable_encoder(exc.errors())},
    )


# ── Jobs ─────────────────────────────────────────────────────────────────────

@app.get("/api/jobs", response_model=list[Job])
async def list_jobs(
    repository: Repository,
    search: str | None = None,
    status: JobStatus | None = None,
):
    return filter_jobs(await repository.list_all(), search=search, status=status)


@app.post("/api/jobs", response_model=Job, status_code=201)
async def create_job(body: InsertJob, repository: Repository):
    return await repository.create(body)


@app.get("/api/jobs/{job_id}", response_model=Job)
async def get_job(job_id: int, repository: Repository):
    job = await repository.get(job_id)
    if job is None:
        raise JobNotFound(job_id)
    return job


@app.put("/api/jobs/{job_id}", response_model=Job)
async def update_job(job_id: int, body: UpdateJob, repository: Repository):
    job = await repository.update(job_id, body)
    if job is None:
        raise JobNotFound(job_id)
    return job


@app.delete("/api/jobs/{job_id}")
async def delete_job(job_id: int, repository: Repository):
    if not await repository.delete(job_id):
        raise JobNotFound(job_id)
    return {"message": "Job deleted successfully"}


@app.get("/api/stats", response_model=JobStats)
async def get_stats(repository: Repository):
    return summarize_jobs(await repository.list_all())


# ── Analysis ─────────────────────────────────────────────────────────────────

@app.post("/api/analyze-job", response_model=AnalysisResult)
async def analyze_job(body: AnalysisRequest, gateway: Gateway):
    return await gateway.analyze(body.job_description)


# ── Misc ─────────────────────────────────────────────────────────────────────

@app.get("/api/health")
async def health(gateway: Gateway):
    return {"status": "ok", "analysis": gateway.state}


# ── Entry point ──────────────────────────────────────────────────────────────

def serve(host: str | None = None, port: int | None = None):
    uvicorn.run(app, host=host or settings.host, port=port or settings.port)
