from datetime import datetime
from enum import StrEnum
from typing import Annotated

from pydantic import (
    AfterValidator,
    BaseModel,
    ConfigDict,
    Field,
    HttpUrl,
    TypeAdapter,
    ValidationError,
)
from pydantic.alias_generators import to_camel

_url_adapter = TypeAdapter(HttpUrl)


def _check_url(v: str) -> str:
    # Validate, but keep the caller's text as-is (HttpUrl would normalise it).
    try:
        _url_adapter.validate_python(v)
    except ValidationError:
        raise ValueError("Must be a valid URL") from None
    return v


ApplicationLink = Annotated[str, AfterValidator(_check_url)]
NonEmptyText = Annotated[str, Field(min_length=1)]


class JobStatus(StrEnum):
    applied = "applied"
    interviewing = "interviewing"
    rejected = "rejected"
    offer = "offer"


class CamelModel(BaseModel):
    """Snake_case attributes, camelCase on the wire."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class InsertJob(CamelModel):
    title: NonEmptyText
    company: NonEmptyText
    application_link: ApplicationLink
    status: JobStatus


class UpdateJob(CamelModel):
    """Partial update payload. Unset fields keep their stored value.

    id and applied_date are accepted so that clients can echo a full job back,
    but the repository never applies them.
    """

    id: int | None = None
    applied_date: datetime | None = None
    title: NonEmptyText | None = None
    company: NonEmptyText | None = None
    application_link: ApplicationLink | None = None
    status: JobStatus | None = None
    ai_summary: str | None = None
    ai_skills: list[str] | None = None


class Job(CamelModel):
    id: int
    title: str
    company: str
    application_link: str
    status: JobStatus
    applied_date: datetime
    ai_summary: str | None = None
    ai_skills: list[str] | None = None


class AnalysisRequest(CamelModel):
    job_description: str = Field(min_length=10)


class SkillInsight(BaseModel):
    name: NonEmptyText
    description: NonEmptyText


class AnalysisResult(BaseModel):
    summary: NonEmptyText
    skills: list[SkillInsight] = Field(max_length=3)


class JobStats(CamelModel):
    total: int = 0
    by_status: dict[JobStatus, int] = Field(default_factory=dict)
    interviewing: int = 0
    offers: int = 0
    response_rate: int = 0
