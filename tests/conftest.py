import asyncio
import json
from datetime import UTC, datetime, timedelta

import pytest

from job_tracker.schema import InsertJob
from job_tracker.storage import MemoryJobRepository


class FakeClock:
    """Deterministic clock; each call returns the current value unchanged."""

    def __init__(self, start: datetime = datetime(2025, 1, 1, 9, 0, tzinfo=UTC)):
        self.now = start

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs) -> None:
        self.now += timedelta(**kwargs)


class ScriptedProvider:
    """CompletionProvider that replays canned responses.

    A response may be a string (returned) or an exception (raised). When
    `hold` is set, each call waits on it before answering.
    """

    def __init__(self, *responses, hold: asyncio.Event | None = None):
        self.responses = list(responses)
        self.hold = hold
        self.calls: list[dict] = []

    async def complete(self, system_prompt, user_prompt, *, temperature, max_tokens):
        self.calls.append({
            "system_prompt": system_prompt,
            "user_prompt": user_prompt,
            "temperature": temperature,
            "max_tokens": max_tokens,
        })
        if self.hold is not None:
            await self.hold.wait()
        response = self.responses.pop(0)
        if isinstance(response, BaseException):
            raise response
        return response


def analysis_json(summary="A backend role.", skills=("Python", "SQL", "Docker")) -> str:
    return json.dumps({
        "summary": summary,
        "skills": [{"name": s, "description": f"{s} matters"} for s in skills],
    })


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def repository(clock):
    return MemoryJobRepository(clock=clock)


@pytest.fixture
def new_job():
    def _make(**overrides) -> InsertJob:
        data = {
            "title": "Frontend Developer",
            "company": "TechCorp",
            "applicationLink": "https://example.com/job",
            "status": "applied",
        }
        data.update(overrides)
        return InsertJob.model_validate(data)
    return _make


@pytest.fixture
def scripted_provider():
    return ScriptedProvider


@pytest.fixture
def make_analysis_json():
    return analysis_json
