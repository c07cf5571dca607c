import asyncio
import json

import pytest

from job_tracker.exceptions import (
    Throttled,
    UpstreamFormatError,
    UpstreamQuotaExceeded,
    UpstreamUnavailable,
)
from job_tracker.llm import AnalysisGateway, parse_analysis
from job_tracker.llm.analyzer import SYSTEM_PROMPT
from job_tracker.utils import GateState

FOUR_SKILLS = (
    '{"summary":"S","skills":[{"name":"A","description":"a"},{"name":"B","description":"b"},'
    '{"name":"C","description":"c"},{"name":"D","description":"d"}]}'
)


# ── parse_analysis ─────────────────────────────────────────────────────────────

def test_parse_truncates_to_three_skills():
    result = parse_analysis(FOUR_SKILLS)
    assert result.summary == "S"
    assert [s.name for s in result.skills] == ["A", "B", "C"]


def test_parse_passes_short_skill_lists_through(make_analysis_json):
    result = parse_analysis(make_analysis_json(skills=("Go",)))
    assert [s.name for s in result.skills] == ["Go"]


def test_parse_ignores_malformed_entry_past_the_cut():
    raw = json.dumps({
        "summary": "S",
        "skills": [{"name": n, "description": n} for n in "ABC"] + [{"oops": 1}],
    })
    assert len(parse_analysis(raw).skills) == 3


def test_parse_invalid_json_keeps_diagnostic():
    with pytest.raises(UpstreamFormatError) as exc_info:
        parse_analysis("not json {")
    assert "Failed to parse" in exc_info.value.message
    assert exc_info.value.detail
    assert isinstance(exc_info.value.__cause__, json.JSONDecodeError)


@pytest.mark.parametrize("raw", [
    '{"summary":"","skills":[]}',
    '{"summary":"   ","skills":[]}',
    '{"skills":[]}',
    '{"summary":42,"skills":[]}',
    '{"summary":"S","skills":"Python"}',
    '{"summary":"S"}',
    '["summary"]',
    '{"summary":"S","skills":[{"name":"","description":"x"}]}',
    '{"summary":"S","skills":[{"name":"A"}]}',
    "",
    None,
])
def test_parse_rejects_contract_violations(raw):
    with pytest.raises(UpstreamFormatError):
        parse_analysis(raw)


# ── AnalysisGateway ────────────────────────────────────────────────────────────

async def test_analyze_builds_fixed_prompt(scripted_provider, make_analysis_json):
    provider = scripted_provider(make_analysis_json())
    gateway = AnalysisGateway(provider, temperature=0.2, max_tokens=321)

    result = await gateway.analyze("We need a Python developer with SQL.")

    assert [s.name for s in result.skills] == ["Python", "SQL", "Docker"]
    [call] = provider.calls
    assert call["system_prompt"] == SYSTEM_PROMPT
    assert call["user_prompt"].endswith("\n\nWe need a Python developer with SQL.")
    assert call["temperature"] == 0.2
    assert call["max_tokens"] == 321


async def test_analyze_default_parameters(scripted_provider, make_analysis_json):
    provider = scripted_provider(make_analysis_json())
    await AnalysisGateway(provider).analyze("Some job description")
    assert provider.calls[0]["temperature"] == 0.7
    assert provider.calls[0]["max_tokens"] == 1000


async def test_analyze_truncates(scripted_provider):
    result = await AnalysisGateway(scripted_provider(FOUR_SKILLS)).analyze("Some job description")
    assert [s.name for s in result.skills] == ["A", "B", "C"]


async def test_concurrent_analyze_is_throttled(scripted_provider, make_analysis_json):
    hold = asyncio.Event()
    provider = scripted_provider(make_analysis_json(), make_analysis_json(summary="Second"), hold=hold)
    gateway = AnalysisGateway(provider)

    first = asyncio.create_task(gateway.analyze("First job description"))
    await asyncio.sleep(0)
    assert gateway.state == GateState.busy

    with pytest.raises(Throttled):
        await gateway.analyze("Second job description")
    assert len(provider.calls) == 1

    hold.set()
    assert (await first).summary == "A backend role."
    assert gateway.state == GateState.idle

    assert (await gateway.analyze("Third job description")).summary == "Second"
    assert len(provider.calls) == 2


async def test_gate_released_after_format_error(scripted_provider, make_analysis_json):
    provider = scripted_provider("definitely not json", make_analysis_json())
    gateway = AnalysisGateway(provider)

    with pytest.raises(UpstreamFormatError):
        await gateway.analyze("Some job description")
    assert gateway.state == GateState.idle

    assert (await gateway.analyze("Some job description")).summary == "A backend role."


async def test_empty_summary_is_format_error(scripted_provider):
    gateway = AnalysisGateway(scripted_provider('{"summary":"","skills":[]}'))
    with pytest.raises(UpstreamFormatError):
        await gateway.analyze("Some job description")
    assert gateway.state == GateState.idle


async def test_provider_failure_is_unavailable(scripted_provider, make_analysis_json):
    provider = scripted_provider(ConnectionError("connection reset by peer"), make_analysis_json())
    gateway = AnalysisGateway(provider)

    with pytest.raises(UpstreamUnavailable) as exc_info:
        await gateway.analyze("Some job description")
    assert "connection reset by peer" in exc_info.value.message
    assert isinstance(exc_info.value.__cause__, ConnectionError)
    assert gateway.state == GateState.idle

    await gateway.analyze("Some job description")


async def test_provider_rate_limit_is_quota(scripted_provider):
    gateway = AnalysisGateway(scripted_provider(RuntimeError("Rate limit reached for model")))
    with pytest.raises(UpstreamQuotaExceeded):
        await gateway.analyze("Some job description")
    assert gateway.state == GateState.idle


async def test_already_classified_errors_pass_through(scripted_provider):
    original = UpstreamQuotaExceeded("slow down")
    gateway = AnalysisGateway(scripted_provider(original))
    with pytest.raises(UpstreamQuotaExceeded) as exc_info:
        await gateway.analyze("Some job description")
    assert exc_info.value is original
