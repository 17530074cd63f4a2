"""Tests for the analysis attempt state machine."""

import asyncio

import pytest

from survey_analyzer.core.request_builder import build_request
from survey_analyzer.core.session import AnalysisSession, AnalysisStatus
from survey_analyzer.exceptions import (
    AnalysisClientError,
    AnalysisInProgressError,
    NotJsonError,
)
from survey_analyzer.samples import SAMPLE_SURVEY_TEXT


@pytest.fixture
def analysis_request():
    return build_request(SAMPLE_SURVEY_TEXT)


def _transport(response):
    async def send(request):
        return response
    return send


@pytest.mark.asyncio
async def test_successful_attempt(analysis_request, valid_response_text):
    session = AnalysisSession()
    assert session.status is AnalysisStatus.IDLE

    result = await session.run(analysis_request, _transport(valid_response_text))

    assert session.status is AnalysisStatus.SUCCEEDED
    assert session.result is result
    assert session.error is None
    assert session.get_duration() is not None


@pytest.mark.asyncio
async def test_bad_response_fails_attempt(analysis_request):
    session = AnalysisSession()

    with pytest.raises(NotJsonError):
        await session.run(analysis_request, _transport("definitely not json"))

    assert session.status is AnalysisStatus.FAILED
    assert isinstance(session.error, NotJsonError)
    assert session.result is None


@pytest.mark.asyncio
async def test_transport_failure_is_wrapped(analysis_request):
    async def broken(request):
        raise RuntimeError("connection reset")

    session = AnalysisSession()

    with pytest.raises(AnalysisClientError):
        await session.run(analysis_request, broken)

    assert session.status is AnalysisStatus.FAILED


@pytest.mark.asyncio
async def test_second_attempt_while_requesting_is_refused(analysis_request, valid_response_text):
    release = asyncio.Event()

    async def slow(request):
        await release.wait()
        return valid_response_text

    session = AnalysisSession()
    first = asyncio.create_task(session.run(analysis_request, slow))
    await asyncio.sleep(0)
    assert session.status is AnalysisStatus.REQUESTING

    with pytest.raises(AnalysisInProgressError):
        await session.run(analysis_request, _transport(valid_response_text))
    with pytest.raises(AnalysisInProgressError):
        session.clear()

    release.set()
    await first
    assert session.status is AnalysisStatus.SUCCEEDED


@pytest.mark.asyncio
async def test_new_attempt_discards_previous_terminal_state(analysis_request, valid_response_text):
    session = AnalysisSession()
    with pytest.raises(NotJsonError):
        await session.run(analysis_request, _transport("nope"))

    await session.run(analysis_request, _transport(valid_response_text))

    assert session.status is AnalysisStatus.SUCCEEDED
    assert session.error is None
    assert session.attempts == 2


@pytest.mark.asyncio
async def test_cancel_drops_pending_result(analysis_request, valid_response_text):
    started = asyncio.Event()

    async def hanging(request):
        started.set()
        await asyncio.sleep(3600)
        return valid_response_text

    session = AnalysisSession()
    attempt = asyncio.create_task(session.run(analysis_request, hanging))
    await started.wait()

    assert session.cancel() is True
    with pytest.raises(asyncio.CancelledError):
        await attempt

    assert session.status is AnalysisStatus.IDLE
    assert session.result is None
    assert session.cancel() is False


@pytest.mark.asyncio
async def test_clear_returns_to_idle(analysis_request, valid_response_text):
    session = AnalysisSession()
    await session.run(analysis_request, _transport(valid_response_text))

    session.clear()

    assert session.status is AnalysisStatus.IDLE
    assert session.result is None


@pytest.mark.asyncio
async def test_deeply_nested_response_fails_attempt(analysis_request, valid_response_text):
    session = AnalysisSession()
    nested = "[" * 100000 + "]" * 100000

    with pytest.raises(NotJsonError):
        await session.run(analysis_request, _transport(nested))

    assert session.status is AnalysisStatus.FAILED

    await session.run(analysis_request, _transport(valid_response_text))
    assert session.status is AnalysisStatus.SUCCEEDED


@pytest.mark.asyncio
async def test_unexpected_sanitize_error_is_wrapped(analysis_request, valid_response_text, monkeypatch):
    def explode(raw_response):
        raise RuntimeError("boom")

    monkeypatch.setattr("survey_analyzer.core.session.sanitize", explode)
    session = AnalysisSession()

    with pytest.raises(AnalysisClientError):
        await session.run(analysis_request, _transport(valid_response_text))

    assert session.status is AnalysisStatus.FAILED
    assert isinstance(session.error, AnalysisClientError)
    session.clear()
    assert session.status is AnalysisStatus.IDLE
