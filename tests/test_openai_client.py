"""Tests for the Azure OpenAI client wrapper."""

import httpx
import openai
import pytest

from survey_analyzer.core.request_builder import build_request
from survey_analyzer.exceptions import AnalysisClientError
from survey_analyzer.samples import SAMPLE_SURVEY_TEXT
from survey_analyzer.services.openai_client import OpenAIClient


def _client(settings, azure_client):
    return OpenAIClient(
        azure_endpoint=settings.azure_openai_endpoint,
        api_key=settings.azure_openai_api_key,
        api_version=settings.azure_api_version,
        deployment_name="test-deployment",
        settings=settings,
        client=azure_client,
    )


def _connection_error():
    return openai.APIConnectionError(request=httpx.Request("POST", "https://example.openai.azure.com"))


@pytest.mark.asyncio
async def test_analyze_sends_schema_and_returns_content(settings, fake_azure_client, valid_response_text):
    azure = fake_azure_client([valid_response_text])
    client = _client(settings, azure)
    request = build_request(SAMPLE_SURVEY_TEXT)

    content = await client.analyze(request)

    assert content == valid_response_text
    call = azure.completions.calls[0]
    assert call["model"] == "test-deployment"
    assert call["messages"] == request.to_messages()
    assert call["response_format"]["type"] == "json_schema"
    assert call["temperature"] == settings.api_temperature
    stats = client.get_usage_statistics()
    assert stats["total_requests"] == 1
    assert stats["total_tokens_used"] == 123


@pytest.mark.asyncio
async def test_empty_content_is_returned_as_empty_text(settings, fake_azure_client):
    client = _client(settings, fake_azure_client([None]))

    assert await client.analyze(build_request(SAMPLE_SURVEY_TEXT)) == ""


@pytest.mark.asyncio
async def test_connection_errors_are_retried(settings, fake_azure_client, valid_response_text):
    azure = fake_azure_client([_connection_error(), valid_response_text])
    client = _client(settings, azure)

    content = await client.analyze(build_request(SAMPLE_SURVEY_TEXT))

    assert content == valid_response_text
    assert len(azure.completions.calls) == 2


@pytest.mark.asyncio
async def test_exhausted_retries_raise_client_error(settings, fake_azure_client):
    azure = fake_azure_client([_connection_error(), _connection_error()])
    client = _client(settings, azure)

    with pytest.raises(AnalysisClientError) as exc_info:
        await client.analyze(build_request(SAMPLE_SURVEY_TEXT))

    assert exc_info.value.deployment == "test-deployment"
    assert len(azure.completions.calls) == settings.openai_max_retries
    assert client.get_usage_statistics()["failed_requests"] == 1


@pytest.mark.asyncio
async def test_non_transport_errors_are_not_retried(settings, fake_azure_client):
    response = httpx.Response(400, request=httpx.Request("POST", "https://example.openai.azure.com"))
    error = openai.BadRequestError("bad request", response=response, body=None)
    azure = fake_azure_client([error])
    client = _client(settings, azure)

    with pytest.raises(AnalysisClientError):
        await client.analyze(build_request(SAMPLE_SURVEY_TEXT))

    assert len(azure.completions.calls) == 1


@pytest.mark.asyncio
async def test_close_closes_underlying_client(settings, fake_azure_client):
    azure = fake_azure_client([])
    client = _client(settings, azure)

    await client.close()

    assert azure.closed is True


@pytest.mark.asyncio
async def test_zero_retries_still_makes_a_single_attempt(settings, fake_azure_client):
    settings.openai_max_retries = 0
    azure = fake_azure_client([_connection_error(), _connection_error()])
    client = _client(settings, azure)

    with pytest.raises(AnalysisClientError):
        await client.analyze(build_request(SAMPLE_SURVEY_TEXT))

    assert len(azure.completions.calls) == 1
