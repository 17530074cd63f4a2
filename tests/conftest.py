"""Shared test fixtures for survey analyzer tests."""

import copy
import json
from types import SimpleNamespace

import pytest

from survey_analyzer.config.settings import Settings

VALID_PAYLOAD = {
    "coreConclusions": {
        "overallConclusion": "Users like the product but performance and login issues drive churn.",
        "logicalModules": [
            {"title": "Experience", "content": "Most users are satisfied with the interface."},
            {"title": "Friction", "content": "Login failures block a minority entirely."},
        ],
        "actionableInsights": ["Fix login reliability", "Ship dark mode"],
        "logicDiagramMermaid": 'graph TD\nA["Login failures"] --> B["Churn"]',
    },
    "questionInsights": [
        {
            "question": "How satisfied are you with the product overall?",
            "corePoints": [
                {
                    "label": "Satisfied",
                    "description": "Positive about interface and stability.",
                    "percentage": 60,
                    "quotes": [
                        {"text": "Very satisfied, the interface is beautiful.", "source": "User 1"},
                    ],
                },
            ],
        },
    ],
    "userClusters": [
        {
            "name": "Loyal users",
            "description": "Long-time users happy with stability.",
            "percentage": 50,
            "characteristics": ["stable usage", "feature requests"],
            "userIds": ["User 1", "User 7"],
        },
    ],
}


@pytest.fixture
def valid_payload() -> dict:
    """A response payload matching the analysis schema."""
    return copy.deepcopy(VALID_PAYLOAD)


@pytest.fixture
def valid_response_text(valid_payload) -> str:
    return json.dumps(valid_payload, ensure_ascii=False)


@pytest.fixture
def settings(tmp_path) -> Settings:
    """Settings that pass validation without real credentials."""
    return Settings(
        azure_openai_api_key="test-key",
        azure_openai_endpoint="https://example.openai.azure.com",
        openai_max_retries=2,
        backoff_max_time=5,
        output_dir=str(tmp_path / "output"),
    )


class FakeCompletions:
    """Stands in for ``client.chat.completions`` with scripted outcomes."""

    def __init__(self, outcomes):
        self.outcomes = list(outcomes)
        self.calls = []

    async def create(self, **kwargs):
        self.calls.append(kwargs)
        outcome = self.outcomes.pop(0)
        if isinstance(outcome, Exception):
            raise outcome
        return SimpleNamespace(
            choices=[SimpleNamespace(message=SimpleNamespace(content=outcome))],
            usage=SimpleNamespace(total_tokens=123),
        )


class FakeAzureClient:
    def __init__(self, outcomes):
        self.completions = FakeCompletions(outcomes)
        self.chat = SimpleNamespace(completions=self.completions)
        self.closed = False

    async def close(self):
        self.closed = True


@pytest.fixture
def fake_azure_client():
    """Factory for a fake async Azure client returning scripted outcomes."""
    return FakeAzureClient
