"""Azure OpenAI client wrapper with retry logic for survey analysis."""

import logging
from typing import Any, Dict, List

import backoff
import openai
from openai import AsyncAzureOpenAI

from ..core.request_builder import AnalysisRequest
from ..exceptions import AnalysisClientError

logger = logging.getLogger(__name__)

# Transport failures worth another attempt; response content is never retried.
RETRYABLE_ERRORS = (
    openai.APIConnectionError,
    openai.RateLimitError,
    openai.InternalServerError,
)


class OpenAIClient:
    """Async wrapper for Azure OpenAI chat completions with structured output."""

    def __init__(
        self,
        azure_endpoint: str,
        api_key: str,
        api_version: str,
        deployment_name: str,
        settings,
        client: AsyncAzureOpenAI = None
    ):
        """Initialize the OpenAI client."""
        self.settings = settings
        self.client = client or AsyncAzureOpenAI(
            azure_endpoint=azure_endpoint,
            api_key=api_key,
            api_version=api_version,
            timeout=settings.openai_timeout,
            max_retries=0
        )
        self.deployment_name = deployment_name

        self._create_completion = backoff.on_exception(
            backoff.expo,
            RETRYABLE_ERRORS,
            max_tries=max(1, settings.openai_max_retries),
            max_time=settings.backoff_max_time,
            on_backoff=self._log_backoff
        )(self._create_completion_once)

        # Statistics tracking
        self.total_requests = 0
        self.total_tokens_used = 0
        self.failed_requests = 0

    @staticmethod
    def _log_backoff(details: Dict[str, Any]) -> None:
        logger.warning(
            f"Request failed (attempt {details['tries']}), "
            f"retrying in {details['wait']:.1f}s: {details.get('exception')}"
        )

    async def _create_completion_once(self, messages: List[Dict[str, str]], **kwargs):
        return await self.client.chat.completions.create(
            model=self.deployment_name,
            messages=messages,
            **kwargs
        )

    async def analyze(self, request: AnalysisRequest) -> str:
        """Send an analysis request and return the raw response text."""
        try:
            response = await self._create_completion(
                messages=request.to_messages(),
                temperature=self.settings.api_temperature,
                max_tokens=self.settings.max_tokens,
                response_format=request.response_format()
            )
        except openai.OpenAIError as e:
            self.failed_requests += 1
            logger.error(f"Analysis request failed: {str(e)}")
            raise AnalysisClientError(
                f"Analysis request failed: {e}",
                deployment=self.deployment_name,
                retries=self.settings.openai_max_retries
            ) from e

        # Update statistics
        self.total_requests += 1
        if getattr(response, 'usage', None):
            self.total_tokens_used += response.usage.total_tokens

        if not response.choices:
            return ""
        return response.choices[0].message.content or ""

    async def close(self) -> None:
        await self.client.close()

    def get_usage_statistics(self) -> Dict[str, Any]:
        """Get usage statistics for the client."""
        attempted = self.total_requests + self.failed_requests
        return {
            "total_requests": self.total_requests,
            "total_tokens_used": self.total_tokens_used,
            "failed_requests": self.failed_requests,
            "success_rate": (
                self.total_requests / attempted
                if attempted > 0 else 0
            ),
            "average_tokens_per_request": (
                self.total_tokens_used / self.total_requests
                if self.total_requests > 0 else 0
            )
        }
