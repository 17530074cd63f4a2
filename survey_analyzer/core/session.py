"""Single in-flight analysis attempt tracking."""

import asyncio
import logging
from datetime import datetime
from enum import Enum
from typing import Awaitable, Callable, Optional

from ..exceptions import AnalysisClientError, AnalysisInProgressError, SurveyAnalyzerError
from ..models.analysis_result import AnalysisResult
from .request_builder import AnalysisRequest
from .sanitizer import sanitize

logger = logging.getLogger(__name__)

Transport = Callable[[AnalysisRequest], Awaitable[str]]


class AnalysisStatus(str, Enum):
    IDLE = "idle"
    REQUESTING = "requesting"
    SUCCEEDED = "succeeded"
    FAILED = "failed"


class AnalysisSession:
    """
    Runs at most one analysis attempt at a time.

    ``IDLE -> REQUESTING -> SUCCEEDED | FAILED``. Terminal states are kept
    until the next attempt starts or ``clear()`` is called. Cancelling an
    outstanding attempt drops its pending result and returns to ``IDLE``.
    """

    def __init__(self):
        self.status = AnalysisStatus.IDLE
        self.result: Optional[AnalysisResult] = None
        self.error: Optional[SurveyAnalyzerError] = None
        self.attempts = 0
        self.started_at: Optional[datetime] = None
        self.finished_at: Optional[datetime] = None
        self._task: Optional[asyncio.Future] = None

    @property
    def in_flight(self) -> bool:
        return self.status is AnalysisStatus.REQUESTING

    async def run(self, request: AnalysisRequest, transport: Transport) -> AnalysisResult:
        """
        Send a request through ``transport`` and sanitize the reply.

        Raises:
            AnalysisInProgressError: another attempt is outstanding
            SurveyAnalyzerError: the attempt failed; the session is ``FAILED``
            asyncio.CancelledError: the attempt was cancelled; the session is ``IDLE``
        """
        if self.in_flight:
            raise AnalysisInProgressError()

        self._begin()
        self._task = asyncio.ensure_future(transport(request))
        try:
            raw_response = await self._task
        except asyncio.CancelledError:
            logger.info(f"Analysis attempt {self.attempts} cancelled")
            self._reset()
            raise
        except SurveyAnalyzerError as e:
            self._fail(e)
            raise
        except Exception as e:
            error = AnalysisClientError(f"Analysis request failed: {e}")
            self._fail(error)
            raise error from e
        finally:
            self._task = None

        try:
            result = sanitize(raw_response)
        except SurveyAnalyzerError as e:
            self._fail(e)
            raise
        except Exception as e:
            error = AnalysisClientError(f"Could not process analysis response: {e}")
            self._fail(error)
            raise error from e

        self.result = result
        self.status = AnalysisStatus.SUCCEEDED
        self.finished_at = datetime.now()
        logger.info(f"Analysis attempt {self.attempts} succeeded")
        return result

    def cancel(self) -> bool:
        """Cancel the outstanding attempt, if any."""
        if self._task is None or self._task.done():
            return False
        self._task.cancel()
        return True

    def clear(self) -> None:
        """Drop a terminal result or error and return to ``IDLE``."""
        if self.in_flight:
            raise AnalysisInProgressError()
        self._reset()

    def get_duration(self) -> Optional[float]:
        """Duration of the last finished attempt in seconds."""
        if not self.started_at or not self.finished_at:
            return None
        return (self.finished_at - self.started_at).total_seconds()

    def _begin(self) -> None:
        self.attempts += 1
        self.status = AnalysisStatus.REQUESTING
        self.result = None
        self.error = None
        self.started_at = datetime.now()
        self.finished_at = None

    def _fail(self, error: SurveyAnalyzerError) -> None:
        self.error = error
        self.status = AnalysisStatus.FAILED
        self.finished_at = datetime.now()
        logger.error(f"Analysis attempt {self.attempts} failed ({error.kind}): {error}")

    def _reset(self) -> None:
        self.status = AnalysisStatus.IDLE
        self.result = None
        self.error = None
        self.started_at = None
        self.finished_at = None
