"""Custom exceptions for the survey analyzer."""

from typing import List, Optional


class SurveyAnalyzerError(Exception):
    """Base exception for all survey analyzer errors."""

    kind = "error"


class IngestionError(SurveyAnalyzerError):
    """Input matrix is structurally unusable."""

    kind = "ingestion"


class EmptyInputError(IngestionError):
    """Matrix has fewer than two rows."""

    kind = "empty_input"

    def __init__(self, row_count: int = 0):
        super().__init__(
            f"Input has {row_count} row(s); a header row and at least one data row are required"
        )
        self.row_count = row_count


class NoQuestionsFoundError(IngestionError):
    """No usable question rows or columns were discovered."""

    kind = "no_questions_found"

    def __init__(self, layout: str):
        super().__init__(f"No questions found for layout '{layout}'")
        self.layout = layout


class MalformedHeaderError(IngestionError):
    """Header row is too short to hold any question."""

    kind = "malformed_header"

    def __init__(self, column_count: int = 0):
        super().__init__(
            f"Header row has {column_count} column(s); questions are expected from column B onwards"
        )
        self.column_count = column_count


class RequestError(SurveyAnalyzerError):
    """Analysis request could not be built."""

    kind = "request"


class EmptyTextError(RequestError):
    """Serialized survey text is blank."""

    kind = "empty_text"

    def __init__(self):
        super().__init__("Survey text must not be empty")


class ResponseError(SurveyAnalyzerError):
    """Analysis response could not be turned into a result."""

    kind = "response"


class EmptyResponseError(ResponseError):
    """Model returned no content."""

    kind = "empty_response"

    def __init__(self):
        super().__init__("Received an empty response from the analysis model")


class NotJsonError(ResponseError):
    """Response is not parseable JSON after fence stripping."""

    kind = "not_json"

    def __init__(self, message: str, snippet: str = ""):
        super().__init__(f"Response is not valid JSON: {message}")
        self.snippet = snippet


class SchemaMismatchError(ResponseError):
    """Parsed response does not have the expected shape."""

    kind = "schema_mismatch"

    def __init__(self, problems: List[str]):
        summary = "; ".join(problems[:5])
        if len(problems) > 5:
            summary += f" (+{len(problems) - 5} more)"
        super().__init__(f"Response does not match the analysis schema: {summary}")
        self.problems = problems


class AnalysisInProgressError(SurveyAnalyzerError):
    """A second attempt was started while one is outstanding."""

    kind = "in_progress"

    def __init__(self):
        super().__init__("An analysis request is already in progress")


class AnalysisClientError(SurveyAnalyzerError):
    """Transport to the analysis model failed."""

    kind = "client"

    def __init__(self, message: str, deployment: Optional[str] = None, retries: int = 0):
        super().__init__(message)
        self.deployment = deployment
        self.retries = retries
