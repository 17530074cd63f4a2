"""Response sanitization, validation and repair."""

import json
import logging
import re
from typing import Any, Dict, List

from jsonschema import Draft7Validator

from ..config.schema import ANALYSIS_RESULT_SCHEMA
from ..exceptions import EmptyResponseError, NotJsonError, SchemaMismatchError
from ..models.analysis_result import AnalysisResult

logger = logging.getLogger(__name__)

DIAGRAM_KEYWORDS = ("graph", "flowchart")
EDGE_TOKENS = ("-->", "-.->", "==>")
DEFAULT_DIAGRAM_HEADER = "graph TD"

_LEADING_FENCE = re.compile(r"^```[\w+-]*[ \t]*\r?\n?")
_TRAILING_FENCE = re.compile(r"\r?\n?[ \t]*```$")
_ANY_FENCE = re.compile(r"```(?:mermaid)?\s*", re.IGNORECASE)

_validator = Draft7Validator(ANALYSIS_RESULT_SCHEMA)


def strip_code_fence(text: str) -> str:
    """Remove one surrounding markdown code fence, with or without a language tag."""
    cleaned = text.strip()
    cleaned = _LEADING_FENCE.sub("", cleaned, count=1)
    cleaned = _TRAILING_FENCE.sub("", cleaned, count=1)
    return cleaned.strip()


def repair_diagram(diagram: str) -> str:
    """
    Clean up a Mermaid flowchart returned by the model.

    Fences are removed wherever they occur. A diagram without a ``graph`` or
    ``flowchart`` header that still contains edges gets a top-down header.
    Applying this twice gives the same result as applying it once.
    """
    cleaned = _ANY_FENCE.sub("", diagram).strip()
    if cleaned.startswith(DIAGRAM_KEYWORDS):
        return cleaned
    if any(token in cleaned for token in EDGE_TOKENS):
        logger.debug("Adding missing diagram header")
        return f"{DEFAULT_DIAGRAM_HEADER}\n{cleaned}"
    return cleaned


def _format_path(path) -> str:
    formatted = "$"
    for part in path:
        formatted += f"[{part}]" if isinstance(part, int) else f".{part}"
    return formatted


def validate_payload(payload: Any) -> List[str]:
    """Return shape problems of a parsed payload, empty when valid."""
    errors = sorted(_validator.iter_errors(payload), key=lambda e: list(map(str, e.absolute_path)))
    return [f"{_format_path(e.absolute_path)}: {e.message}" for e in errors]


def sanitize_payload(raw_response_text: str) -> Dict[str, Any]:
    """Strip, parse, validate and repair a raw response into a wire-shaped dict."""
    if raw_response_text is None or not raw_response_text.strip():
        raise EmptyResponseError()

    cleaned = strip_code_fence(raw_response_text)
    try:
        payload = json.loads(cleaned)
    except (ValueError, RecursionError) as e:
        logger.error(f"Failed to parse analysis response: {e}")
        raise NotJsonError(str(e), snippet=cleaned[:200]) from e

    problems = validate_payload(payload)
    if problems:
        logger.error(f"Analysis response failed validation with {len(problems)} problem(s)")
        raise SchemaMismatchError(problems)

    conclusions = payload["coreConclusions"]
    conclusions["logicDiagramMermaid"] = repair_diagram(conclusions["logicDiagramMermaid"])
    return payload


def sanitize(raw_response_text: str) -> AnalysisResult:
    """
    Turn raw model output into a validated AnalysisResult.

    Raises:
        EmptyResponseError: blank response
        NotJsonError: not JSON after fence stripping
        SchemaMismatchError: required field missing or of the wrong type
    """
    return AnalysisResult.from_dict(sanitize_payload(raw_response_text))
