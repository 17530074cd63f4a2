"""Analysis request assembly."""

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from ..config.prompts import Prompts
from ..config.schema import ANALYSIS_RESULT_SCHEMA, SCHEMA_NAME
from ..exceptions import EmptyTextError
from ..utils.token_counter import TokenCounter
from .serializer import iter_question_headers

logger = logging.getLogger(__name__)


@dataclass
class AnalysisRequest:
    """Everything the analysis model needs for one attempt."""

    prompt: str
    system_prompt: str
    survey_text: str
    question_list: Optional[str] = None
    response_schema: Dict[str, Any] = field(default_factory=lambda: ANALYSIS_RESULT_SCHEMA)
    schema_name: str = SCHEMA_NAME
    question_count: int = 0
    estimated_tokens: int = 0

    def to_messages(self) -> List[Dict[str, str]]:
        """Chat messages in the order they are sent."""
        return [
            {"role": "system", "content": self.system_prompt},
            {"role": "user", "content": self.prompt},
        ]

    def response_format(self) -> Dict[str, Any]:
        """Structured output constraint for the chat completion call."""
        return {
            "type": "json_schema",
            "json_schema": {
                "name": self.schema_name,
                "schema": self.response_schema,
            },
        }


def build_request(
    serialized_text: str,
    question_list: Optional[str] = None,
    token_counter: Optional[TokenCounter] = None
) -> AnalysisRequest:
    """
    Build the analysis request for canonical survey text.

    Args:
        serialized_text: Canonical text, possibly hand-edited
        question_list: Optional ``Qn: question`` lines used as context
        token_counter: Counter used to estimate request size

    Returns:
        AnalysisRequest carrying prompt and output schema

    Raises:
        EmptyTextError: if the text is blank after trimming
    """
    if serialized_text is None or not serialized_text.strip():
        raise EmptyTextError()

    question_count = sum(1 for _ in iter_question_headers(serialized_text))
    if question_count == 0:
        logger.warning("No '--- Qn: ... ---' headers found; sending text as a single block")

    if question_list is not None and not question_list.strip():
        question_list = None

    request = AnalysisRequest(
        prompt=Prompts.survey_analysis_prompt(serialized_text, question_list),
        system_prompt=Prompts.system_prompt(),
        survey_text=serialized_text,
        question_list=question_list,
        question_count=question_count,
    )

    counter = token_counter or TokenCounter()
    request.estimated_tokens = counter.count_message_tokens(
        [request.system_prompt, request.prompt]
    )
    logger.info(
        f"Built analysis request: {question_count} question block(s), "
        f"~{request.estimated_tokens} input tokens"
    )
    return request
