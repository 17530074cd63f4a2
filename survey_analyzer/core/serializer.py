"""Canonical text rendering of a question set.

Wire format consumed by the analysis model::

    --- Q1: <question text> ---
    [<user id>] <answer text>
    [<user id>] <answer text>
    <blank line>

Blocks appear in ordinal order. The header line syntax is the only block
delimiter, so hand-edited text can still be split on it.
"""

import re
from typing import Iterator, Tuple

from ..models.survey import QuestionSet

HEADER_PATTERN = re.compile(r"^--- Q(\d+): (.*?) ---\r?$", re.MULTILINE)


def format_header(ordinal: int, question_text: str) -> str:
    return f"--- Q{ordinal}: {question_text} ---"


def format_answer(user_id: str, text: str) -> str:
    return f"[{user_id}] {text}"


def serialize(question_set: QuestionSet) -> str:
    """Render a question set as canonical tagged text."""
    lines = []
    for block in sorted(question_set.blocks, key=lambda b: b.ordinal):
        lines.append(format_header(block.ordinal, block.question_text))
        for answer in block.answers:
            lines.append(format_answer(answer.user_id, answer.text))
        lines.append("")
    return "".join(f"{line}\n" for line in lines)


def build_question_list(question_set: QuestionSet) -> str:
    """Render the ``Qn: question`` list sent alongside the text."""
    return "\n".join(
        f"Q{block.ordinal}: {block.question_text}"
        for block in sorted(question_set.blocks, key=lambda b: b.ordinal)
    )


def iter_question_headers(text: str) -> Iterator[Tuple[int, str]]:
    """Yield ``(ordinal, question)`` for each header line in canonical text."""
    for match in HEADER_PATTERN.finditer(text):
        yield int(match.group(1)), match.group(2)
