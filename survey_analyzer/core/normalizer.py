"""Layout normalization: cell matrix to question set.

Two sheet layouts are supported and must be declared by the caller:

* ``rows_are_questions`` - row 1 holds user ids (from column B), each later
  row holds a question in column A followed by one answer per user column.
* ``rows_are_users`` - row 1 holds questions (from column B), each later row
  holds a user id in column A followed by that user's answers.

When a user id cell is missing the spreadsheet address of a fallback cell is
used instead. The two layouts address different cells: the header cell of the
answer column for ``rows_are_questions``, and column A of the answering row
for ``rows_are_users``.
"""

import logging
import math
from typing import Dict, List, Optional, Sequence

from openpyxl.utils import get_column_letter

from ..exceptions import EmptyInputError, MalformedHeaderError, NoQuestionsFoundError
from ..models.survey import Cell, CellMatrix, CellRow, LayoutKind, QuestionBlock, QuestionSet

logger = logging.getLogger(__name__)


def cell_text(value: Cell) -> str:
    """Render a cell as text; absent cells become an empty string."""
    if value is None:
        return ""
    if isinstance(value, float):
        if math.isnan(value):
            return ""
        if value.is_integer():
            return str(int(value))
    return str(value)


def cell_address(row: int, column: int) -> str:
    """Spreadsheet A1-style address for zero-based (row, column)."""
    return f"{get_column_letter(column + 1)}{row + 1}"


def _usable_row(row: CellRow) -> Optional[Sequence[Cell]]:
    if row is None or isinstance(row, (str, bytes)):
        return None
    try:
        if len(row) == 0:
            return None
    except TypeError:
        return None
    return row


def _cell_at(row: Optional[Sequence[Cell]], column: int) -> str:
    if row is None or column >= len(row):
        return ""
    return cell_text(row[column])


def _normalize_rows_are_questions(matrix: CellMatrix) -> QuestionSet:
    question_set = QuestionSet()
    header = _usable_row(matrix[0])
    skipped = 0

    for row_index in range(1, len(matrix)):
        row = _usable_row(matrix[row_index])
        if row is None:
            skipped += 1
            continue

        question = _cell_at(row, 0)
        if not question:
            skipped += 1
            continue

        block = question_set.add_block(question)
        for column in range(1, len(row)):
            answer = cell_text(row[column])
            if not answer:
                continue
            user_id = _cell_at(header, column) or cell_address(0, column)
            block.add_answer(user_id, answer)

    if skipped:
        logger.debug(f"Skipped {skipped} row(s) without a question")
    return question_set


def _normalize_rows_are_users(matrix: CellMatrix) -> QuestionSet:
    header = _usable_row(matrix[0])
    if header is None or len(header) < 2:
        raise MalformedHeaderError(0 if header is None else len(header))

    question_set = QuestionSet()
    blocks_by_column: Dict[int, QuestionBlock] = {}
    for column in range(1, len(header)):
        question = cell_text(header[column])
        if question:
            blocks_by_column[column] = question_set.add_block(question)

    if not blocks_by_column:
        return question_set

    question_columns: List[int] = sorted(blocks_by_column)
    skipped = 0
    for row_index in range(1, len(matrix)):
        row = _usable_row(matrix[row_index])
        if row is None:
            skipped += 1
            continue

        user_id = _cell_at(row, 0) or cell_address(row_index, 0)
        for column in question_columns:
            answer = _cell_at(row, column)
            if answer:
                blocks_by_column[column].add_answer(user_id, answer)

    if skipped:
        logger.debug(f"Skipped {skipped} empty row(s)")
    return question_set


_LAYOUT_HANDLERS = {
    LayoutKind.ROWS_ARE_QUESTIONS: _normalize_rows_are_questions,
    LayoutKind.ROWS_ARE_USERS: _normalize_rows_are_users,
}


def normalize(matrix: CellMatrix, layout: LayoutKind) -> QuestionSet:
    """
    Convert a cell matrix in a declared layout into a question set.

    Args:
        matrix: Rows of raw cell values; row 0 is the header row
        layout: Declared arrangement of questions and users

    Returns:
        QuestionSet with contiguous ordinals starting at 1

    Raises:
        EmptyInputError: fewer than two rows
        MalformedHeaderError: ``rows_are_users`` header has fewer than two columns
        NoQuestionsFoundError: no question rows or columns were discovered
    """
    layout = LayoutKind(layout)
    if matrix is None or len(matrix) < 2:
        raise EmptyInputError(0 if matrix is None else len(matrix))

    question_set = _LAYOUT_HANDLERS[layout](matrix)
    if not question_set.blocks:
        raise NoQuestionsFoundError(layout.value)

    logger.info(
        f"Normalized {len(question_set)} question(s) with "
        f"{question_set.answer_count()} answer(s) using layout '{layout.value}'"
    )
    return question_set
