"""Survey ingestion models: cells, layouts and question blocks."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Iterator, List, Optional, Sequence, Union

Cell = Union[str, int, float, None]
CellRow = Optional[Sequence[Cell]]
CellMatrix = Sequence[CellRow]


class LayoutKind(str, Enum):
    """How questions and users are arranged in the source sheet."""

    ROWS_ARE_QUESTIONS = "rows_are_questions"
    ROWS_ARE_USERS = "rows_are_users"


@dataclass(frozen=True)
class Answer:
    """One user's answer to a question."""

    user_id: str
    text: str


@dataclass
class QuestionBlock:
    """A question with all of its answers, in source order."""

    ordinal: int
    question_text: str
    answers: List[Answer] = field(default_factory=list)

    def add_answer(self, user_id: str, text: str) -> None:
        self.answers.append(Answer(user_id=user_id, text=text))


@dataclass
class QuestionSet:
    """Ordered question blocks produced by a single normalization."""

    blocks: List[QuestionBlock] = field(default_factory=list)

    def __iter__(self) -> Iterator[QuestionBlock]:
        return iter(self.blocks)

    def __len__(self) -> int:
        return len(self.blocks)

    def add_block(self, question_text: str) -> QuestionBlock:
        """Append a new block with the next ordinal."""
        block = QuestionBlock(ordinal=len(self.blocks) + 1, question_text=question_text)
        self.blocks.append(block)
        return block

    def question_texts(self) -> List[str]:
        return [block.question_text for block in self.blocks]

    def user_ids(self) -> List[str]:
        """Unique user ids in first-seen order."""
        seen = {}
        for block in self.blocks:
            for answer in block.answers:
                seen.setdefault(answer.user_id, None)
        return list(seen)

    def answer_count(self) -> int:
        return sum(len(block.answers) for block in self.blocks)
