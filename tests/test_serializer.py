"""Tests for canonical text rendering."""

from survey_analyzer.core.normalizer import normalize
from survey_analyzer.core.serializer import (
    build_question_list,
    iter_question_headers,
    serialize,
)
from survey_analyzer.models.survey import LayoutKind, QuestionSet


def _question_set() -> QuestionSet:
    question_set = QuestionSet()
    q1 = question_set.add_block("How satisfied are you?")
    q1.add_answer("User 1", "Very satisfied")
    q1.add_answer("A3", "It's okay")
    question_set.add_block("Anything else?")
    return question_set


def test_serialize_wire_format():
    text = serialize(_question_set())

    assert text == (
        "--- Q1: How satisfied are you? ---\n"
        "[User 1] Very satisfied\n"
        "[A3] It's okay\n"
        "\n"
        "--- Q2: Anything else? ---\n"
        "\n"
    )


def test_serialize_empty_set_is_empty_text():
    assert serialize(QuestionSet()) == ""


def test_build_question_list():
    assert build_question_list(_question_set()) == (
        "Q1: How satisfied are you?\nQ2: Anything else?"
    )


def test_iter_question_headers_recovers_blocks():
    headers = list(iter_question_headers(serialize(_question_set())))

    assert headers == [(1, "How satisfied are you?"), (2, "Anything else?")]


def test_iter_question_headers_ignores_answer_lines():
    text = "[u] --- Q9: not a header ---\n--- Q1: real --- \n--- Q2: a --- b ---\r\n"

    assert list(iter_question_headers(text)) == [(2, "a --- b")]


def test_source_ids_and_questions_appear_verbatim():
    matrix = [
        ["", "  spaced id ", "用户 1", "[weird]"],
        ["Q: 您对产品满意吗？", "yes", "满意", "ok"],
        ["Second: *markdown* `ticks`", None, "x", None],
    ]

    text = serialize(normalize(matrix, LayoutKind.ROWS_ARE_QUESTIONS))

    for value in ["  spaced id ", "用户 1", "[weird]", "Q: 您对产品满意吗？", "Second: *markdown* `ticks`"]:
        assert value in text
    assert "--- Q2: Second: *markdown* `ticks` ---\n[用户 1] x\n" in text
