import json

import pytest

from studyai.core.errors import ErrorKind, GenerationFormatError
from studyai.modules.study.validation import parse_flashcards, parse_quiz_questions


def _question(**overrides):
    q = {
        "question": "What does photosynthesis produce?",
        "options": ["Glucose", "Salt", "Iron", "Plastic"],
        "correctIndex": 0,
        "explanation": "Plants store energy as glucose.",
    }
    q.update(overrides)
    return q


def test_fifteen_valid_flashcards():
    cards = [{"front": f"Q{i}", "back": f"A{i}"} for i in range(15)]
    drafts = parse_flashcards(json.dumps(cards))
    assert len(drafts) == 15
    assert drafts[0].front == "Q0"
    assert drafts[14].back == "A14"


def test_flashcard_missing_back_rejects_whole_batch():
    cards = [{"front": "Q1", "back": "A1"}, {"front": "Q2"}]
    with pytest.raises(GenerationFormatError) as exc:
        parse_flashcards(json.dumps(cards))
    assert exc.value.kind is ErrorKind.GENERATION_FORMAT
    assert "back" in exc.value.message


def test_flashcard_blank_front_is_rejected():
    with pytest.raises(GenerationFormatError):
        parse_flashcards(json.dumps([{"front": "   ", "back": "A"}]))


def test_flashcard_extra_keys_are_ignored():
    drafts = parse_flashcards(json.dumps([{"front": "Q", "back": "A", "hint": "h"}]))
    assert drafts[0].model_dump() == {"front": "Q", "back": "A"}


def test_invalid_json_reports_parse_failure():
    with pytest.raises(GenerationFormatError) as exc:
        parse_flashcards("not json")
    assert "Failed to parse flashcards from AI" in exc.value.message


def test_object_instead_of_array_is_rejected():
    with pytest.raises(GenerationFormatError):
        parse_flashcards(json.dumps({"front": "Q", "back": "A"}))


def test_empty_array_is_rejected():
    with pytest.raises(GenerationFormatError):
        parse_flashcards("[]")


def test_valid_quiz_questions():
    questions = parse_quiz_questions(json.dumps([_question(), _question(correctIndex=3)]))
    assert len(questions) == 2
    assert questions[1].correct_index == 3
    assert questions[0].to_record()["correctIndex"] == 0


def test_quiz_explanation_is_optional():
    q = _question()
    del q["explanation"]
    (parsed,) = parse_quiz_questions(json.dumps([q]))
    assert parsed.explanation is None


def test_quiz_with_three_options_is_rejected():
    with pytest.raises(GenerationFormatError):
        parse_quiz_questions(json.dumps([_question(options=["a", "b", "c"])]))


def test_quiz_with_five_options_is_rejected():
    with pytest.raises(GenerationFormatError):
        parse_quiz_questions(json.dumps([_question(options=["a", "b", "c", "d", "e"])]))


@pytest.mark.parametrize("index", [4, -1])
def test_quiz_correct_index_out_of_range_is_rejected(index):
    with pytest.raises(GenerationFormatError):
        parse_quiz_questions(json.dumps([_question(correctIndex=index)]))


@pytest.mark.parametrize("index", ["2", True, 1.0])
def test_quiz_non_integer_correct_index_is_rejected(index):
    with pytest.raises(GenerationFormatError) as exc:
        parse_quiz_questions(json.dumps([_question(correctIndex=index)]))
    assert "correctIndex" in exc.value.message


def test_quiz_missing_correct_index_is_rejected():
    q = _question()
    del q["correctIndex"]
    with pytest.raises(GenerationFormatError):
        parse_quiz_questions(json.dumps([q]))


def test_one_bad_question_rejects_all():
    batch = [_question(), _question(), _question(options=["only", "three", "options"])]
    with pytest.raises(GenerationFormatError):
        parse_quiz_questions(json.dumps(batch))


def test_quiz_invalid_json():
    with pytest.raises(GenerationFormatError) as exc:
        parse_quiz_questions('[{"question": "unterminated"')
    assert "Failed to parse quiz questions from AI" in exc.value.message
