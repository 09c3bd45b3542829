import json

import pytest

from interview_bank import (
    BankLoadError,
    DEFAULT_SCHOOL_ID,
    DEFAULT_SCHOOL_NAME,
    Question,
    SHAPE_QUESTIONS,
    SHAPE_SCHOOLS,
    SHAPE_UNRECOGNIZED,
    classify_document,
    load_question_bank,
    read_bank_document,
)

from conftest import make_questions


def test_classify_document_tags_each_shape():
    assert classify_document({"schools": []}) == (SHAPE_SCHOOLS, [])
    assert classify_document({"questions": [{"question": "q"}]}) == (SHAPE_QUESTIONS, [{"question": "q"}])
    assert classify_document({"schools": "nope"}) == (SHAPE_UNRECOGNIZED, None)
    assert classify_document(["not", "a", "dict"]) == (SHAPE_UNRECOGNIZED, None)


def test_schools_take_priority_over_flat_questions():
    bank = load_question_bank({
        "schools": [{"id": "s1", "name": "S", "questions": [{"question": "from schools"}]}],
        "questions": [{"question": "from flat list"}],
    })
    assert [s.id for s in bank] == ["s1"]
    assert bank[0].questions[0].question == "from schools"


def test_multi_school_defaults_and_filtering():
    bank = load_question_bank({
        "schools": [
            {
                "questions": [
                    {"question": "  First  ", "answer": "  one "},
                    {"question": "   "},
                    {"question": "Third"},
                    {"id": "custom", "question": "Fourth", "answer": None},
                ],
            },
            {"id": "empty-nameless", "name": "", "questions": []},
            {"id": "empty-named", "name": "Kept", "questions": "not a list"},
        ]
    })

    assert [s.id for s in bank] == ["school-1", "empty-named"]

    first = bank[0]
    assert first.name == "学校1"
    assert first.menu_name == "学校1"
    # Positions count every raw entry, including the dropped blank one.
    assert first.questions == (
        Question(id="q-001", question="First", answer="one"),
        Question(id="q-003", question="Third", answer=""),
        Question(id="custom", question="Fourth", answer=""),
    )

    assert bank[1].name == "Kept"
    assert bank[1].questions == ()


def test_menu_name_falls_back_to_name():
    bank = load_question_bank({
        "schools": [
            {"id": "a", "name": "Alpha University", "questions": [{"question": "q"}]},
            {"id": "b", "name": "Beta", "menuName": "B", "questions": [{"question": "q"}]},
        ]
    })
    assert bank[0].menu_name == "Alpha University"
    assert bank[1].menu_name == "B"


def test_non_string_school_id_gets_positional_default():
    bank = load_question_bank({
        "schools": [
            {"id": "ok", "name": "A", "questions": []},
            {"id": 42, "name": "B", "questions": []},
            {"id": "", "name": "C", "questions": []},
        ]
    })
    assert [s.id for s in bank] == ["ok", "school-2", "school-3"]


def test_question_ids_and_text_are_coerced():
    bank = load_question_bank({
        "questions": [
            {"id": 7, "question": 123, "answer": 4.5},
            {"id": True, "question": "bool id"},
            {"id": {"nested": 1}, "question": "dict id", "answer": ["x"]},
            "not a question",
        ]
    })
    questions = bank[0].questions
    assert [q.id for q in questions] == ["7", "q-002", "q-003"]
    assert questions[0].question == "123"
    assert questions[0].answer == "4.5"
    assert questions[2].answer == ""


def test_boolean_text_is_spelled_out():
    bank = load_question_bank({"questions": [{"question": True, "answer": False}]})
    assert bank[0].questions[0] == Question(id="q-001", question="true", answer="false")


def test_huge_integers_do_not_break_normalisation():
    big = 10 ** 400
    bank = load_question_bank({"questions": [{"id": big, "question": big, "answer": "ok"}]})
    question = bank[0].questions[0]
    assert question.id == str(big)
    assert question.question == str(big)


def test_missing_school_ids_skip_explicit_ones():
    bank = load_question_bank({
        "schools": [
            {"id": "school-2", "name": "A", "questions": [{"question": "alpha"}]},
            {"name": "B", "questions": make_questions("x", "y", "zeta")},
        ]
    })
    assert [s.id for s in bank] == ["school-2", "school-2-2"]


def test_repeated_school_ids_get_a_suffix():
    bank = load_question_bank({
        "schools": [
            {"id": "dup", "name": "A", "questions": []},
            {"id": "dup", "name": "B", "questions": []},
            {"id": "dup-2", "name": "C", "questions": []},
            {"id": "dup", "name": "D", "questions": []},
        ]
    })
    assert [s.id for s in bank] == ["dup", "dup-3", "dup-2", "dup-4"]


def test_flat_document_becomes_single_default_school():
    bank = load_question_bank({"questions": [{"question": "A"}, {"question": "B"}]})
    assert len(bank) == 1
    school = bank[0]
    assert school.id == DEFAULT_SCHOOL_ID
    assert school.name == DEFAULT_SCHOOL_NAME
    assert school.menu_name == DEFAULT_SCHOOL_NAME
    assert [q.id for q in school.questions] == ["q-001", "q-002"]


@pytest.mark.parametrize("document", [None, [], "text", {}, {"questions": "nope"}, {"schools": None}])
def test_malformed_document_degrades_to_empty_default_school(document):
    bank = load_question_bank(document)
    assert len(bank) == 1
    assert bank[0].id == DEFAULT_SCHOOL_ID
    assert bank[0].questions == ()


def test_empty_schools_list_gives_empty_bank():
    assert load_question_bank({"schools": []}) == ()


def test_read_bank_document(tmp_path):
    path = tmp_path / "questions.json"
    path.write_text(json.dumps({"questions": [{"question": "多线程"}]}, ensure_ascii=False), encoding="utf-8")
    assert read_bank_document(str(path)) == {"questions": [{"question": "多线程"}]}


def test_read_bank_document_missing_file(tmp_path):
    with pytest.raises(BankLoadError):
        read_bank_document(str(tmp_path / "missing.json"))


def test_read_bank_document_corrupt_file(tmp_path):
    path = tmp_path / "questions.json"
    path.write_text("{ not json", encoding="utf-8")
    with pytest.raises(BankLoadError):
        read_bank_document(str(path))


def test_read_bank_document_rejects_over_long_integers(tmp_path):
    path = tmp_path / "questions.json"
    path.write_text('{"questions": [{"question": ' + "9" * 5000 + "}]}", encoding="utf-8")
    with pytest.raises(BankLoadError):
        read_bank_document(str(path))
