from interview_bank import SearchIndex, load_question_bank, normalize_text

from conftest import MULTI_SCHOOL_DOC, make_questions


def _index(*texts):
    return SearchIndex(load_question_bank({"questions": make_questions(*texts)}))


def test_normalize_text():
    assert normalize_text("  Java\t\n 多线程   BASICS ") == "java 多线程 basics"
    assert normalize_text(None) == ""
    assert normalize_text("   ") == ""


def test_build_flattens_every_school_in_order():
    index = SearchIndex(load_question_bank(MULTI_SCHOOL_DOC))
    assert len(index) == 5
    assert [(e.school_id, e.school_index, e.question_id) for e in index.entries] == [
        ("s1", 0, "a"), ("s1", 1, "b"), ("s1", 2, "c"),
        ("s2", 0, "x"), ("s2", 1, "y"),
    ]
    assert index.entries[3].school_name == "School Two"
    assert index.entries[3].haystack == "java networking basics"


def test_multi_token_query_requires_every_token():
    index = _index("Java 多线程 basics", "Java networking")
    matches = index.query("Java 多线程")
    assert [m.haystack for m in matches] == ["java 多线程 basics"]


def test_token_order_does_not_matter():
    index = _index("alpha beta gamma", "beta only", "gamma alpha beta")
    assert index.query("alpha beta") == index.query("beta alpha")
    assert len(index.query("alpha beta")) == 2


def test_blank_keyword_matches_nothing():
    index = _index("anything", "at all")
    assert index.query("") == []
    assert index.query("   \t ") == []
    assert index.query(None) == []


def test_query_is_case_and_whitespace_insensitive():
    index = _index("What is a HashMap?")
    assert len(index.query("  HASHMAP   what ")) == 1


def test_results_keep_build_order_across_schools():
    index = SearchIndex(load_question_bank(MULTI_SCHOOL_DOC))
    assert [(m.school_id, m.question_id) for m in index.query("java")] == [("s1", "c"), ("s2", "x")]


def test_query_returns_full_match_set():
    index = _index(*[f"question {i}" for i in range(80)])
    assert len(index.query("question")) == 80
