import pytest

from obstasks.keywords import DEFAULT_PATTERNS, build_keyword_regex, extract_meta, parse_comment_body

KW = build_keyword_regex(DEFAULT_PATTERNS)


def test_full_metadata():
    body = "TODO Fix login flow @due(2024-10-01) @tags(auth,bug) @assignee(riku) @p(high)"
    parsed = parse_comment_body(body, KW)
    assert parsed is not None
    assert parsed.pattern == "TODO"
    assert parsed.message == "Fix login flow"
    assert parsed.meta.due == "2024-10-01"
    assert parsed.meta.tags == ("auth", "bug")
    assert parsed.meta.assignee == "riku"
    assert parsed.meta.priority == "high"


def test_keyword_case_insensitive_pattern_uppercase():
    parsed = parse_comment_body("fixme: broken cache", KW)
    assert parsed.pattern == "FIXME"
    assert parsed.message == "broken cache"


def test_keyword_requires_word_boundary():
    assert parse_comment_body("TODOS are fine", KW) is None
    assert parse_comment_body("notebook import", KW) is None


def test_not_at_start_is_not_task():
    assert parse_comment_body("see TODO below", KW) is None


def test_invalid_priority_left_in_message():
    parsed = parse_comment_body("TODO ship it @p(extreme)", KW)
    assert parsed.meta.priority is None
    assert parsed.message == "ship it @p(extreme)"


def test_priority_whitespace_and_case():
    parsed = parse_comment_body("NOTE check @p( LOW )", KW)
    assert parsed.meta.priority == "low"
    assert parsed.message == "check"


def test_empty_message():
    parsed = parse_comment_body("TODO: @due(tomorrow)", KW)
    assert parsed.message == ""
    assert parsed.meta.due == "tomorrow"
    assert parsed.meta.tags == ()


def test_absent_metadata_is_unset():
    meta, cleaned = extract_meta("just text")
    assert cleaned == "just text"
    assert meta.due is None and meta.assignee is None and meta.priority is None
    assert meta.tags == ()


def test_tags_split_on_commas_and_spaces_keep_duplicates():
    meta, _ = extract_meta("x @tags(a, b  c,a) y")
    assert meta.tags == ("a", "b", "c", "a")


def test_token_replaced_by_space_not_merged():
    _, cleaned = extract_meta("alpha@due(1)beta")
    assert cleaned == "alpha beta"


def test_only_first_occurrence_removed():
    meta, cleaned = extract_meta("@due(1) then @due(2)")
    assert meta.due == "1"
    assert cleaned == "then @due(2)"


def test_value_cannot_contain_parentheses():
    meta, cleaned = extract_meta("@assignee(bob (qa)) done")
    assert meta.assignee == "bob (qa"
    assert cleaned == ") done"


def test_leading_separator_debris_stripped():
    parsed = parse_comment_body("NOTE — – : remember this", KW)
    assert parsed.message == "remember this"


def test_keywords_are_escaped():
    kw = build_keyword_regex(["C++", "a.b"])
    assert parse_comment_body("axb nope", kw) is None
    assert parse_comment_body("a.b yes", kw).message == "yes"


def test_empty_keyword_set_rejected():
    with pytest.raises(ValueError):
        build_keyword_regex(["", "  "])
