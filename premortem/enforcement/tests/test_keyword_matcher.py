from premortem.enforcement.matcher import (
    DEFAULT_LOOKUP_TERMS,
    DEFAULT_RESTRICTED_TERMS,
    KeywordMatcher,
    lookup_matcher,
    restricted_matcher,
)


def test_matches_case_insensitive_substring():
    matcher = KeywordMatcher(["Insulin", " dosage "])
    assert matcher.matches("Wrong INSULIN units")
    assert matcher.matches("overdosage alert")
    assert not matcher.matches("cache stampede")


def test_matched_terms_sorted():
    matcher = KeywordMatcher(["patient", "drug"])
    assert matcher.matched_terms("Drug record for patient") == ["drug", "patient"]


def test_empty_terms_never_match():
    matcher = KeywordMatcher(["", "   "])
    assert matcher.terms == frozenset()
    assert not matcher.matches("anything")


def test_none_text_is_safe():
    assert not KeywordMatcher(["x"]).matches(None)


def test_default_sets():
    assert lookup_matcher().terms == frozenset(DEFAULT_LOOKUP_TERMS)
    assert restricted_matcher().terms == frozenset(DEFAULT_RESTRICTED_TERMS)
    assert restricted_matcher(["opioid"]).terms == frozenset({"opioid"})
