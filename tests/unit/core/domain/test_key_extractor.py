from artifact_gate.core.domain.artifact import PromotionMatch
from artifact_gate.core.domain.artifact.key_extractor import find_keys, find_promotion_keys

TYPES = ("defect", "userstory")


# ── find_keys ──


def test_finds_key_in_title():
    assert find_keys("US1234 add refunds endpoint", TYPES) == ["US1234"]


def test_keeps_casing_found_in_text():
    assert find_keys("fixes us42", TYPES) == ["us42"]


def test_requires_whole_word_match():
    assert find_keys("BUS1234 and US12x", TYPES) == []


def test_longer_prefix_is_not_matched_by_shorter_one():
    assert find_keys("DE77 closes it", TYPES) == ["DE77"]


def test_groups_matches_by_prefix_order():
    text = "US1 then D2 then US3 then DE4"
    assert find_keys(text, TYPES) == ["D2", "DE4", "US1", "US3"]


def test_only_configured_types_are_searched():
    assert find_keys("TA100 DE5", ("task",)) == ["TA100"]


def test_empty_or_missing_text_yields_nothing():
    assert find_keys(None, TYPES) == []
    assert find_keys("", TYPES) == []


def test_no_configured_types_yields_nothing():
    assert find_keys("US1234", ()) == []


# ── find_promotion_keys ──


def test_finds_default_promotion_command():
    body = "Ships the endpoint.\n\n/completes US1234"
    assert find_promotion_keys(body, TYPES) == [PromotionMatch(command="completes", key="US1234")]


def test_promotion_requires_the_command_prefix():
    assert find_promotion_keys("completes US1234", TYPES) == []


def test_promotion_supports_custom_commands():
    body = "/closes DE9 and /completes US1"
    matches = find_promotion_keys(body, TYPES, ("closes", "completes"))
    assert matches == [
        PromotionMatch(command="closes", key="DE9"),
        PromotionMatch(command="completes", key="US1"),
    ]


def test_promotion_without_commands_or_body():
    assert find_promotion_keys("/completes US1", TYPES, ()) == []
    assert find_promotion_keys(None, TYPES) == []
