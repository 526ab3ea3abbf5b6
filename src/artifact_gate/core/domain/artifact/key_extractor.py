"""Pure functions that find artifact keys and promotion commands in free text."""

import re
from collections.abc import Iterable, Sequence

from artifact_gate.core.domain.artifact.prefix_registry import prefixes_for
from artifact_gate.core.domain.artifact.value_objects.promotion_match import PromotionMatch

DEFAULT_PROMOTION_COMMANDS: tuple[str, ...] = ("completes",)

_KEY_DIGITS = r"[0-9]{1,10}"


def _key_regex(prefix: str) -> re.Pattern[str]:
    return re.compile(rf"\b{re.escape(prefix)}{_KEY_DIGITS}\b", re.IGNORECASE)


def _promotion_regex(command: str, prefix: str) -> re.Pattern[str]:
    return re.compile(
        rf"/{re.escape(command)} ({re.escape(prefix)}{_KEY_DIGITS})\b",
        re.IGNORECASE,
    )


def find_keys(text: str | None, types: Iterable[str]) -> list[str]:
    """Return every whole-word key in ``text`` for the configured artifact ``types``.

    Matches are grouped by prefix, in prefix order, and keep the casing found
    in the text. Absent or empty text yields an empty list.
    """
    if not text:
        return []
    keys: list[str] = []
    for prefix in prefixes_for(types):
        keys.extend(_key_regex(prefix).findall(text))
    return keys


def find_promotion_keys(
    text: str | None,
    types: Iterable[str],
    commands: Sequence[str] = DEFAULT_PROMOTION_COMMANDS,
) -> list[PromotionMatch]:
    """Return ``/<command> <key>`` occurrences, grouped by command then prefix."""
    if not text or not commands:
        return []
    prefixes = prefixes_for(types)
    matches: list[PromotionMatch] = []
    for command in dict.fromkeys(commands):
        for prefix in prefixes:
            for key in _promotion_regex(command, prefix).findall(text):
                matches.append(PromotionMatch(command=command, key=key))
    return matches
