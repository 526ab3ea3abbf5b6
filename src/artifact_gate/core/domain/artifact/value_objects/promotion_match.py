from dataclasses import dataclass


@dataclass(frozen=True)
class PromotionMatch:
    """A ``/<command> <key>`` occurrence in a pull request body."""

    command: str
    key: str
