import re
from dataclasses import dataclass

from artifact_gate.core.domain.artifact.prefix_registry import (
    tracker_type_for_prefix,
    type_for_prefix,
)

KEY_PATTERN = re.compile(r"^([A-Za-z]{1,2})([0-9]{1,10})$")


@dataclass(frozen=True)
class ArtifactKey:
    """A parsed artifact reference such as ``US1234``.

    ``artifact_type`` and ``tracker_type`` are ``None`` when the prefix is not
    registered; callers treat such keys as not found.
    """

    raw: str
    prefix: str
    number: str
    artifact_type: str | None
    tracker_type: str | None

    @classmethod
    def parse(cls, raw: str) -> "ArtifactKey | None":
        """Parse ``raw`` or return ``None`` when it is not a well-formed key."""
        match = KEY_PATTERN.match(raw.strip())
        if not match:
            return None
        prefix = match.group(1).upper()
        # The tracker stores formatted ids without leading zeros.
        number = str(int(match.group(2)))
        return cls(
            raw=raw,
            prefix=prefix,
            number=number,
            artifact_type=type_for_prefix(prefix),
            tracker_type=tracker_type_for_prefix(prefix),
        )

    @property
    def is_resolvable(self) -> bool:
        return self.tracker_type is not None

    def __str__(self) -> str:
        return self.raw
