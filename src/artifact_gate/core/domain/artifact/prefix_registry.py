"""Fixed bidirectional mapping between artifact type names and key prefixes.

Type names are the values accepted in the repository config ``objects`` list.
Several names share prefixes (``userstory``, ``story`` and
``hierarchicalrequirement`` all use ``S``/``US``); the reverse lookup resolves
such collisions by the declaration order of ``ARTIFACT_TYPES``.
"""

from collections.abc import Iterable
from dataclasses import dataclass


@dataclass(frozen=True)
class ArtifactTypeSpec:
    name: str
    prefixes: tuple[str, ...]
    tracker_type: str


# Declaration order is the reverse-lookup precedence.
ARTIFACT_TYPES: tuple[ArtifactTypeSpec, ...] = (
    ArtifactTypeSpec("defect", ("D", "DE"), "defect"),
    ArtifactTypeSpec("defectsuite", ("DS",), "defectsuite"),
    ArtifactTypeSpec("task", ("TA",), "task"),
    ArtifactTypeSpec("testcase", ("TC",), "testcase"),
    ArtifactTypeSpec("hierarchicalrequirement", ("S", "US"), "hierarchicalrequirement"),
    ArtifactTypeSpec("userstory", ("S", "US"), "hierarchicalrequirement"),
    ArtifactTypeSpec("story", ("S", "US"), "hierarchicalrequirement"),
)

_BY_NAME: dict[str, ArtifactTypeSpec] = {spec.name: spec for spec in ARTIFACT_TYPES}


def _build_reverse_index() -> dict[str, ArtifactTypeSpec]:
    index: dict[str, ArtifactTypeSpec] = {}
    for spec in ARTIFACT_TYPES:
        for prefix in spec.prefixes:
            index.setdefault(prefix, spec)
    return index


_BY_PREFIX: dict[str, ArtifactTypeSpec] = _build_reverse_index()


def known_type_names() -> tuple[str, ...]:
    return tuple(spec.name for spec in ARTIFACT_TYPES)


def prefixes_for(types: Iterable[str]) -> tuple[str, ...]:
    """Return the prefixes of ``types`` in the order given, first occurrence kept.

    Unknown type names contribute nothing.
    """
    seen: dict[str, None] = {}
    for type_name in types:
        spec = _BY_NAME.get(str(type_name).lower())
        if spec is None:
            continue
        for prefix in spec.prefixes:
            seen.setdefault(prefix, None)
    return tuple(seen)


def type_for_prefix(prefix: str) -> str | None:
    """Return the canonical type name owning ``prefix`` (case-insensitive)."""
    spec = _BY_PREFIX.get(prefix.upper())
    return spec.name if spec else None


def tracker_type_for_prefix(prefix: str) -> str | None:
    """Return the tracker object type that artifacts with ``prefix`` are stored as."""
    spec = _BY_PREFIX.get(prefix.upper())
    return spec.tracker_type if spec else None
