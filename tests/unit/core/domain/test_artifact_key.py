from artifact_gate.core.domain.artifact import ArtifactKey


def test_parses_prefix_and_number():
    key = ArtifactKey.parse("US1234")
    assert key is not None
    assert key.prefix == "US"
    assert key.number == "1234"
    assert key.artifact_type == "hierarchicalrequirement"
    assert key.tracker_type == "hierarchicalrequirement"
    assert key.is_resolvable


def test_prefix_is_normalised_but_raw_is_kept():
    key = ArtifactKey.parse("de12")
    assert key is not None
    assert key.prefix == "DE"
    assert key.tracker_type == "defect"
    assert str(key) == "de12"


def test_leading_zeros_are_dropped_from_number():
    key = ArtifactKey.parse("US0042")
    assert key is not None
    assert key.number == "42"


def test_unknown_prefix_is_not_resolvable():
    key = ArtifactKey.parse("XY12")
    assert key is not None
    assert key.artifact_type is None
    assert not key.is_resolvable


def test_malformed_keys():
    assert ArtifactKey.parse("US") is None
    assert ArtifactKey.parse("ABC12") is None
    assert ArtifactKey.parse("12") is None
