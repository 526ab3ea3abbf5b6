import hashlib
import hmac

from artifact_gate.infrastructure.entrypoints.api.security import compute_signature


def test_signature_matches_github_format():
    body = b'{"action":"opened"}'
    expected = hmac.new(b"s3cret", body, hashlib.sha256).hexdigest()

    assert compute_signature("s3cret", body) == f"sha256={expected}"


def test_signature_depends_on_secret():
    assert compute_signature("a", b"x") != compute_signature("b", b"x")
