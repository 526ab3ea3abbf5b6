from artifact_gate.infrastructure.observability.logging.gate_schema_processor import (
    gate_schema_processor,
)


def test_flat_event_is_nested_into_blocks():
    event = {
        "event": "Validation workflow failed",
        "level": "error",
        "timestamp": "2026-01-01T00:00:00Z",
        "correlation_id": "delivery-1",
        "processing_status": "ERROR",
        "error_type": "TrackerAuthenticationError",
        "error_details": "Rally: rejected",
        "error_retryable": False,
        "repository": "acme/payments",
        "pr_number": 7,
        "github_event": "pull_request",
        "source_system": "Rally",
        "head_sha": "abc",
    }

    result = gate_schema_processor(None, "error", event)

    assert result["message"] == "Validation workflow failed"
    assert result["service"] == "artifact-gate"
    assert result["correlation_id"] == "delivery-1"
    assert result["processing"]["status"] == "ERROR"
    assert result["error"] == {
        "type": "TrackerAuthenticationError",
        "code": None,
        "details": "Rally: rejected",
        "retryable": False,
    }
    assert result["event"]["repository"] == "acme/payments"
    assert result["event"]["pullRequest"] == 7
    assert result["event"]["githubEvent"] == "pull_request"
    assert result["metadata"]["source_system"] == "Rally"
    assert result["extra"] == {"head_sha": "abc"}


def test_optional_blocks_are_omitted():
    result = gate_schema_processor(None, "info", {"event": "Webhook accepted"})

    for block in ("processing", "error", "event", "context", "metadata", "extra"):
        assert block not in result
