"""Structlog processor that nests flat gate log events into the service log schema.

Root fields carry timestamp, level, service and correlation ids; optional
blocks group processing, error, event, context and metadata keys. All field
extraction uses dict.pop(key, default) to avoid KeyError.
"""

from __future__ import annotations

import os
from typing import Any

from opentelemetry import trace


def _build_root_fields(event_dict: dict[str, Any]) -> dict[str, Any]:
    return {
        "timestamp": event_dict.pop("timestamp", None),
        "level": event_dict.pop("level", "info"),
        "service": os.environ.get("SERVICE_NAME", "artifact-gate"),
        "environment": os.environ.get("APP_ENV", "local"),
        "trace_id": event_dict.pop("trace_id", None),
        "correlation_id": event_dict.pop("correlation_id", None),
        "span_id": event_dict.pop("span_id", None),
        "message": event_dict.pop("event", ""),
    }


def _safe_float(value: Any) -> float | None:
    if value is None:
        return None
    try:
        return float(value)
    except (TypeError, ValueError):
        return None


def _build_processing(event_dict: dict[str, Any]) -> dict[str, Any] | None:
    status = event_dict.pop("processing_status", None)
    if status is None:
        return None
    return {
        "status": status,
        "duration_ms": _safe_float(event_dict.pop("processing_duration_ms", None)),
        "attempts": event_dict.pop("processing_attempts", None),
    }


def _build_error(event_dict: dict[str, Any]) -> dict[str, Any] | None:
    """Error block, present only when ``error_type`` was logged."""
    error_type = event_dict.pop("error_type", None)
    if error_type is None:
        return None
    return {
        "type": error_type,
        "code": event_dict.pop("error_code", None),
        "details": event_dict.pop("error_details", None),
        "retryable": event_dict.pop("error_retryable", False),
    }


def _build_event_block(event_dict: dict[str, Any]) -> dict[str, Any] | None:
    """GitHub event identification: delivery, event type, repository and pull request."""
    block = {
        "eventType": event_dict.pop("event_type", None),
        "githubEvent": event_dict.pop("github_event", None),
        "action": event_dict.pop("github_action", None),
        "repository": event_dict.pop("repository", None),
        "pullRequest": event_dict.pop("pr_number", None),
        "actorId": event_dict.pop("actor_id", None),
    }
    if all(value is None for value in block.values()):
        return None
    return block


def _build_context(event_dict: dict[str, Any]) -> dict[str, Any] | None:
    component = event_dict.pop("context_component", None)
    endpoint = event_dict.pop("context_endpoint", None)
    method = event_dict.pop("context_method", None)
    if component is None and endpoint is None:
        return None
    return {"component": component, "endpoint": endpoint, "method": method}


def _build_metadata(event_dict: dict[str, Any]) -> dict[str, Any] | None:
    source = event_dict.pop("source_system", None)
    tags = event_dict.pop("tags", None)
    if source is None and tags is None:
        return None
    return {"source_system": source, "tags": tags}


def _hex_to_uuid(hex_str: str) -> str:
    return f"{hex_str[:8]}-{hex_str[8:12]}-{hex_str[12:16]}-{hex_str[16:20]}-{hex_str[20:]}"


def _inject_otel_ids(event_dict: dict[str, Any]) -> None:
    """Overwrite trace_id and span_id from the current OTel span if recording."""
    span = trace.get_current_span()
    if span.is_recording():
        ctx = span.get_span_context()
        event_dict["trace_id"] = _hex_to_uuid(format(ctx.trace_id, "032x"))
        event_dict["span_id"] = format(ctx.span_id, "016x")


def gate_schema_processor(
    logger: Any,  # noqa: ARG001
    method_name: str,  # noqa: ARG001
    event_dict: dict[str, Any],
) -> dict[str, Any]:
    """Reshape the flat event_dict into the nested log schema."""
    _inject_otel_ids(event_dict)
    result = _build_root_fields(event_dict)

    blocks = (
        ("processing", _build_processing(event_dict)),
        ("error", _build_error(event_dict)),
        ("event", _build_event_block(event_dict)),
        ("context", _build_context(event_dict)),
        ("metadata", _build_metadata(event_dict)),
    )
    for name, block in blocks:
        if block is not None:
            result[name] = block

    if event_dict:
        result["extra"] = dict(event_dict)

    return result
