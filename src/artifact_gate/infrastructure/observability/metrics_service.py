"""Prometheus metrics declarations for the artifact gate.

All metrics are declared statically at module level.
Labels use ONLY static enumerations, never dynamic IDs (repositories, keys, shas).
"""

from prometheus_client import Counter, Gauge, Histogram

# ── Workflow-level metrics ────────────────────────────────────────

GATE_RUNS_TOTAL = Counter(
    "artifact_gate_runs_total",
    "Total workflow runs triggered by webhook events",
    ["workflow", "outcome"],
)

GATE_RUN_DURATION_SECONDS = Histogram(
    "artifact_gate_run_duration_seconds",
    "End-to-end workflow duration in seconds",
    ["workflow"],
)

GATE_RUNS_INFLIGHT = Gauge(
    "artifact_gate_runs_inflight",
    "Currently running workflows",
    ["workflow"],
)

# ── Remote tool call metrics ──────────────────────────────────────

TRACKER_CALLS_TOTAL = Counter(
    "artifact_gate_tracker_calls_total",
    "Total tracker API calls",
    ["operation", "outcome"],
)

VCS_CALLS_TOTAL = Counter(
    "artifact_gate_vcs_calls_total",
    "Total VCS API calls",
    ["operation", "outcome"],
)

# ── Webhook metrics ───────────────────────────────────────────────

WEBHOOK_EVENTS_TOTAL = Counter(
    "artifact_gate_webhook_events_total",
    "Webhook deliveries received, by GitHub event and handling decision",
    ["event", "decision"],
)
