"""GitHub App webhook endpoint: verifies, classifies and queues gate workflows."""

import time
from collections.abc import Awaitable, Callable
from typing import Any

import structlog
from fastapi import APIRouter, BackgroundTasks, Depends, Header, status
from fastapi.responses import JSONResponse
from pydantic import ValidationError
from structlog.contextvars import bind_contextvars, clear_contextvars, get_contextvars

from artifact_gate.core.application.skills.report.gate_messages import (
    OVERRIDE_ACTION_IDENTIFIER,
)
from artifact_gate.infrastructure.config.app_config import AppConfig, get_app_config
from artifact_gate.infrastructure.config.resolution.container import (
    GateWorkflows,
    build_gate_workflows,
)
from artifact_gate.infrastructure.entrypoints.api.dtos.github_webhook_dto import (
    CheckRunEventDTO,
    CheckSuiteEventDTO,
    PullRequestEventDTO,
)
from artifact_gate.infrastructure.entrypoints.api.mappers.github_event_mapper import (
    GitHubEventMapper,
)
from artifact_gate.infrastructure.entrypoints.api.security import validate_github_signature
from artifact_gate.infrastructure.observability.metrics_service import (
    GATE_RUN_DURATION_SECONDS,
    GATE_RUNS_INFLIGHT,
    GATE_RUNS_TOTAL,
    WEBHOOK_EVENTS_TOTAL,
)
from artifact_gate.infrastructure.observability.tracing_setup import get_tracer
from artifact_gate.infrastructure.tools.vcs.github.mappers.github_pull_request_mapper import (
    GitHubPullRequestMapper,
)

logger = structlog.get_logger()
router = APIRouter()

VALIDATION_ACTIONS = frozenset(
    {"opened", "edited", "synchronize", "reopened", "labeled", "unlabeled"}
)

Job = tuple[str, Callable[[], Awaitable[None]]]


def get_workflows() -> GateWorkflows:
    """Build fresh workflows with isolated HTTP clients for each delivery."""
    return build_gate_workflows()


@router.post(
    "/webhooks/github",
    status_code=status.HTTP_202_ACCEPTED,
    response_model=None,
)
async def receive_github_webhook(
    background_tasks: BackgroundTasks,
    body: bytes = Depends(validate_github_signature),
    x_github_event: str = Header(default=""),
    workflows: GateWorkflows = Depends(get_workflows),
    config: AppConfig = Depends(get_app_config),
) -> dict[str, str] | JSONResponse:
    bind_contextvars(github_event=x_github_event)
    try:
        job = _classify(x_github_event, body, workflows, config)
    except ValidationError as exc:
        WEBHOOK_EVENTS_TOTAL.labels(event=x_github_event or "unknown", decision="invalid").inc()
        logger.warning(
            "Invalid webhook payload",
            error_type="ValidationError",
            error_details=str(exc),
        )
        return _ignored(f"invalid payload: {exc.error_count()} error(s)")

    if job is None:
        WEBHOOK_EVENTS_TOTAL.labels(event=x_github_event or "unknown", decision="ignored").inc()
        return _ignored("event not handled")

    workflow_label, run = job
    WEBHOOK_EVENTS_TOTAL.labels(event=x_github_event, decision="accepted").inc()
    ctx_snapshot = get_contextvars()
    background_tasks.add_task(_run_with_metrics, workflow_label, run, ctx_snapshot)
    logger.info("Webhook accepted", workflow=workflow_label)
    return {"status": "accepted", "workflow": workflow_label}


def _classify(
    event: str, body: bytes, workflows: GateWorkflows, config: AppConfig
) -> Job | None:
    """Pick the workflow for a delivery, or ``None`` when the gate does not react to it."""
    if event == "pull_request":
        return _classify_pull_request(PullRequestEventDTO.model_validate_json(body), workflows)
    if event == "check_suite":
        return _classify_check_suite(
            CheckSuiteEventDTO.model_validate_json(body), workflows, config
        )
    if event == "check_run":
        return _classify_check_run(CheckRunEventDTO.model_validate_json(body), workflows)
    return None


def _classify_pull_request(payload: PullRequestEventDTO, workflows: GateWorkflows) -> Job | None:
    bind_contextvars(github_action=payload.action, pr_number=payload.pull_request.number)
    pr = GitHubEventMapper.to_pull_request(payload)
    if payload.action in VALIDATION_ACTIONS:
        return "validation", lambda: workflows.validation.execute(pr)
    if payload.action == "closed":
        return "merge_promotion", lambda: workflows.merge.execute(pr)
    return None


def _classify_check_suite(
    payload: CheckSuiteEventDTO, workflows: GateWorkflows, config: AppConfig
) -> Job | None:
    bind_contextvars(github_action=payload.action)
    if payload.action != "rerequested":
        return None
    app = payload.check_suite.app
    app_id = str(app.id) if app is not None and app.id is not None else ""
    if not config.github.app_id or app_id != config.github.app_id:
        logger.info("Check suite belongs to another app", app_id=app_id)
        return None
    number = GitHubEventMapper.first_pull_request_number(payload.check_suite)
    if number is None:
        return None
    repository = GitHubPullRequestMapper.to_repository(payload.repository)
    return "validation_rerun", lambda: workflows.validation.rerun(repository, number)


def _classify_check_run(payload: CheckRunEventDTO, workflows: GateWorkflows) -> Job | None:
    bind_contextvars(github_action=payload.action)
    if payload.action == "requested_action":
        action = payload.requested_action
        if action is None or action.identifier != OVERRIDE_ACTION_IDENTIFIER:
            return None
        request = GitHubEventMapper.to_override_request(payload)
        return "manual_override", lambda: workflows.override.execute(request)
    if payload.action != "rerequested":
        return None
    number = GitHubEventMapper.first_pull_request_number(payload.check_run.check_suite)
    if number is None:
        return None
    repository = GitHubPullRequestMapper.to_repository(payload.repository)
    name = payload.check_run.name
    return "validation_rerun", lambda: workflows.validation.rerun(
        repository, number, check_run_name=name
    )


async def _run_with_metrics(
    workflow_label: str, run: Callable[[], Awaitable[None]], ctx_snapshot: dict[str, Any]
) -> None:
    """Wrap a workflow run with Prometheus metrics, a span and context propagation."""
    _restore_context(ctx_snapshot)
    GATE_RUNS_INFLIGHT.labels(workflow=workflow_label).inc()
    start = time.perf_counter()
    outcome = "success"
    try:
        with get_tracer().start_as_current_span(f"workflow.{workflow_label}"):
            await run()
    except Exception:
        outcome = "failure"
        raise
    finally:
        duration = time.perf_counter() - start
        GATE_RUNS_INFLIGHT.labels(workflow=workflow_label).dec()
        GATE_RUN_DURATION_SECONDS.labels(workflow=workflow_label).observe(duration)
        GATE_RUNS_TOTAL.labels(workflow=workflow_label, outcome=outcome).inc()


def _restore_context(ctx_snapshot: dict[str, Any]) -> None:
    """Re-bind structlog contextvars from a snapshot captured in the request scope."""
    clear_contextvars()
    bind_contextvars(**ctx_snapshot)


def _ignored(reason: str) -> JSONResponse:
    return JSONResponse(
        status_code=status.HTTP_200_OK, content={"status": "ignored", "reason": reason}
    )
