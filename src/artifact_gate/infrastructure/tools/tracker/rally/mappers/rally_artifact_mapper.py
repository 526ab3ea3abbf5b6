from typing import Any

from artifact_gate.core.domain.artifact import (
    ArtifactQueryResult,
    RemoteArtifact,
    RemoteConnection,
)


class RallyArtifactMapper:
    """Maps WSAPI ``QueryResult`` payloads to tracker-neutral domain objects."""

    @staticmethod
    def to_query_result(payload: dict[str, Any]) -> ArtifactQueryResult:
        query = payload.get("QueryResult", {})
        results = tuple(
            RallyArtifactMapper.to_artifact(item) for item in query.get("Results", [])
        )
        return ArtifactQueryResult(count=int(query.get("TotalResultCount", 0)), results=results)

    @staticmethod
    def to_artifact(item: dict[str, Any]) -> RemoteArtifact:
        project = item.get("Project") or {}
        connections = item.get("Connections") or {}
        return RemoteArtifact(
            ref=item.get("_ref", ""),
            formatted_id=item.get("FormattedID", ""),
            name=item.get("Name") or "",
            schedule_state=item.get("ScheduleState") or "",
            project_name=project.get("_refObjectName") or project.get("Name") or "",
            connections_ref=connections.get("_ref"),
        )

    @staticmethod
    def to_connections(payload: dict[str, Any]) -> list[RemoteConnection]:
        results = payload.get("QueryResult", {}).get("Results", [])
        return [
            RemoteConnection(url=item.get("Url") or "", name=item.get("Name") or "")
            for item in results
        ]

    @staticmethod
    def errors(payload: dict[str, Any]) -> list[str]:
        """Collect the ``Errors`` list of whichever result envelope the payload carries."""
        for envelope in ("QueryResult", "CreateResult", "OperationResult"):
            if envelope in payload:
                return [str(e) for e in payload[envelope].get("Errors", [])]
        return []
