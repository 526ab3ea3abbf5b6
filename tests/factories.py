"""Builders for tracker-side objects shared by the unit and integration tests."""

from artifact_gate.core.domain.artifact import ArtifactQueryResult, RemoteArtifact

RALLY_BASE = "https://rally1.rallydev.com/slm/webservice/v2.0"

NOT_FOUND = ArtifactQueryResult(count=0)


def remote_artifact(
    formatted_id: str,
    state: str = "Defined",
    project: str = "Sample Project",
    oid: int = 1,
    tracker_type: str = "hierarchicalrequirement",
) -> RemoteArtifact:
    ref = f"{RALLY_BASE}/{tracker_type}/{oid}"
    return RemoteArtifact(
        ref=ref,
        formatted_id=formatted_id,
        name=f"{formatted_id} name",
        schedule_state=state,
        project_name=project,
        connections_ref=f"{ref}/Connections",
    )


def found(artifact: RemoteArtifact) -> ArtifactQueryResult:
    return ArtifactQueryResult(count=1, results=(artifact,))
