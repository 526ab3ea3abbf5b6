from artifact_gate.core.domain.gate import GateConfig


def test_empty_project_list_accepts_any_project():
    config = GateConfig()
    assert config.any_project
    assert not config.project_scoped
    assert config.is_project_allowed("Whatever")


def test_any_marker_accepts_any_project():
    config = GateConfig(allowed_projects=("Any", "Sample Project"))
    assert config.is_project_allowed("Other")


def test_project_scoped_config():
    config = GateConfig(allowed_projects=("Sample Project",))
    assert config.project_scoped
    assert config.is_project_allowed("Sample Project")
    assert not config.is_project_allowed("Other")


def test_state_must_be_listed():
    config = GateConfig(allowed_states=("Defined",))
    assert config.is_state_allowed("Defined")
    assert not config.is_state_allowed("Accepted")


def test_workspace_ref():
    assert GateConfig(workspace="12345").workspace_ref == "/workspace/12345"
    assert GateConfig().workspace_ref == ""
