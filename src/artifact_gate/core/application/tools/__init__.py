from artifact_gate.core.application.tools.tracker_tool import TrackerTool
from artifact_gate.core.application.tools.vcs_tool import VcsTool

__all__ = ["TrackerTool", "VcsTool"]
