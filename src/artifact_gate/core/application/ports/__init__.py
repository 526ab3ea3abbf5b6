from artifact_gate.core.application.ports.gate_config_port import GateConfigPort

__all__ = ["GateConfigPort"]
