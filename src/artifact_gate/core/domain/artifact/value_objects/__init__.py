from artifact_gate.core.domain.artifact.value_objects.artifact_key import ArtifactKey
from artifact_gate.core.domain.artifact.value_objects.promotion_match import PromotionMatch
from artifact_gate.core.domain.artifact.value_objects.source_property import SourceProperty

__all__ = ["ArtifactKey", "PromotionMatch", "SourceProperty"]
