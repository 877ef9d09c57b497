"""Generation service contract: validation, upload, progress, and result mapping."""

from pbnstudio.core.generation.attempt import AttemptState, GenerationAttempt
from pbnstudio.core.generation.client import GenerationClient, serialize_palette
from pbnstudio.core.generation.errors import (
    ErrorCategory,
    GenerationError,
    GenerationErrorKind,
    error_from_api_error,
)
from pbnstudio.core.generation.models import (
    AnalysisResult,
    ColorCoverage,
    Dimensions,
    GenerationResult,
    HealthStatus,
    QualityMetrics,
    Recommendation,
)
from pbnstudio.core.generation.profiles import (
    COMPLEXITY_PROFILE,
    THRESHOLD_PROFILE,
    FlowProfile,
    get_profile,
)
from pbnstudio.core.generation.progress import ProgressListener, ProgressTracker

__all__ = [
    "COMPLEXITY_PROFILE",
    "THRESHOLD_PROFILE",
    "AnalysisResult",
    "AttemptState",
    "ColorCoverage",
    "Dimensions",
    "ErrorCategory",
    "FlowProfile",
    "GenerationAttempt",
    "GenerationClient",
    "GenerationError",
    "GenerationErrorKind",
    "GenerationResult",
    "HealthStatus",
    "ProgressListener",
    "ProgressTracker",
    "QualityMetrics",
    "Recommendation",
    "error_from_api_error",
    "get_profile",
    "serialize_palette",
]
