from .examples import (
    GeneratedValue,
    GenerationError,
    GenerationErrorKind,
    GenerationErrors,
    GenerationResult,
    generate,
    generate_for_reference,
    is_errors,
)
from .stage import Stage

__all__ = [
    "GeneratedValue",
    "GenerationError",
    "GenerationErrorKind",
    "GenerationErrors",
    "GenerationResult",
    "Stage",
    "generate",
    "generate_for_reference",
    "is_errors",
]
