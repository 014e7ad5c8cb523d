class MapConfigError(ValueError):
    """Rejected generation parameters. Raised before any generation work starts."""

    def __init__(self, field: str, reason: str):
        super().__init__(reason)
        self.field = field
        self.reason = reason


class GenerationError(RuntimeError):
    """A broken internal invariant during generation (never a bad external input)."""


__all__ = ["MapConfigError", "GenerationError"]
