"""Domain exceptions."""


class SourceReadError(OSError):
    """A module could not be read (missing, unreadable or too large)."""

    def __init__(self, path: str, reason: str) -> None:
        super().__init__(f"Cannot read {path}: {reason}")
        self.path = path
        self.reason = reason
