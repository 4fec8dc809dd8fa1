from __future__ import annotations


class MapperError(Exception):
    """Base exception for schema mapping errors."""
    pass


class DepthLimitError(MapperError):
    """Exception raised when type nesting exceeds the configured depth limit."""

    def __init__(self, message: str, *, max_depth: int, path: tuple = ()):
        super().__init__(message)
        self.max_depth = max_depth
        self.path = path


class TargetResolutionError(MapperError):
    """Exception raised when a ``module:attribute`` target cannot be imported."""
    pass
