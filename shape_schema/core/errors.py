from __future__ import annotations
from typing import Any, Dict, Optional, Type
from enum import Enum

from . import mapper_exceptions as mapx


class Severity(str, Enum):
    low = "low"
    medium = "medium"
    high = "high"


class ErrorCode(str, Enum):
    DEPTH_LIMIT_EXCEEDED = "depth_limit_exceeded"
    TARGET_RESOLUTION = "target_resolution"
    INVALID_CONFIG = "invalid_config"
    OUTPUT_ERROR = "output_error"
    UNKNOWN_ERROR = "unknown_error"


class CoreError(Exception):
    """Structured error reported by the CLI and batch scripts.

    Attributes:
        message: Human-readable message
        error_code: ErrorCode enum value
        severity: Severity enum value
        context: Optional structured context payload safe to log/serialize
        original_error: Optional wrapped exception
        code: Optional short string code of the mapped exception
        category: Optional string category of the mapped exception
    """

    def __init__(
        self,
        message: str = "",
        error_code: Optional[ErrorCode] = None,
        severity: Severity = Severity.medium,
        *,
        context: Optional[Dict[str, Any]] = None,
        original_error: Optional[BaseException] = None,
        code: Optional[str] = None,
        category: Optional[str] = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.error_code = error_code if error_code is not None else ErrorCode.UNKNOWN_ERROR
        self.severity = severity
        self.context = context or {}
        self.original_error = original_error
        self.code = code
        self.category = category

    def to_dict(self) -> Dict[str, Any]:
        data = {
            "error_code": self.error_code.name,
            "severity": self.severity.value,
            "message": self.message,
            "context": self.context,
        }
        if self.original_error is not None:
            data["original_error"] = type(self.original_error).__name__
        if self.code is not None:
            data["code"] = self.code
        if self.category is not None:
            data["category"] = self.category
        return data

    def __str__(self) -> str:
        base = f"[{self.error_code.name}] {self.message}"
        if self.original_error is not None:
            return f"{base} (Original: {self.original_error})"
        return base


# Mapping of known exceptions to CoreError codes/categories
_MAPPER_EXCEPTION_MAP: Dict[Type[BaseException], Dict[str, Any]] = {
    mapx.DepthLimitError: {
        "code": "depth_limit",
        "category": "mapper",
        "error_code": ErrorCode.DEPTH_LIMIT_EXCEEDED,
    },
    mapx.TargetResolutionError: {
        "code": "target_resolution",
        "category": "cli",
        "error_code": ErrorCode.TARGET_RESOLUTION,
    },
}


class ConfigError(CoreError):
    def __init__(
        self,
        message: str,
        *,
        config_path: Optional[str] = None,
        original_error: Optional[BaseException] = None,
    ) -> None:
        ctx = {"config_path": config_path} if config_path else {}
        super().__init__(
            message=message,
            error_code=ErrorCode.INVALID_CONFIG,
            severity=Severity.high,
            context=ctx,
            original_error=original_error,
        )


def to_core_error(exc: BaseException, *, default_category: str = "unknown") -> CoreError:
    """Convert an arbitrary exception to a CoreError with best-effort mapping.

    Known mapper exceptions are mapped to stable codes; otherwise falls back to
    a generic 'unhandled_exception' code with provided default_category.
    """
    if isinstance(exc, CoreError):
        return exc
    for etype, meta in _MAPPER_EXCEPTION_MAP.items():
        if isinstance(exc, etype):
            context: Dict[str, Any] = {}
            if isinstance(exc, mapx.DepthLimitError):
                context = {"max_depth": exc.max_depth, "path": list(exc.path)}
            return CoreError(
                message=str(exc),
                error_code=meta["error_code"],
                severity=Severity.high,
                context=context,
                original_error=exc,
                code=meta["code"],
                category=meta["category"],
            )
    return CoreError(
        message=str(exc),
        error_code=ErrorCode.UNKNOWN_ERROR,
        severity=Severity.high,
        context={},
        original_error=exc,
        code="unhandled_exception",
        category=default_category,
    )

