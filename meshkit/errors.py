"""Structured errors carrying a code, severity and human-readable details."""

from __future__ import annotations

from collections.abc import Iterable
from enum import IntEnum

ERR_GET_DESCRIBER_FUNC_CODE = "meshkit-11189"


class Severity(IntEnum):
    """How serious an error is."""

    NONE = 0
    ALERT = 1
    CRITICAL = 2
    FATAL = 3


class MeshkitError(Exception):
    """An error with a stable code plus descriptions, causes and remedies."""

    def __init__(
        self,
        code: str,
        severity: Severity | int,
        short_description: Iterable[str] | None,
        long_description: Iterable[str] | None = None,
        probable_cause: Iterable[str] | None = None,
        suggested_remediation: Iterable[str] | None = None,
    ) -> None:
        self.code = code
        self.severity = Severity(severity)
        self.short_description = list(short_description or [])
        self.long_description = list(long_description or [])
        self.probable_cause = list(probable_cause or [])
        self.suggested_remediation = list(suggested_remediation or [])
        super().__init__(code)

    def __str__(self) -> str:
        return " ".join(self.short_description)


def err_get_describer_func() -> MeshkitError:
    """Error raised when no describer exists for a resource kind."""
    return MeshkitError(
        ERR_GET_DESCRIBER_FUNC_CODE,
        Severity.FATAL,
        ["Failed to get describer for the resource"],
        [
            "invalid kubernetes object type or object type not supported in meshkit",
            "Describer not found for the defined Resource",
        ],
        None,
        None,
    )