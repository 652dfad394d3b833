from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict

# credential fields an authentication layer may pass along in error context
REDACT_KEYS = {"password", "token", "secret", "certificate", "authorization"}


def _redact(obj: Any) -> Any:
    if isinstance(obj, dict):
        out: Dict[str, Any] = {}
        for k, v in obj.items():
            if str(k).lower() in REDACT_KEYS:
                out[k] = "***REDACTED***"
            else:
                out[k] = _redact(v)
        return out
    if isinstance(obj, list):
        return [_redact(x) for x in obj]
    return obj


class Severity(str, Enum):
    INFO = "INFO"
    WARN = "WARN"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"


@dataclass
class UnixIdError(Exception):
    code: str
    user_message: str
    severity: Severity = Severity.ERROR
    recoverable: bool = True
    context: Dict[str, Any] = field(default_factory=dict)

    def __post_init__(self) -> None:
        super().__init__(self.code)

    def __str__(self) -> str:
        return f"{self.code}: {self.user_message}"

    def to_dict(self) -> Dict[str, Any]:
        return {
            "code": self.code,
            "user_message": self.user_message,
            "severity": self.severity.value,
            "recoverable": bool(self.recoverable),
            "context": _redact(self.context or {}),
        }


# ---- Identity model ----
class AmbiguousPrincipalError(UnixIdError, ValueError):
    """More than one principal of a kind where at most one is allowed."""

    def __init__(self, user_message: str = "Identity has multiple principals of the same kind.", **ctx: Any):
        super().__init__("ambiguous_principal", user_message, severity=Severity.ERROR, recoverable=False, context=ctx)


class PrincipalNotFoundError(UnixIdError, LookupError):
    """A principal the query requires is absent."""

    def __init__(self, user_message: str = "Identity has no such principal.", **ctx: Any):
        super().__init__("principal_not_found", user_message, severity=Severity.WARN, recoverable=False, context=ctx)


class ReadOnlyIdentityError(UnixIdError, RuntimeError):
    def __init__(self, user_message: str = "Identity is read-only.", **ctx: Any):
        super().__init__("read_only_identity", user_message, severity=Severity.ERROR, recoverable=False, context=ctx)


# ---- Input / config ----
class ValidationError(UnixIdError):
    def __init__(self, user_message: str = "Invalid request.", **ctx: Any):
        super().__init__("validation_error", user_message, severity=Severity.WARN, recoverable=False, context=ctx)


class ConfigError(UnixIdError):
    def __init__(self, user_message: str = "Configuration error.", **ctx: Any):
        super().__init__("config_error", user_message, severity=Severity.CRITICAL, recoverable=False, context=ctx)
