"""Domain layer: errors, schemas, constants."""

from .errors import AuditError, ErrorCodes, WarningCodes
from .schemas import (
    BatchDigestResult,
    CompareResult,
    DigestFailure,
    DigestResult,
    ReconcileSummary,
    RunLog,
    WarningLog,
)

__all__ = [
    "AuditError",
    "ErrorCodes",
    "WarningCodes",
    "DigestResult",
    "DigestFailure",
    "BatchDigestResult",
    "ReconcileSummary",
    "CompareResult",
    "RunLog",
    "WarningLog",
]
