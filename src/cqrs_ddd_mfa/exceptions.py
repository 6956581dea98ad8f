"""MFA exceptions.

Domain failures (bad code, expired setup) derive from ``DomainError`` so the
caller can show an actionable message. Store communication failures derive
from ``InfrastructureError`` and are never shown to end users as-is.
"""

from __future__ import annotations


class CQRSDDDError(Exception):
    """Root exception for the entire cqrs-ddd toolkit."""


class DomainError(CQRSDDDError):
    """Base class for all domain-related errors."""


class InfrastructureError(CQRSDDDError):
    """Base class for all infrastructure-related errors."""


class IdentityError(DomainError):
    """Base class for all identity-related domain errors."""


# ═══════════════════════════════════════════════════════════════
# MFA ERRORS
# ═══════════════════════════════════════════════════════════════


class MfaError(IdentityError):
    """Base class for MFA-related errors."""


class MfaSetupError(MfaError):
    """Raised when MFA setup fails.

    Examples:
        - The pending secret could not be written to or read from the store
        - The TOTP secret could not be built
    """


class MfaSetupExpiredError(MfaError):
    """Raised when no pending secret exists for a user.

    Covers both a TTL that elapsed and an enrollment that was never started
    (or was cancelled). The caller should restart enrollment.
    """


class MfaInvalidError(MfaError):
    """Raised when MFA code is invalid.

    Used when TOTP code or backup code verification fails.
    """


class InvalidSecretError(MfaError):
    """Raised when a TOTP secret is not valid base32 text.

    Kept apart from ``MfaInvalidError``: a malformed secret is a data
    problem on the server side, not a wrong code typed by the user.
    """


class MfaNotEnabledError(MfaError):
    """Raised by callers when MFA was never confirmed for a user."""


class QrCodeError(MfaError):
    """Raised when the enrollment QR image cannot be built."""


# ═══════════════════════════════════════════════════════════════
# STORE ERRORS
# ═══════════════════════════════════════════════════════════════


class MfaStoreError(InfrastructureError):
    """Raised when the expiring store cannot be reached or fails a command.

    Attributes:
        operation: Store operation that failed ("set", "get", "delete").
        key: Key involved in the failed operation.
    """

    def __init__(
        self,
        message: str = "MFA store unavailable",
        *,
        operation: str | None = None,
        key: str | None = None,
    ) -> None:
        super().__init__(message)
        self.operation = operation
        self.key = key


__all__: list[str] = [
    "CQRSDDDError",
    "DomainError",
    "InfrastructureError",
    "IdentityError",
    "MfaError",
    "MfaSetupError",
    "MfaSetupExpiredError",
    "MfaInvalidError",
    "InvalidSecretError",
    "MfaNotEnabledError",
    "QrCodeError",
    "MfaStoreError",
]
