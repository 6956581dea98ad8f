"""MFA configuration."""

from __future__ import annotations

import hashlib
from typing import TYPE_CHECKING, Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

if TYPE_CHECKING:
    from collections.abc import Callable

# Digests accepted by common authenticator apps (RFC 6238 section 1.2).
SUPPORTED_ALGORITHMS: dict[str, Callable[..., Any]] = {
    "SHA1": hashlib.sha1,
    "SHA256": hashlib.sha256,
    "SHA512": hashlib.sha512,
}


class MfaConfig(BaseModel):
    """MFA configuration.

    Immutable and validated once at construction; invalid values raise
    ``pydantic.ValidationError``.

    Attributes:
        product_id: Product identifier, used as QR issuer and store key prefix.
        totp_algorithm: HMAC digest name (SHA1, SHA256 or SHA512).
        totp_digits: Number of digits in a TOTP code.
        totp_step: TOTP time step in seconds.
        totp_skew: Accepted clock drift, in steps on each side.
        backup_code_count: Number of backup codes to generate.
        backup_code_length: Number of digits in each backup code.
        setup_secret_ttl: Pending secret TTL in seconds.
        secret_length: Size of a generated secret in bytes.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    product_id: str = Field(default="novaskyn", min_length=1)
    totp_algorithm: str = "SHA1"
    totp_digits: int = Field(default=6, ge=1, le=10)
    totp_step: int = Field(default=30, gt=0)
    totp_skew: int = Field(default=1, ge=0)
    backup_code_count: int = Field(default=10, gt=0)
    backup_code_length: int = Field(default=8, gt=0)
    setup_secret_ttl: int = Field(default=600, gt=0)  # 10 minutes
    secret_length: int = Field(default=20, ge=16)

    @field_validator("totp_algorithm")
    @classmethod
    def _normalize_algorithm(cls, value: str) -> str:
        algorithm = value.strip().upper().replace("-", "")
        if algorithm not in SUPPORTED_ALGORITHMS:
            supported = ", ".join(SUPPORTED_ALGORITHMS)
            raise ValueError(
                f"Unsupported TOTP algorithm {value!r} (expected one of {supported})"
            )
        return algorithm

    @property
    def digest(self) -> Callable[..., Any]:
        """hashlib constructor for the configured algorithm."""
        return SUPPORTED_ALGORITHMS[self.totp_algorithm]


__all__: list[str] = ["MfaConfig", "SUPPORTED_ALGORITHMS"]
