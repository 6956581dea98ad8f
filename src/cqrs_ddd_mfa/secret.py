"""TOTP shared secrets."""

from __future__ import annotations

import base64
import binascii
import secrets
from dataclasses import dataclass

from .exceptions import InvalidSecretError
from .ports import IRandomSource

DEFAULT_SECRET_LENGTH = 20  # 160 bits, the HMAC-SHA1 block recommended by RFC 4226


class SystemRandomSource(IRandomSource):
    """Random source backed by the ``secrets`` module (OS CSPRNG)."""

    def token_bytes(self, nbytes: int) -> bytes:
        return secrets.token_bytes(nbytes)

    def randbelow(self, exclusive_upper_bound: int) -> int:
        return secrets.randbelow(exclusive_upper_bound)


@dataclass(frozen=True)
class TotpSecret:
    """A TOTP shared secret.

    Holds the raw key bytes; ``encoded`` is the base32 text shown to the
    user and kept in storage.
    """

    raw: bytes

    @property
    def encoded(self) -> str:
        """Base32 text, upper case, without ``=`` padding."""
        return base64.b32encode(self.raw).decode("ascii").rstrip("=")

    @classmethod
    def generate(
        cls,
        random_source: IRandomSource | None = None,
        length: int = DEFAULT_SECRET_LENGTH,
    ) -> TotpSecret:
        """Generate a new random secret.

        Args:
            random_source: Source of random bytes (default: OS CSPRNG).
            length: Secret size in bytes.

        Returns:
            New secret.
        """
        source = random_source or SystemRandomSource()
        return cls(raw=source.token_bytes(length))

    @classmethod
    def from_encoded(cls, encoded: str) -> TotpSecret:
        """Decode a base32 secret.

        Padding is optional and lower case is accepted, matching what
        authenticator apps produce when a key is typed in by hand.

        Raises:
            InvalidSecretError: If the text is empty or not base32.
        """
        text = encoded.strip().replace(" ", "") if encoded else ""
        if not text:
            raise InvalidSecretError("TOTP secret is empty")
        padded = text + "=" * (-len(text) % 8)
        try:
            raw = base64.b32decode(padded, casefold=True)
        except (binascii.Error, ValueError) as exc:
            raise InvalidSecretError("TOTP secret is not valid base32") from exc
        if not raw:
            raise InvalidSecretError("TOTP secret is empty")
        return cls(raw=raw)

    def __repr__(self) -> str:
        return f"TotpSecret(<{len(self.raw)} bytes>)"


def format_manual_key(secret: str) -> str:
    """Format secret for manual entry.

    Args:
        secret: Base32 secret.

    Returns:
        Secret formatted as groups of 4 characters.
    """
    secret = secret.rstrip("=")
    return " ".join(secret[i : i + 4] for i in range(0, len(secret), 4))


__all__: list[str] = [
    "DEFAULT_SECRET_LENGTH",
    "SystemRandomSource",
    "TotpSecret",
    "format_manual_key",
]
