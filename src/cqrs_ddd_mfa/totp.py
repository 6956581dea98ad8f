"""TOTP (Time-based One-Time Password) verification.

Works with any RFC 6238 authenticator app:
- Google Authenticator
- Microsoft Authenticator
- Authy
- 1Password
- FreeOTP

Uses pyotp for the HOTP derivation (RFC 4226 dynamic truncation). The
verifier holds no state besides its configuration and clock, so one
instance can be shared by any number of concurrent callers.
"""

from __future__ import annotations

import logging
import secrets
import time
from typing import TYPE_CHECKING

import pyotp

from .config import MfaConfig
from .secret import TotpSecret

if TYPE_CHECKING:
    from collections.abc import Callable

logger = logging.getLogger(__name__)


def time_counter(unix_seconds: float, step_seconds: int) -> int:
    """Return the TOTP counter ``floor(unix_seconds / step_seconds)``."""
    return int(unix_seconds // step_seconds)


class TotpVerifier:
    """Derives and verifies TOTP codes.

    Example:
        ```python
        verifier = TotpVerifier(MfaConfig(totp_skew=1))

        # Accepts codes from the previous, current and next 30s step
        if verifier.verify(user_secret, "123456"):
            print("Valid!")
        ```
    """

    def __init__(
        self,
        config: MfaConfig | None = None,
        *,
        clock: Callable[[], float] | None = None,
    ) -> None:
        """Initialize the verifier.

        Args:
            config: MFA configuration (digits, step, skew, algorithm).
            clock: Returns the current unix time in seconds (default ``time.time``).
        """
        self.config = config or MfaConfig()
        self._clock = clock or time.time

    def _totp(self, secret: str | TotpSecret) -> pyotp.TOTP:
        """Build a pyotp TOTP for a validated secret.

        Raises:
            InvalidSecretError: If the secret is not valid base32.
        """
        if not isinstance(secret, TotpSecret):
            secret = TotpSecret.from_encoded(secret)
        return pyotp.TOTP(
            secret.encoded,
            digits=self.config.totp_digits,
            digest=self.config.digest,
            interval=self.config.totp_step,
        )

    def time_counter(self, unix_seconds: float) -> int:
        """Return the counter for ``unix_seconds`` at the configured step."""
        return time_counter(unix_seconds, self.config.totp_step)

    def derive_code(self, secret: str | TotpSecret, counter: int) -> str:
        """Derive the code for a time counter.

        Args:
            secret: Base32 secret (or a decoded ``TotpSecret``).
            counter: Time counter, see ``time_counter``.

        Returns:
            Zero-padded code of ``totp_digits`` digits.

        Raises:
            InvalidSecretError: If the secret is malformed.
            ValueError: If the counter is negative.
        """
        if counter < 0:
            raise ValueError("TOTP counter must be >= 0")
        return str(self._totp(secret).generate_otp(counter))

    def now(self, secret: str | TotpSecret, at: float | None = None) -> str:
        """Return the code for the current step (or for ``at``)."""
        moment = self._clock() if at is None else at
        return self.derive_code(secret, self.time_counter(moment))

    def verify(
        self,
        secret: str | TotpSecret,
        code: str,
        now: float | None = None,
    ) -> bool:
        """Verify a presented code.

        Accepts codes derived for any counter in
        ``[current - totp_skew, current + totp_skew]`` to absorb clock drift
        between server and authenticator.

        Args:
            secret: Base32 secret.
            code: Code typed by the user.
            now: Unix time to verify at (default: the verifier's clock).

        Returns:
            True if the code matches one of the accepted steps.

        Raises:
            InvalidSecretError: If the secret is malformed. A wrong code
                returns False instead.
        """
        totp = self._totp(secret)
        current = self.time_counter(self._clock() if now is None else now)
        skew = self.config.totp_skew
        presented = code.encode("utf-8")

        # Every step in the window is compared, match or not.
        matched = False
        for counter in range(max(0, current - skew), current + skew + 1):
            expected = str(totp.generate_otp(counter)).encode("ascii")
            matched |= secrets.compare_digest(expected, presented)

        logger.debug(
            "TOTP verification %s (counter=%d, skew=%d)",
            "succeeded" if matched else "failed",
            current,
            skew,
        )
        return matched


__all__: list[str] = ["TotpVerifier", "time_counter"]
