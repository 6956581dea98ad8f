"""TOTP enrollment: the pending-secret lifecycle.

A user moves through ``NoPending -> Pending -> Confirmed | Expired |
Cancelled``. Only ``Pending`` is materialized here, as one entry in the
expiring store per user; expiry is the entry disappearing after its TTL.
Confirmed secrets are handed back to the caller, who owns their storage.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

import pyotp

from .config import MfaConfig
from .exceptions import (
    MfaInvalidError,
    MfaSetupError,
    MfaSetupExpiredError,
    MfaStoreError,
)
from .ports import IExpiringStore, IQrCodeEncoder, IRandomSource, TotpSetup
from .qr import QrCodeEncoder, render_data_url
from .secret import TotpSecret, format_manual_key
from .totp import TotpVerifier

if TYPE_CHECKING:
    from collections.abc import Callable

logger = logging.getLogger(__name__)


class EnrollmentManager:
    """Owns pending TOTP secrets between setup and confirmation.

    Example:
        ```python
        manager = EnrollmentManager(
            MfaConfig(product_id="myapp"),
            store=RedisExpiringStore(redis),
        )

        # Setup - show QR code to user
        setup = await manager.begin_enrollment(user_id, "user@example.com")

        # Confirm - check first code from authenticator app
        secret = await manager.confirm_enrollment(user_id, "123456")
        await users.enable_totp(user_id, secret)  # app provides storage
        ```
    """

    def __init__(
        self,
        config: MfaConfig | None = None,
        *,
        store: IExpiringStore,
        verifier: TotpVerifier | None = None,
        random_source: IRandomSource | None = None,
        qr_encoder: IQrCodeEncoder | None = None,
        clock: Callable[[], float] | None = None,
    ) -> None:
        """Initialize the enrollment manager.

        Args:
            config: MFA configuration.
            store: Expiring store for pending secrets (app provides implementation).
            verifier: TOTP verifier used on confirmation (default: built from config).
            random_source: Random source for secrets (default: OS CSPRNG).
            qr_encoder: QR encoder for ``begin_enrollment_qr`` (default: qrcode SVG).
            clock: Unix time source passed to the default verifier.
        """
        self.config = config or MfaConfig()
        self.store = store
        self.verifier = verifier or TotpVerifier(self.config, clock=clock)
        self._random = random_source
        self._qr_encoder = qr_encoder

    def setup_key(self, user_id: object) -> str:
        """Store key for a user's pending secret."""
        return f"{self.config.product_id}:auth:mfa_setup:{user_id}"

    def provisioning_uri(self, secret: str, account_label: str) -> str:
        """Build the otpauth:// URI an authenticator app scans.

        ``algorithm``, ``digits`` and ``period`` are only included when they
        differ from the authenticator defaults.

        Raises:
            ValueError: If ``account_label`` is empty.
        """
        if not account_label:
            raise ValueError("account_label must not be empty")
        totp = pyotp.TOTP(
            secret,
            digits=self.config.totp_digits,
            digest=self.config.digest,
            interval=self.config.totp_step,
        )
        return totp.provisioning_uri(
            name=account_label,
            issuer_name=self.config.product_id,
        )

    def generate_secret(self) -> str:
        """Generate a new base32 secret without storing it."""
        return TotpSecret.generate(self._random, self.config.secret_length).encoded

    def _build_setup(self, user_id: object, account_label: str) -> TotpSetup:
        try:
            secret = self.generate_secret()
            uri = self.provisioning_uri(secret, account_label)
        except Exception as exc:  # noqa: BLE001
            logger.error("Failed to build TOTP secret for user %s: %s", user_id, exc)
            raise MfaSetupError("MFA setup failed") from exc
        return TotpSetup(
            secret=secret,
            provisioning_uri=uri,
            manual_key=format_manual_key(secret),
        )

    async def _store_pending(self, user_id: object, secret: str) -> None:
        key = self.setup_key(user_id)
        try:
            await self.store.set_with_expiry(key, secret, self.config.setup_secret_ttl)
        except Exception as exc:  # noqa: BLE001
            logger.error(
                "Failed to store MFA secret for user %s (operation=set): %s",
                user_id,
                exc,
            )
            raise MfaSetupError("MFA setup failed") from exc
        logger.info("MFA setup initiated for user %s", user_id)

    async def begin_enrollment(self, user_id: object, account_label: str) -> TotpSetup:
        """Start (or restart) TOTP enrollment for a user.

        Replaces any pending secret the user already had.

        Args:
            user_id: User identifier.
            account_label: Label shown in the authenticator app (usually the email).

        Returns:
            TotpSetup with the secret, provisioning URI and manual key.

        Raises:
            MfaSetupError: If the secret cannot be built or stored.
        """
        setup = self._build_setup(user_id, account_label)
        await self._store_pending(user_id, setup.secret)
        return setup

    async def begin_enrollment_qr(self, user_id: object, account_label: str) -> str:
        """Start enrollment and return the QR code as an SVG data URL.

        The QR image is rendered before anything is stored, so a render
        failure leaves any existing pending secret in place.

        Raises:
            MfaSetupError: If the secret cannot be built or stored.
            QrCodeError: If the QR image cannot be rendered.
        """
        setup = self._build_setup(user_id, account_label)
        encoder = self._qr_encoder or QrCodeEncoder()
        data_url = render_data_url(encoder, setup.provisioning_uri)
        await self._store_pending(user_id, setup.secret)
        return data_url

    async def get_pending_secret(self, user_id: object) -> str:
        """Get a user's pending secret.

        Raises:
            MfaSetupExpiredError: If enrollment expired, was cancelled or never started.
            MfaSetupError: If the store cannot be read.
        """
        key = self.setup_key(user_id)
        try:
            secret = await self.store.get(key)
        except Exception as exc:  # noqa: BLE001
            logger.error(
                "Failed to retrieve MFA secret for user %s (operation=get): %s",
                user_id,
                exc,
            )
            raise MfaSetupError("MFA setup failed") from exc

        if secret is None:
            logger.warning("MFA setup secret not found or expired for user %s", user_id)
            raise MfaSetupExpiredError("MFA setup expired")
        return secret

    async def _delete_pending(self, user_id: object) -> None:
        key = self.setup_key(user_id)
        try:
            await self.store.delete(key)
        except MfaStoreError:
            logger.error("Failed to delete MFA setup secret for user %s", user_id)
            raise
        except Exception as exc:  # noqa: BLE001
            logger.error(
                "Failed to delete MFA setup secret for user %s: %s", user_id, exc
            )
            raise MfaStoreError(
                f"Failed to delete {key}: {exc}", operation="delete", key=key
            ) from exc

    async def cancel_enrollment(self, user_id: object) -> None:
        """Delete a user's pending secret.

        Idempotent: cancelling without a pending secret is not an error.

        Raises:
            MfaStoreError: If the store delete fails. Callers may ignore it,
                the entry expires on its own.
        """
        await self._delete_pending(user_id)
        logger.info("MFA setup cancelled for user %s", user_id)

    async def confirm_enrollment(
        self,
        user_id: object,
        code: str,
        now: float | None = None,
    ) -> str:
        """Confirm enrollment with a code from the authenticator app.

        On success the pending secret is removed and returned; the caller
        must persist it as the user's confirmed secret. On a wrong code the
        pending secret is kept so the user can try again until it expires.

        Raises:
            MfaSetupExpiredError: If there is no pending secret.
            MfaInvalidError: If the code does not match.
            InvalidSecretError: If the pending secret is malformed.
            MfaSetupError: If the store cannot be read.
        """
        secret = await self.get_pending_secret(user_id)
        if not self.verifier.verify(secret, code, now=now):
            logger.info("MFA setup confirmation failed for user %s", user_id)
            raise MfaInvalidError("Invalid MFA code")

        try:
            await self._delete_pending(user_id)
        except MfaStoreError:
            logger.warning(
                "MFA setup secret for user %s left to expire after confirmation",
                user_id,
            )

        logger.info("MFA setup confirmed for user %s", user_id)
        return secret


__all__: list[str] = ["EnrollmentManager"]
