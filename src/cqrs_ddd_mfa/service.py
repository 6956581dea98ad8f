"""MFA service: one entry point for TOTP and backup codes."""

from __future__ import annotations

from typing import TYPE_CHECKING

from .backup_codes import BackupCodeGenerator
from .config import MfaConfig
from .enrollment import EnrollmentManager
from .totp import TotpVerifier

if TYPE_CHECKING:
    from collections.abc import Callable

    from .ports import IExpiringStore, IQrCodeEncoder, IRandomSource, TotpSetup


class MfaService:
    """MFA service for TOTP and backup codes.

    Wires the verifier, backup code generator and enrollment manager from a
    single ``MfaConfig``.

    Example:
        ```python
        service = MfaService(MfaConfig(), store=RedisExpiringStore(redis))

        # Setup TOTP
        qr_data_url = await service.setup_totp(user_id, "user@example.com")

        # Confirm setup, then persist the secret on the user record
        secret = await service.confirm_totp_setup(user_id, "123456")

        # Verify code on later logins
        valid = service.verify_totp_code(secret, "654321")
        ```
    """

    def __init__(
        self,
        config: MfaConfig | None = None,
        *,
        store: IExpiringStore,
        random_source: IRandomSource | None = None,
        qr_encoder: IQrCodeEncoder | None = None,
        clock: Callable[[], float] | None = None,
    ) -> None:
        self.config = config or MfaConfig()
        self.verifier = TotpVerifier(self.config, clock=clock)
        self.backup_codes = BackupCodeGenerator(
            code_length=self.config.backup_code_length,
            count=self.config.backup_code_count,
            random_source=random_source,
        )
        self.enrollment = EnrollmentManager(
            self.config,
            store=store,
            verifier=self.verifier,
            random_source=random_source,
            qr_encoder=qr_encoder,
        )

    def setup_key(self, user_id: object) -> str:
        return self.enrollment.setup_key(user_id)

    async def setup_totp(self, user_id: object, user_email: str) -> str:
        """Setup TOTP for a user (returns QR code data URL)."""
        return await self.enrollment.begin_enrollment_qr(user_id, user_email)

    async def begin_enrollment(self, user_id: object, user_email: str) -> TotpSetup:
        return await self.enrollment.begin_enrollment(user_id, user_email)

    async def get_setup_secret(self, user_id: object) -> str:
        return await self.enrollment.get_pending_secret(user_id)

    async def delete_setup_secret(self, user_id: object) -> None:
        await self.enrollment.cancel_enrollment(user_id)

    async def confirm_totp_setup(self, user_id: object, totp_code: str) -> str:
        """Confirm setup and return the secret to persist on the user record."""
        return await self.enrollment.confirm_enrollment(user_id, totp_code)

    def verify_totp_code(self, secret: str, totp_code: str) -> bool:
        """Verify a TOTP code against a confirmed secret.

        Raises:
            InvalidSecretError: If ``secret`` is not valid base32.
        """
        return self.verifier.verify(secret, totp_code)

    def generate_secret(self) -> str:
        """Generate a TOTP secret without going through enrollment.

        Useful for test scenarios where MFA needs to be force-enabled.
        """
        return self.enrollment.generate_secret()

    def generate_backup_codes(self) -> list[str]:
        return self.backup_codes.generate()

    def verify_backup_code(self, code: str, backup_codes: list[str]) -> bool:
        return self.backup_codes.is_valid(code, backup_codes)


__all__: list[str] = ["MfaService"]
