"""Tests for the MFA service facade."""

from __future__ import annotations

import pytest

from cqrs_ddd_mfa import (
    InMemoryExpiringStore,
    InvalidSecretError,
    MfaConfig,
    MfaInvalidError,
    MfaService,
    MfaSetupExpiredError,
    time_counter,
)
from cqrs_ddd_mfa.qr import SVG_DATA_URL_PREFIX


class StubQrEncoder:
    def render_svg(self, data: str) -> str:
        return f"<svg data-uri='{data}'/>"


@pytest.fixture
def service(config: MfaConfig, store: InMemoryExpiringStore, clock) -> MfaService:
    return MfaService(config, store=store, qr_encoder=StubQrEncoder(), clock=clock)


class TestTotpFlow:
    @pytest.mark.asyncio
    async def test_setup_returns_data_url(self, service: MfaService) -> None:
        data_url = await service.setup_totp("user-1", "user@example.com")

        assert data_url.startswith(SVG_DATA_URL_PREFIX)
        assert await service.get_setup_secret("user-1")

    @pytest.mark.asyncio
    async def test_full_enrollment_then_login(self, service: MfaService, clock) -> None:
        setup = await service.begin_enrollment("user-1", "user@example.com")
        code = service.verifier.now(setup.secret)

        secret = await service.confirm_totp_setup("user-1", code)

        assert secret == setup.secret
        with pytest.raises(MfaSetupExpiredError):
            await service.get_setup_secret("user-1")

        clock.advance(300)
        assert service.verify_totp_code(secret, service.verifier.now(secret))

    @pytest.mark.asyncio
    async def test_confirm_with_wrong_code(self, service: MfaService, clock) -> None:
        setup = await service.begin_enrollment("user-1", "user@example.com")
        counter = time_counter(clock(), 30)
        window = {
            service.verifier.derive_code(setup.secret, c)
            for c in range(counter - 1, counter + 2)
        }
        wrong = next(f"{n:06d}" for n in range(1_000_000) if f"{n:06d}" not in window)

        with pytest.raises(MfaInvalidError):
            await service.confirm_totp_setup("user-1", wrong)

    @pytest.mark.asyncio
    async def test_delete_setup_secret(self, service: MfaService) -> None:
        await service.begin_enrollment("user-1", "user@example.com")

        await service.delete_setup_secret("user-1")
        await service.delete_setup_secret("user-1")

        with pytest.raises(MfaSetupExpiredError):
            await service.get_setup_secret("user-1")

    def test_setup_key(self, service: MfaService) -> None:
        assert service.setup_key("42") == "testapp:auth:mfa_setup:42"


class TestVerifyTotpCode:
    def test_slow_client_accepted_two_steps_rejected(
        self, service: MfaService, clock
    ) -> None:
        """digits=6, step=30, skew=1: C-1 verifies, C-2 does not."""
        secret = "JBSWY3DPEHPK3PXP"
        current = time_counter(clock(), 30)
        one_back = service.verifier.derive_code(secret, current - 1)
        two_back = service.verifier.derive_code(secret, current - 2)
        window = {
            service.verifier.derive_code(secret, c)
            for c in (current - 1, current, current + 1)
        }

        assert two_back not in window
        assert service.verify_totp_code(secret, one_back)
        assert not service.verify_totp_code(secret, two_back)

    def test_malformed_secret_raises(self, service: MfaService) -> None:
        with pytest.raises(InvalidSecretError):
            service.verify_totp_code("!!!", "123456")

    def test_generate_secret(self, service: MfaService) -> None:
        secret = service.generate_secret()

        assert len(secret) == 32
        assert secret != service.generate_secret()


class TestBackupCodes:
    def test_generate_uses_config(self, store: InMemoryExpiringStore) -> None:
        service = MfaService(
            MfaConfig(backup_code_count=4, backup_code_length=10), store=store
        )

        codes = service.generate_backup_codes()

        assert len(codes) == 4
        assert all(len(code) == 10 and code.isdigit() for code in codes)

    def test_default_codes(self, service: MfaService) -> None:
        codes = service.generate_backup_codes()

        assert len(codes) == 10
        assert all(len(code) == 8 and code.isdigit() for code in codes)

    def test_verify_backup_code(self, service: MfaService) -> None:
        codes = service.generate_backup_codes()

        assert service.verify_backup_code(codes[3], codes)
        if "00000000" not in codes:
            assert not service.verify_backup_code("00000000", codes)

    def test_zeros_not_in_set(self, service: MfaService) -> None:
        assert not service.verify_backup_code("00000000", ["12345678", "87654321"])
