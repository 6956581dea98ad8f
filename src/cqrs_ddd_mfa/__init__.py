"""MFA for cqrs-ddd.

Supports:
- TOTP (Google Authenticator, Microsoft Authenticator, Authy, etc.)
- Enrollment with a pending secret held in an expiring store
- QR provisioning images (SVG data URLs, ``qr`` extra)
- Backup codes (single-use numeric recovery codes)
"""

from .adapters import InMemoryExpiringStore
from .backup_codes import BackupCodeGenerator
from .config import SUPPORTED_ALGORITHMS, MfaConfig
from .enrollment import EnrollmentManager
from .exceptions import (
    InvalidSecretError,
    MfaError,
    MfaInvalidError,
    MfaNotEnabledError,
    MfaSetupError,
    MfaSetupExpiredError,
    MfaStoreError,
    QrCodeError,
)
from .ports import IExpiringStore, IQrCodeEncoder, IRandomSource, TotpSetup
from .qr import QrCodeEncoder, to_data_url
from .secret import SystemRandomSource, TotpSecret
from .service import MfaService
from .totp import TotpVerifier, time_counter

__all__: list[str] = [
    # Config
    "MfaConfig",
    "SUPPORTED_ALGORITHMS",
    # Ports
    "IExpiringStore",
    "IRandomSource",
    "IQrCodeEncoder",
    "TotpSetup",
    # TOTP
    "TotpSecret",
    "SystemRandomSource",
    "TotpVerifier",
    "time_counter",
    # Enrollment
    "EnrollmentManager",
    "InMemoryExpiringStore",
    "QrCodeEncoder",
    "to_data_url",
    # Backup Codes
    "BackupCodeGenerator",
    # Service
    "MfaService",
    # Errors
    "MfaError",
    "MfaSetupError",
    "MfaSetupExpiredError",
    "MfaInvalidError",
    "InvalidSecretError",
    "MfaNotEnabledError",
    "MfaStoreError",
    "QrCodeError",
]
