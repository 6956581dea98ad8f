"""Backup codes for MFA.

Generates and validates single-use numeric codes that users can use when
they lose access to their authenticator. Persisting the codes (usually
hashed) and removing consumed ones is the caller's job.
"""

from __future__ import annotations

import secrets

from .ports import IRandomSource
from .secret import SystemRandomSource


class BackupCodeGenerator:
    """Backup code generator.

    Codes are drawn independently, so a batch may contain duplicates.
    Each duplicate is still a valid code on its own.

    Example:
        ```python
        generator = BackupCodeGenerator(code_length=8, count=10)
        codes = generator.generate()
        await repo.save_hashed(user_id, codes)  # app provides storage

        # Later, when user needs to recover
        if generator.is_valid(user_code, stored_codes):
            stored_codes = generator.remaining(user_code, stored_codes)
        ```
    """

    def __init__(
        self,
        code_length: int = 8,
        count: int = 10,
        *,
        random_source: IRandomSource | None = None,
    ) -> None:
        """Initialize the generator.

        Args:
            code_length: Digits per code (default 8).
            count: Default number of codes per batch (default 10).
            random_source: Random source (default: OS CSPRNG).
        """
        if code_length <= 0:
            raise ValueError("code_length must be positive")
        if count <= 0:
            raise ValueError("count must be positive")
        self.code_length = code_length
        self.count = count
        self._random = random_source or SystemRandomSource()

    def _generate_code(self, length: int) -> str:
        return "".join(str(self._random.randbelow(10)) for _ in range(length))

    def generate(
        self, count: int | None = None, length: int | None = None
    ) -> list[str]:
        """Generate a batch of backup codes.

        Args:
            count: Number of codes (default: the generator's count).
            length: Digits per code (default: the generator's code_length).

        Returns:
            Plaintext codes, to be shown to the user once.
        """
        count = self.count if count is None else count
        length = self.code_length if length is None else length
        if count < 0 or length <= 0:
            raise ValueError("count must be >= 0 and length must be positive")
        return [self._generate_code(length) for _ in range(count)]

    def is_valid(self, code: str, backup_codes: list[str]) -> bool:
        """Check if a code is one of the known codes.

        The match is exact: no trimming, case folding or dash handling.
        """
        presented = code.encode("utf-8")
        matched = False
        for known in backup_codes:
            matched |= secrets.compare_digest(known.encode("utf-8"), presented)
        return matched

    def remaining(self, code: str, backup_codes: list[str]) -> list[str]:
        """Return ``backup_codes`` with one occurrence of ``code`` removed.

        The input list is not modified. If ``code`` is not a known code
        the result equals the input.
        """
        result = list(backup_codes)
        if code in result:
            result.remove(code)
        return result


__all__: list[str] = ["BackupCodeGenerator"]
