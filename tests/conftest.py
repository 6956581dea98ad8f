"""Test configuration and fixtures."""

from __future__ import annotations

import random

import pytest

from cqrs_ddd_mfa import InMemoryExpiringStore, MfaConfig

# 2009-02-13T23:31:30Z, counter 41152263 at a 30s step
FIXED_NOW = 1_234_567_890.0


def pytest_configure(config):
    """Configure pytest with custom markers."""
    config.addinivalue_line(
        "markers",
        "integration: marks tests as integration tests that require external services",
    )


class FakeClock:
    """Manually advanced clock, usable wherever a ``Callable[[], float]`` is."""

    def __init__(self, now: float = FIXED_NOW) -> None:
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


class SeededRandomSource:
    """Deterministic IRandomSource for reproducible secrets and codes."""

    def __init__(self, seed: int = 1234) -> None:
        self._random = random.Random(seed)

    def token_bytes(self, nbytes: int) -> bytes:
        return bytes(self._random.getrandbits(8) for _ in range(nbytes))

    def randbelow(self, exclusive_upper_bound: int) -> int:
        return self._random.randrange(exclusive_upper_bound)


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def config() -> MfaConfig:
    return MfaConfig(product_id="testapp")


@pytest.fixture
def store(clock: FakeClock) -> InMemoryExpiringStore:
    """In-memory store sharing the test clock, so TTLs can be skipped."""
    return InMemoryExpiringStore(clock=clock)


@pytest.fixture
def random_source() -> SeededRandomSource:
    return SeededRandomSource()
