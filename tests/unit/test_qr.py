"""Tests for QR rendering helpers."""

from __future__ import annotations

import base64

import pytest

from cqrs_ddd_mfa import QrCodeEncoder, QrCodeError, to_data_url
from cqrs_ddd_mfa.qr import SVG_DATA_URL_PREFIX, render_data_url

URI = "otpauth://totp/testapp:user%40example.com?secret=JBSWY3DPEHPK3PXP&issuer=testapp"


def test_to_data_url() -> None:
    url = to_data_url("<svg/>")

    assert url.startswith("data:image/svg+xml;base64,")
    assert base64.b64decode(url[len(SVG_DATA_URL_PREFIX) :]) == b"<svg/>"


def test_qrcode_encoder_renders_svg() -> None:
    svg = QrCodeEncoder().render_svg(URI)

    assert "<svg" in svg
    assert "path" in svg


def test_render_data_url_with_qrcode() -> None:
    url = render_data_url(QrCodeEncoder(), URI)

    decoded = base64.b64decode(url[len(SVG_DATA_URL_PREFIX) :]).decode("utf-8")
    assert url.startswith(SVG_DATA_URL_PREFIX)
    assert "<svg" in decoded


def test_render_data_url_wraps_encoder_errors() -> None:
    class BrokenEncoder:
        def render_svg(self, data: str) -> str:
            raise RuntimeError("boom")

    with pytest.raises(QrCodeError) as exc_info:
        render_data_url(BrokenEncoder(), URI)
    assert isinstance(exc_info.value.__cause__, RuntimeError)
