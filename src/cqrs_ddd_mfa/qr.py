"""QR rendering of provisioning URIs.

The QR matrix itself comes from the ``qrcode`` library; this module only
asks it for an SVG and wraps the result in a data URL that a browser can
show in an ``<img>`` tag.
"""

from __future__ import annotations

import base64
import io
from typing import Any

from .exceptions import QrCodeError
from .ports import IQrCodeEncoder

SVG_DATA_URL_PREFIX = "data:image/svg+xml;base64,"


class QrCodeEncoder(IQrCodeEncoder):
    """SVG QR encoder backed by ``qrcode``.

    Args:
        box_size: Size of one QR module in SVG units.
        border: Quiet zone width in modules (4 per ISO/IEC 18004).
    """

    def __init__(self, *, box_size: int = 10, border: int = 4) -> None:
        self.box_size = box_size
        self.border = border

    def _get_qrcode(self) -> Any:
        """Lazy import qrcode."""
        try:
            import qrcode
            import qrcode.image.svg

            return qrcode
        except ImportError as e:
            raise ImportError(
                "qrcode is required for QR image support. "
                "Install with: pip install cqrs-ddd-mfa[qr]"
            ) from e

    def render_svg(self, data: str) -> str:
        qrcode = self._get_qrcode()
        qr = qrcode.QRCode(
            box_size=self.box_size,
            border=self.border,
            image_factory=qrcode.image.svg.SvgPathFillImage,
        )
        qr.add_data(data)
        qr.make(fit=True)
        buffer = io.BytesIO()
        qr.make_image().save(buffer)
        return buffer.getvalue().decode("utf-8")


def to_data_url(svg: str) -> str:
    """Wrap SVG markup as a ``data:image/svg+xml;base64,...`` URL."""
    encoded = base64.b64encode(svg.encode("utf-8")).decode("ascii")
    return f"{SVG_DATA_URL_PREFIX}{encoded}"


def render_data_url(encoder: IQrCodeEncoder, data: str) -> str:
    """Render ``data`` with ``encoder`` and return it as an SVG data URL.

    Raises:
        QrCodeError: If the encoder fails.
    """
    try:
        svg = encoder.render_svg(data)
    except ImportError:
        raise
    except Exception as exc:  # noqa: BLE001
        raise QrCodeError("QR code generation failed") from exc
    return to_data_url(svg)


__all__: list[str] = [
    "QrCodeEncoder",
    "SVG_DATA_URL_PREFIX",
    "render_data_url",
    "to_data_url",
]
