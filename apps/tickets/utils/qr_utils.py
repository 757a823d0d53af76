"""
QR code rendering for ticket artifacts
"""

import io
import logging

import qrcode
from django.conf import settings
from PIL import Image
from qrcode.exceptions import DataOverflowError

from apps.tickets.exceptions import QRCodeEncodingError

logger = logging.getLogger(__name__)


class QRCodeGenerator:
    """
    Renders a payload into a square black-on-white PNG.

    Pure codec: knows nothing about tickets or events. The same payload always
    yields the same image for a given configuration.
    """

    def __init__(
        self,
        size: int = None,
        border: int = None,
        fill_color: str = None,
        back_color: str = None,
    ):
        options = getattr(settings, 'TICKET_PROVISIONING', {})
        self.size = size or options.get('QR_SIZE', 200)
        self.border = border if border is not None else options.get('QR_MARGIN', 2)
        self.fill_color = fill_color or options.get('QR_FILL_COLOR', '#000000')
        self.back_color = back_color or options.get('QR_BACK_COLOR', '#FFFFFF')

    def encode(self, payload: str) -> bytes:
        """
        Render ``payload`` as PNG bytes of ``size`` x ``size`` pixels.

        Every module is drawn as a whole number of pixels; the code is centred
        on a background-coloured canvas of the requested size.

        Raises:
            QRCodeEncodingError: If the payload does not fit in a QR code or
                the image cannot be produced.
        """
        qr = qrcode.QRCode(
            version=None,  # smallest version that fits
            error_correction=qrcode.constants.ERROR_CORRECT_M,
            box_size=1,
            border=self.border,
        )

        try:
            qr.add_data(payload)
            qr.make(fit=True)
        except DataOverflowError as e:
            raise QRCodeEncodingError(f'Payload too long for a QR code ({len(payload)} chars)') from e

        qr.box_size = self.size // (qr.modules_count + 2 * self.border)
        if qr.box_size < 1:
            raise QRCodeEncodingError(
                f'QR code of {qr.modules_count} modules does not fit in {self.size}px'
            )

        try:
            code = qr.make_image(fill_color=self.fill_color, back_color=self.back_color).get_image()
            canvas = Image.new('RGB', (self.size, self.size), self.back_color)
        except (ValueError, TypeError) as e:
            raise QRCodeEncodingError(f'QR code rendering failed: {e}') from e

        offset = (self.size - code.size[0]) // 2
        canvas.paste(code.convert('RGB'), (offset, offset))

        buffer = io.BytesIO()
        canvas.save(buffer, format='PNG')
        return buffer.getvalue()
