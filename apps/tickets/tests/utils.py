"""
Helpers for reading rendered ticket artifacts back into QR module grids.
"""

import io

import qrcode
from PIL import Image


def expected_modules(payload, border=2):
    """Module grid (border included) the encoder must produce for ``payload``"""
    qr = qrcode.QRCode(error_correction=qrcode.constants.ERROR_CORRECT_M, border=border)
    qr.add_data(payload)
    qr.make(fit=True)
    return qr.get_matrix()


def read_modules(png_bytes, modules, size=200):
    """
    Sample a rendered artifact back into a grid of ``modules`` x ``modules``.

    Raises AssertionError when a module is not a uniform square of pixels or
    the canvas around the code is not plain background.
    """
    image = Image.open(io.BytesIO(png_bytes)).convert('L')
    assert image.size == (size, size), f'unexpected image size {image.size}'

    box = size // modules
    offset = (size - box * modules) // 2
    assert box >= 1, 'code does not fit the canvas'

    grid = []
    for row in range(modules):
        cells = []
        for col in range(modules):
            x0, y0 = offset + col * box, offset + row * box
            values = {image.getpixel((x0 + dx, y0 + dy)) for dx in range(box) for dy in range(box)}
            assert len(values) == 1, f'module ({row}, {col}) is not uniform: {values}'
            cells.append(values.pop() < 128)
        grid.append(cells)

    inner = range(offset, offset + box * modules)
    for x in range(size):
        for y in range(size):
            if x not in inner or y not in inner:
                assert image.getpixel((x, y)) >= 128, f'stray dark pixel at ({x}, {y})'

    return grid


def decodes_to(png_bytes, payload, size=200, border=2):
    matrix = expected_modules(payload, border)
    return read_modules(png_bytes, len(matrix), size) == matrix
