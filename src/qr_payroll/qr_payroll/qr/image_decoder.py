from __future__ import annotations

from typing import BinaryIO

from PIL import Image, UnidentifiedImageError

from ..core.exceptions import InvalidCodeError


def decode_qr_image(stream: BinaryIO) -> str:
    """Return the text of the first QR code found in an uploaded image."""
    # pyzbar loads the native zbar library at import time; keep it off the import path
    # of modules that never decode images.
    from pyzbar.pyzbar import decode as pyzbar_decode

    try:
        img = Image.open(stream).convert("RGB")
    except (UnidentifiedImageError, OSError):
        raise InvalidCodeError("El archivo no es una imagen válida")

    decoded = pyzbar_decode(img)
    if not decoded:
        raise InvalidCodeError("No se detectó un código QR en la imagen")
    return decoded[0].data.decode("utf-8").strip()
