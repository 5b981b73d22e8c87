"""Reading capture dates from the EXIF block of JPEG files."""

from __future__ import annotations

import io
import os
import re
import struct
from datetime import datetime
from pathlib import Path
from typing import Optional, Union

from PIL import Image

_JPEG_MAGIC = b"\xff\xd8"
_TAG_DATETIME = 0x0132
_TAG_EXIF_IFD = 0x8769
_TAG_DATETIME_ORIGINAL = 0x9003
_TAG_DATETIME_DIGITIZED = 0x9004

_EXIF_DATETIME = re.compile(r"\d{4}:\d{2}:\d{2} \d{2}:\d{2}:\d{2}")


def parse_exif_datetime(text: Optional[str]) -> Optional[datetime]:
    """Parse an EXIF ``YYYY:MM:DD hh:mm:ss`` stamp; None if it is not one."""
    if not text or not _EXIF_DATETIME.fullmatch(text):
        return None
    try:
        return datetime.strptime(text, "%Y:%m:%d %H:%M:%S")
    except ValueError:
        return None


def _text(value: object) -> str:
    if value is None:
        return ""
    if isinstance(value, bytes):
        value = value.decode("latin-1")
    return str(value).strip("\x00 ")


class ExifReader:
    """Holds the date stamps of the last JPEG file opened successfully."""

    def __init__(self) -> None:
        self._image = ""
        self._original = ""
        self._digitized = ""

    def open_file(self, path: Union[str, "os.PathLike[str]"]) -> bool:
        """Read the EXIF block of ``path``; False if it is not a JPEG with EXIF data."""
        try:
            data = Path(path).read_bytes()
        except OSError:
            return False
        if not data.startswith(_JPEG_MAGIC):
            return False
        try:
            with Image.open(io.BytesIO(data)) as image:
                if "exif" not in image.info:
                    return False
                exif = image.getexif()
                sub_ifd = exif.get_ifd(_TAG_EXIF_IFD)
        except (OSError, ValueError, SyntaxError, KeyError, struct.error):
            return False
        self._image = _text(exif.get(_TAG_DATETIME))
        self._original = _text(sub_ifd.get(_TAG_DATETIME_ORIGINAL))
        self._digitized = _text(sub_ifd.get(_TAG_DATETIME_DIGITIZED))
        return True

    def original_datetime(self) -> Optional[datetime]:
        return parse_exif_datetime(self._original)

    def image_datetime(self) -> Optional[datetime]:
        return parse_exif_datetime(self._image)

    def digitized_datetime(self) -> Optional[datetime]:
        return parse_exif_datetime(self._digitized)