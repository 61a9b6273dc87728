"""Best-effort EXIF extraction for uploaded clothing photos."""

import logging
import math
from datetime import datetime, timedelta, timezone
from typing import Optional

from PIL import Image, UnidentifiedImageError
from PIL.ExifTags import GPS, IFD, Base

import schemas
from exceptions import UpstreamParseFailure

logger = logging.getLogger(__name__)

EXIF_DATETIME_FORMAT = "%Y:%m:%d %H:%M:%S"


def _text(value) -> Optional[str]:
    if value is None:
        return None
    if isinstance(value, bytes):
        value = value.decode("utf-8", errors="ignore")
    value = str(value).strip("\x00 ").strip()
    return value or None


def dms_to_degrees(dms, ref) -> Optional[float]:
    """Convert an EXIF (degrees, minutes, seconds) triple to signed degrees."""
    if dms is None:
        return None
    if isinstance(dms, (int, float)):
        degrees = float(dms)
    else:
        parts = [float(part) for part in dms]
        parts += [0.0] * (3 - len(parts))
        degrees = parts[0] + parts[1] / 60 + parts[2] / 3600
    if not math.isfinite(degrees):
        return None
    if _text(ref) in ("S", "W"):
        degrees = -degrees
    return degrees


def altitude(value, ref) -> Optional[float]:
    if value is None:
        return None
    meters = float(value)
    if not math.isfinite(meters):
        return None
    # GPSAltitudeRef 1 means below sea level.
    if ref in (1, b"\x01"):
        meters = -meters
    return meters


def to_iso_utc(raw, offset=None) -> Optional[str]:
    """Turn an EXIF ``YYYY:MM:DD HH:MM:SS`` stamp into ISO-8601 UTC.

    ``offset`` is the ``OffsetTimeOriginal`` tag (``+02:00``); without it the
    stamp is taken to be UTC already.
    """
    text = _text(raw)
    if text is None:
        return None
    captured = datetime.strptime(text[:19], EXIF_DATETIME_FORMAT)
    tz = timezone.utc
    offset = _text(offset)
    if offset:
        sign = -1 if offset.startswith("-") else 1
        hours, _, minutes = offset.lstrip("+-").partition(":")
        tz = timezone(sign * timedelta(hours=int(hours), minutes=int(minutes or 0)))
    captured = captured.replace(tzinfo=tz).astimezone(timezone.utc)
    return captured.isoformat().replace("+00:00", "Z")


def read_exif(file_path: str) -> schemas.ExifData:
    """Parse EXIF from ``file_path``, raising ``UpstreamParseFailure`` on any problem."""
    try:
        with Image.open(file_path) as image:
            exif = image.getexif()
            exif_ifd = exif.get_ifd(IFD.Exif)
            gps_ifd = exif.get_ifd(IFD.GPSInfo)

            return schemas.ExifData(
                gps_lat=dms_to_degrees(gps_ifd.get(GPS.GPSLatitude), gps_ifd.get(GPS.GPSLatitudeRef)),
                gps_lon=dms_to_degrees(gps_ifd.get(GPS.GPSLongitude), gps_ifd.get(GPS.GPSLongitudeRef)),
                gps_alt=altitude(gps_ifd.get(GPS.GPSAltitude), gps_ifd.get(GPS.GPSAltitudeRef)),
                datetime_original=to_iso_utc(
                    exif_ifd.get(Base.DateTimeOriginal), exif_ifd.get(Base.OffsetTimeOriginal)
                ),
                camera_make=_text(exif.get(Base.Make)),
                camera_model=_text(exif.get(Base.Model)),
                software=_text(exif.get(Base.Software)),
            )
    except (UnidentifiedImageError, OSError, ValueError, TypeError, ZeroDivisionError) as e:
        raise UpstreamParseFailure(f"EXIF extraction failed for {file_path}: {e}") from e


def extract_exif(file_path: str) -> schemas.ExifData:
    """Return the photo's EXIF metadata, or an all-empty record if it cannot be read.

    Extraction never blocks item creation.
    """
    try:
        return read_exif(file_path)
    except UpstreamParseFailure as e:
        logger.warning("%s", e)
        return schemas.ExifData()
