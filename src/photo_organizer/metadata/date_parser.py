# ABOUTME: Parses EXIF-style date strings into naive datetimes.
# ABOUTME: Tries a fixed list of formats in order and returns None when none match.

from datetime import datetime

# Most common first: EXIF mandates "YYYY:MM:DD HH:MM:SS".
EXIF_DATE_FORMATS = (
    "%Y:%m:%d %H:%M:%S",
    "%Y-%m-%d %H:%M:%S",
    "%Y/%m/%d %H:%M:%S",
    "%Y:%m:%d %H:%M",
    "%Y-%m-%dT%H:%M:%S",
)

_QUOTES = ('"', "'")


def _normalize(raw: str) -> str:
    text = raw.strip()
    if len(text) >= 2 and text[0] in _QUOTES and text[-1] == text[0]:
        text = text[1:-1].strip()
    return text


def parse_exif_date(raw: str | None) -> datetime | None:
    """Parse a metadata date string, or return None if no known format matches."""
    if not isinstance(raw, str):
        return None

    text = _normalize(raw)
    if not text:
        return None

    for fmt in EXIF_DATE_FORMATS:
        try:
            return datetime.strptime(text, fmt)
        except ValueError:
            continue
    return None
