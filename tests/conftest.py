# ABOUTME: Shared pytest fixtures for the photo organizer tests.
# ABOUTME: Builds minimal TIFF/EXIF containers byte by byte so tests need no real images.

import struct

import pytest

TAG_DATETIME = 0x0132
TAG_DATETIME_ORIGINAL = 0x9003
TAG_DATETIME_DIGITIZED = 0x9004
TAG_EXIF_OFFSET = 0x8769

TYPE_ASCII = 2
TYPE_LONG = 4


def build_exif_tiff(image_tags=None, exif_tags=None) -> bytes:
    """Build a big-endian TIFF container with ASCII tags in IFD0 and the Exif sub-IFD.

    Values must be at least four characters long so they are stored out of line.
    """
    image_tags = dict(image_tags or {})
    exif_tags = dict(exif_tags or {})

    ifd0_offset = 8
    ifd0_count = len(image_tags) + (1 if exif_tags else 0)
    exif_ifd_offset = ifd0_offset + 2 + 12 * ifd0_count + 4
    exif_ifd_size = 2 + 12 * len(exif_tags) + 4 if exif_tags else 0
    data_offset = exif_ifd_offset + exif_ifd_size

    data = bytearray()

    def ascii_entry(tag, text):
        raw = text.encode("ascii") + b"\x00"
        offset = data_offset + len(data)
        data.extend(raw)
        return struct.pack(">HHII", tag, TYPE_ASCII, len(raw), offset)

    ifd0 = [ascii_entry(tag, value) for tag, value in sorted(image_tags.items())]
    if exif_tags:
        ifd0.append(struct.pack(">HHII", TAG_EXIF_OFFSET, TYPE_LONG, 1, exif_ifd_offset))

    blob = b"MM\x00\x2a" + struct.pack(">I", ifd0_offset)
    blob += struct.pack(">H", len(ifd0)) + b"".join(ifd0) + struct.pack(">I", 0)

    if exif_tags:
        entries = [ascii_entry(tag, value) for tag, value in sorted(exif_tags.items())]
        blob += struct.pack(">H", len(entries)) + b"".join(entries) + struct.pack(">I", 0)

    return blob + bytes(data)


@pytest.fixture
def make_photo():
    """Factory writing a photo file with optional EXIF dates.

    ``original`` and ``digitized`` go to the Exif sub-IFD, ``modified`` to IFD0.
    Without any date the file gets plain JPEG bytes and no metadata.
    """

    def _make(path, original=None, digitized=None, modified=None):
        path.parent.mkdir(parents=True, exist_ok=True)
        exif_tags = {}
        if original is not None:
            exif_tags[TAG_DATETIME_ORIGINAL] = original
        if digitized is not None:
            exif_tags[TAG_DATETIME_DIGITIZED] = digitized
        image_tags = {TAG_DATETIME: modified} if modified is not None else {}

        if exif_tags or image_tags:
            path.write_bytes(build_exif_tiff(image_tags, exif_tags))
        else:
            path.write_bytes(b"\xff\xd8\xff\xd9")
        return path

    return _make


@pytest.fixture
def source_dir(tmp_path):
    source = tmp_path / "source"
    source.mkdir()
    return source
