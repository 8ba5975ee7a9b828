"""Pytest configuration and fixtures.

The builders below assemble minimal ID3v2, FLAC, Ogg and MP4 files byte by
byte, so every test states exactly what the reader sees.
"""

import struct

import pytest

from gettags.config import ReaderConfig
from gettags.constants import FLAC_BLOCK_STREAMINFO, FLAC_BLOCK_VORBIS_COMMENT


# ============================================================================
# ID3v2
# ============================================================================


def syncsafe(n: int) -> bytes:
    return bytes([(n >> 21) & 0x7F, (n >> 14) & 0x7F, (n >> 7) & 0x7F, n & 0x7F])


def text_body(text: str, encoding: int = 0) -> bytes:
    """Body of a text frame: selector byte then the encoded text."""
    if encoding == 0:
        return b"\x00" + text.encode("latin-1")
    if encoding == 1:
        return b"\x01\xff\xfe" + text.encode("utf-16-le")
    if encoding == 2:
        return b"\x02" + text.encode("utf-16-be")
    return b"\x03" + text.encode("utf-8")


def id3_frame(frame_id: str, body: bytes, major: int = 3) -> bytes:
    if major == 2:
        return frame_id.encode("latin-1") + len(body).to_bytes(3, "big") + body
    size = syncsafe(len(body)) if major >= 4 else struct.pack(">I", len(body))
    return frame_id.encode("latin-1") + size + b"\x00\x00" + body


def id3_tag(frames, major: int = 3, flags: int = 0, padding: int = 0, extra_size: int = 0) -> bytes:
    """A complete tag. extra_size makes the header claim more than is there."""
    data = b"".join(frames) + b"\x00" * padding
    return b"ID3" + bytes([major, 0, flags]) + syncsafe(len(data) + extra_size) + data


# ============================================================================
# Vorbis comments, FLAC and Ogg
# ============================================================================


def vorbis_block(comments, vendor: str = "reference libFLAC 1.3.2") -> bytes:
    vendor_bytes = vendor.encode("utf-8")
    out = struct.pack("<I", len(vendor_bytes)) + vendor_bytes + struct.pack("<I", len(comments))
    for comment in comments:
        if isinstance(comment, str):
            comment = comment.encode("utf-8")
        out += struct.pack("<I", len(comment)) + comment
    return out


def flac_block(block_type: int, data: bytes, last: bool = False) -> bytes:
    return bytes([block_type | (0x80 if last else 0)]) + len(data).to_bytes(3, "big") + data


def flac_bytes(comments=None, vendor: str = "reference libFLAC 1.3.2") -> bytes:
    """fLaC, a STREAMINFO block and, unless comments is None, a comment block."""
    out = b"fLaC" + flac_block(FLAC_BLOCK_STREAMINFO, b"\x00" * 34, last=comments is None)
    if comments is not None:
        out += flac_block(FLAC_BLOCK_VORBIS_COMMENT, vorbis_block(comments, vendor), last=True)
    return out


def ogg_page(packet: bytes) -> bytes:
    lacing = []
    remaining = len(packet)
    while remaining >= 255:
        lacing.append(255)
        remaining -= 255
    lacing.append(remaining)
    # capture pattern, version, type, granule, serial, sequence, crc
    header = b"OggS" + b"\x00" * 22 + bytes([len(lacing)])
    return header + bytes(lacing) + packet


def ogg_bytes(comments, vendor: str = "Xiph.Org libVorbis I 20150105") -> bytes:
    identification = ogg_page(b"\x01vorbis" + b"\x00" * 23)
    comment = ogg_page(b"\x03vorbis" + vorbis_block(comments, vendor) + b"\x01")
    return identification + comment


# ============================================================================
# MP4
# ============================================================================


def mp4_atom(kind: bytes, payload: bytes) -> bytes:
    return struct.pack(">I", 8 + len(payload)) + kind + payload


def mp4_item(kind: bytes, value: bytes, data_type: int = 1) -> bytes:
    data = struct.pack(">I", 16 + len(value)) + b"data" + struct.pack(">II", data_type, 0) + value
    return mp4_atom(kind, data)


def mp4_bytes(items, quicktime: bool = False) -> bytes:
    """ftyp, moov/udta/meta/ilst holding items, then some media data.

    ISO meta atoms carry version/flags before their children; QuickTime
    ones go straight to the hdlr atom.
    """
    ilst = mp4_atom(b"ilst", b"".join(items))
    hdlr = mp4_atom(b"hdlr", b"\x00" * 8 + b"mdirappl" + b"\x00" * 9)
    meta = mp4_atom(b"meta", (b"" if quicktime else b"\x00" * 4) + hdlr + ilst)
    moov = mp4_atom(b"moov", mp4_atom(b"mvhd", b"\x00" * 100) + mp4_atom(b"udta", meta))
    ftyp = mp4_atom(b"ftyp", b"M4A \x00\x00\x00\x00M4A mp42isom")
    return ftyp + moov + mp4_atom(b"mdat", b"\x00" * 16)


# ============================================================================
# Fixtures
# ============================================================================


@pytest.fixture(autouse=True)
def isolated_config(tmp_path, monkeypatch):
    """Keep tests away from the user's ~/.gettags/config.toml."""
    config_path = tmp_path / "home" / ".gettags" / "config.toml"
    monkeypatch.setenv("HOME", str(tmp_path / "home"))
    monkeypatch.setattr("gettags.config.get_config_path", lambda: config_path)
    return config_path


@pytest.fixture
def write_file(tmp_path):
    """Write bytes to a file under tmp_path and return its path as a string."""

    def _write(name: str, data: bytes) -> str:
        path = tmp_path / name
        path.write_bytes(data)
        return str(path)

    return _write


@pytest.fixture
def debug_config():
    return ReaderConfig(debug=True)


@pytest.fixture
def id3_file(write_file):
    """An ID3v2.3 tag with a title, an artist and a comment."""
    return write_file(
        "song.mp3",
        id3_tag(
            [
                id3_frame("TIT2", text_body("Hello")),
                id3_frame("TPE1", text_body("Band")),
                id3_frame("COMM", b"\x00eng\x00Nice"),
            ],
            padding=32,
        )
        + b"\xff\xfb" + b"\x00" * 64,
    )


@pytest.fixture
def flac_file(write_file):
    return write_file("song.flac", flac_bytes(["TITLE=Hello", "ARTIST=Band", "TRACKNUMBER=3"]))


@pytest.fixture
def ogg_file(write_file):
    return write_file("song.ogg", ogg_bytes(["TITLE=Hello", "ARTIST=Band"]))


@pytest.fixture
def mp4_file(write_file):
    return write_file(
        "song.m4a",
        mp4_bytes(
            [
                mp4_item(b"\xa9nam", b"Hello"),
                mp4_item(b"\xa9ART", b"Band"),
                mp4_item(b"covr", b"\xff\xd8\xff\xe0jpeg", data_type=13),
            ]
        ),
    )
