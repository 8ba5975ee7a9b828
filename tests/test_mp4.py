"""Tests for the MP4 reader."""

import struct

import pytest

from conftest import mp4_atom, mp4_bytes, mp4_item
from gettags.config import ReaderConfig
from gettags.tagging.errors import NotRecognizedError, TagOutOfMemoryError, TagTruncatedError
from gettags.tagging.readers.cursor import ByteCursor
from gettags.tagging.readers.mp4 import item_name, iter_atoms, read_mp4


class TestAtoms:
    """Test atom iteration."""

    def test_children(self):
        data = mp4_atom(b"abcd", b"1234") + mp4_atom(b"efgh", b"")
        atoms = [(kind, cursor.data) for kind, cursor in iter_atoms(ByteCursor(data))]
        assert atoms == [(b"abcd", b"1234"), (b"efgh", b"")]

    def test_64_bit_size(self):
        data = struct.pack(">I4sQ", 1, b"big ", 20) + b"abcd"
        atoms = [(kind, cursor.data) for kind, cursor in iter_atoms(ByteCursor(data))]
        assert atoms == [(b"big ", b"abcd")]

    def test_zero_size_runs_to_end(self):
        data = struct.pack(">I4s", 0, b"last") + b"rest of parent"
        atoms = [(kind, cursor.data) for kind, cursor in iter_atoms(ByteCursor(data))]
        assert atoms == [(b"last", b"rest of parent")]

    def test_short_tail_ignored(self):
        data = mp4_atom(b"abcd", b"") + b"\x00\x00\x00\x00"
        assert [kind for kind, _ in iter_atoms(ByteCursor(data))] == [b"abcd"]

    def test_size_smaller_than_header(self):
        with pytest.raises(TagTruncatedError):
            list(iter_atoms(ByteCursor(struct.pack(">I4s", 4, b"bad "))))

    def test_size_larger_than_parent(self):
        with pytest.raises(TagTruncatedError):
            list(iter_atoms(ByteCursor(struct.pack(">I4s", 100, b"bad ") + b"abc")))


class TestItemNames:
    """Test ilst item naming."""

    def test_copyright_sign_dropped(self):
        assert item_name(b"\xa9nam") == "nam"
        assert item_name(b"\xa9day") == "day"

    def test_plain_names_kept(self):
        assert item_name(b"aART") == "aART"
        assert item_name(b"covr") == "covr"


class TestMp4:
    """Test reading iTunes metadata."""

    def test_text_items(self, mp4_file):
        tags = read_mp4(mp4_file)
        assert tags.format == "mp4"
        assert [(e.id, e.text) for e in tags] == [("nam", "Hello"), ("ART", "Band")]

    def test_jpeg_cover(self, mp4_file):
        cover = read_mp4(mp4_file).cover
        assert cover.mime == "image/jpeg"
        assert cover.data == b"\xff\xd8\xff\xe0jpeg"

    def test_other_cover_types_are_png(self, write_file):
        path = write_file("a.m4a", mp4_bytes([mp4_item(b"covr", b"\x89PNG", data_type=14)]))
        assert read_mp4(path).cover.mime == "image/png"

    def test_quicktime_meta(self, write_file):
        path = write_file("a.m4a", mp4_bytes([mp4_item(b"\xa9alb", b"Album")], quicktime=True))
        assert read_mp4(path)["alb"].text == "Album"

    def test_track_number(self, write_file):
        items = [
            mp4_item(b"trkn", struct.pack(">HHHH", 0, 3, 12, 0), data_type=0),
            mp4_item(b"disk", struct.pack(">HHH", 0, 1, 0), data_type=0),
        ]
        tags = read_mp4(write_file("a.m4a", mp4_bytes(items)))
        assert tags["trkn"].text == "3/12"
        assert tags["disk"].text == "1"

    def test_other_data_types_skipped(self, write_file):
        items = [mp4_item(b"tmpo", struct.pack(">H", 120), data_type=21), mp4_item(b"\xa9nam", b"x")]
        assert [e.id for e in read_mp4(write_file("a.m4a", mp4_bytes(items)))] == ["nam"]

    def test_text_stops_at_nul(self, write_file):
        path = write_file("a.m4a", mp4_bytes([mp4_item(b"\xa9nam", b"One\x00Two")]))
        assert read_mp4(path)["nam"].text == "One"

    @pytest.mark.parametrize(
        "data_len, payload, expected",
        [
            (19, b"abcXYZ", "abc"),  # trailing bytes after the data atom
            (100, b"abc", "abc"),  # data atom claims more than the item holds
            (8, b"abc", ""),  # shorter than its own header
        ],
    )
    def test_value_length_comes_from_data_atom(self, write_file, data_len, payload, expected):
        data = struct.pack(">I", data_len) + b"data" + struct.pack(">II", 1, 0) + payload
        items = [mp4_atom(b"\xa9nam", data), mp4_item(b"\xa9ART", b"Band")]
        tags = read_mp4(write_file("a.m4a", mp4_bytes(items)))
        assert tags["nam"].text == expected
        assert tags["ART"].text == "Band"

    def test_moov_at_end(self, write_file):
        data = mp4_bytes([mp4_item(b"\xa9nam", b"Late")])
        ftyp_size = struct.unpack(">I", data[:4])[0]
        moov_size = struct.unpack(">I", data[ftyp_size : ftyp_size + 4])[0]
        ftyp = data[:ftyp_size]
        moov = data[ftyp_size : ftyp_size + moov_size]
        mdat = data[ftyp_size + moov_size :]
        assert read_mp4(write_file("a.m4a", ftyp + mdat + moov))["nam"].text == "Late"

    def test_no_moov(self, write_file):
        data = mp4_atom(b"ftyp", b"M4A \x00\x00\x00\x00") + mp4_atom(b"mdat", b"\x00" * 32)
        with pytest.raises(NotRecognizedError):
            read_mp4(write_file("a.m4a", data))

    def test_not_mp4(self, write_file):
        with pytest.raises(NotRecognizedError):
            read_mp4(write_file("a.m4a", b"abc"))

    def test_truncated_moov(self, write_file):
        data = mp4_bytes([mp4_item(b"\xa9nam", b"Hello")])
        ftyp_size = struct.unpack(">I", data[:4])[0]
        with pytest.raises(TagTruncatedError):
            read_mp4(write_file("a.m4a", data[: ftyp_size + 40]))

    def test_oversized_moov(self, mp4_file):
        with pytest.raises(TagOutOfMemoryError):
            read_mp4(mp4_file, ReaderConfig(max_alloc=32))

    def test_no_metadata(self, write_file):
        data = mp4_atom(b"ftyp", b"M4A ") + mp4_atom(b"moov", mp4_atom(b"mvhd", b"\x00" * 100))
        tags = read_mp4(write_file("a.m4a", data))
        assert tags.count == 0
        assert tags.cover is None
