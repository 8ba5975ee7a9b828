"""Tests for the Vorbis comment parser shared by FLAC and Ogg."""

import struct

import pytest

from conftest import vorbis_block
from gettags.tagging.collection import TagCollection
from gettags.tagging.errors import TagTruncatedError
from gettags.tagging.readers.vorbis import parse_vorbis_comments


def parse(data: bytes) -> TagCollection:
    return parse_vorbis_comments(data, TagCollection("vorbis"), path="test.flac", format="flac")


class TestVorbisComments:
    """Test KEY=VALUE parsing."""

    def test_comments_and_vendor(self):
        tags = parse(vorbis_block(["TITLE=Hello", "ARTIST=Band"], vendor="encoder 1.0"))
        assert tags.vendor == "encoder 1.0"
        assert [(e.id, e.text) for e in tags] == [("TITLE", "Hello"), ("ARTIST", "Band")]

    def test_keys_keep_case(self):
        tags = parse(vorbis_block(["title=lower"]))
        assert tags.entries[0].id == "title"

    def test_values_are_verbatim_utf8(self):
        tags = parse(vorbis_block(["ALBUM=Sigur Rós"]))
        assert tags["ALBUM"].value == "Sigur Rós".encode("utf-8")

    def test_value_may_contain_equals(self):
        assert parse(vorbis_block(["COMMENT=a=b"]))["COMMENT"].text == "a=b"

    def test_empty_value(self):
        assert parse(vorbis_block(["GENRE="]))["GENRE"].text == ""

    def test_comment_without_equals_dropped(self):
        tags = parse(vorbis_block(["garbage", "TITLE=Hello"]))
        assert [e.id for e in tags] == ["TITLE"]

    def test_nul_ends_comment(self):
        tags = parse(vorbis_block([b"TITLE=One\x00Two"]))
        assert tags["TITLE"].text == "One"

    def test_duplicate_keys_kept(self):
        tags = parse(vorbis_block(["ARTIST=One", "ARTIST=Two"]))
        assert [e.text for e in tags] == ["One", "Two"]

    def test_trailing_data_ignored(self):
        tags = parse(vorbis_block(["TITLE=Hello"]) + b"\x01framing")
        assert tags.count == 1


class TestTruncation:
    """Test declared lengths running past the data."""

    def test_vendor_length_too_long(self):
        with pytest.raises(TagTruncatedError) as exc_info:
            parse(struct.pack("<I", 100) + b"short")
        assert exc_info.value.format == "flac"
        assert exc_info.value.path == "test.flac"

    def test_comment_count_too_large(self):
        data = struct.pack("<I", 0) + struct.pack("<I", 1000) + struct.pack("<I", 0)
        with pytest.raises(TagTruncatedError):
            parse(data)

    def test_comment_length_too_long(self):
        data = vorbis_block(["TITLE=Hello"])
        with pytest.raises(TagTruncatedError):
            parse(data[:-3])

    def test_missing_count(self):
        with pytest.raises(TagTruncatedError):
            parse(struct.pack("<I", 0))
