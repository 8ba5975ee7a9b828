# Magic bytes used to sniff each container format
ID3_MAGIC = b"ID3"
FLAC_MAGIC = b"fLaC"
OGG_MAGIC = b"OggS"

# ID3v2 layout
ID3_HEADER_SIZE = 10
ID3_FLAG_UNSYNCHRONISATION = 0x80
ID3_FLAG_EXTENDED_HEADER = 0x40  # compression in v2.2
ID3_FRAME_HEADER_SIZE = 10  # v2.3 / v2.4: 4 byte id, 4 byte size, 2 byte flags
ID3_V22_FRAME_HEADER_SIZE = 6  # v2.2: 3 byte id, 3 byte size
ID3_MAX_MIME_LENGTH = 100
ID3_PICTURE_FRONT_COVER = 3

# ID3v2 text encoding selectors (first byte of a text frame body)
ENCODING_ISO8859_1 = 0
ENCODING_UTF16_BOM = 1
ENCODING_UTF16 = 2
ENCODING_UTF8 = 3

# FLAC metadata block types
FLAC_BLOCK_STREAMINFO = 0
FLAC_BLOCK_VORBIS_COMMENT = 4
FLAC_LAST_BLOCK = 0x80

# Ogg page layout
OGG_SEGMENT_COUNT_OFFSET = 26
OGG_PAGE_HEADER_SIZE = 27
OGG_PACKET_PREFIX_SIZE = 7  # packet type byte + "vorbis"

# MP4 data atom types
MP4_DATA_IMPLICIT = 0  # big-endian integers, laid out per item
MP4_DATA_TEXT = 1
MP4_DATA_JPEG = 13
MP4_COPYRIGHT_SIGN = 0xA9
MP4_ATOM_HEADER_SIZE = 8

# Reader defaults
DEFAULT_MAX_ALLOC = 64 * 1024 * 1024
DEFAULT_OGG_WINDOW = 4096

ENCODING = "utf-8"

# Image MIME types the command line knows how to name
MIME_EXTENSIONS = {
    "image/jpeg": "jpg",
    "image/png": "png",
    "image/gif": "gif",
}
