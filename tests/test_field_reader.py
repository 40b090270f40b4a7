import io
import re

import pytest

from gxpfru.common import UNKNOWN, UNKNOWN_MAC
from gxpfru.FieldReader import read_field, read_mac, format_mac

from conftest import make_image

MAC_PATTERN = re.compile(r"^[0-9a-f]{2}(:[0-9a-f]{2}){5}$")

def test_read_field_window():
    stream = io.BytesIO(make_image())
    assert read_field(stream, 109, 16) == "ABC1234567890123"
    assert read_field(stream, 1, 16) == "SN00000000000001"
    assert read_field(stream, 160, 16) == "PCAPN00000000001"

def test_read_field_is_exactly_the_window():
    blob = bytes(range(256))
    stream = io.BytesIO(blob)
    for offset, length in [(0, 1), (10, 5), (200, 56), (255, 1)]:
        s = read_field(stream, offset, length)
        assert len(s) == length
        assert s.encode("latin-1") == blob[offset:offset + length]

def test_read_field_short_read_is_padded():
    stream = io.BytesIO(b"0123456789")
    assert read_field(stream, 6, 8) == "6789\0\0\0\0"

def test_read_field_past_end():
    stream = io.BytesIO(b"abc")
    assert read_field(stream, 100, 4) == "\0" * 4

def test_read_field_invalid_stream():
    assert read_field(None, 1, 16) == UNKNOWN

    stream = io.BytesIO(make_image())
    stream.close()
    assert read_field(stream, 1, 16) == UNKNOWN

def test_read_field_rejects_bad_arguments():
    stream = io.BytesIO(make_image())
    with pytest.raises(ValueError):
        read_field(stream, -1, 4)
    with pytest.raises(ValueError):
        read_field(stream, 0, 0)

def test_read_field_io_error():
    class BrokenStream(io.RawIOBase):
        def seek(self, offset, whence=0):
            raise OSError("i2c timeout")

    assert read_field(BrokenStream(), 1, 16) == UNKNOWN

def test_read_mac():
    stream = io.BytesIO(make_image())
    assert read_mac(stream, 132) == "0a:1b:2c:3d:4e:5f"

def test_read_mac_high_bytes():
    stream = io.BytesIO(make_image())
    assert read_mac(stream, 138) == "80:91:a2:b3:c4:ff"

def test_read_mac_invalid_stream():
    assert read_mac(None, 132) == UNKNOWN_MAC

    stream = io.BytesIO(make_image())
    stream.close()
    assert read_mac(stream, 132) == UNKNOWN_MAC

def test_read_mac_short_read():
    stream = io.BytesIO(bytes([0xde, 0xad, 0xbe]))
    assert read_mac(stream, 0) == "de:ad:be:00:00:00"

def test_read_mac_always_six_groups():
    blob = bytes(range(256))
    for stream, offset in [(io.BytesIO(blob), 0),
                           (io.BytesIO(blob), 252),
                           (io.BytesIO(blob), 1000),
                           (io.BytesIO(b""), 0),
                           (None, 0)]:
        assert MAC_PATTERN.match(read_mac(stream, offset))

def test_format_mac():
    assert format_mac(bytes(6)) == UNKNOWN_MAC
    assert format_mac([1, 2, 3, 0xfe, 0x10, 0]) == "01:02:03:fe:10:00"
