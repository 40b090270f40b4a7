import logging

from . import utils
from .common import UNKNOWN

log = logging.getLogger(__name__)

MAC_ADDRESS_SIZE = 6

##
# Fixed-offset field extraction from a raw EEPROM image.
#
# The stream is any binary file-like object supporting seek() and read()
# (an open sysfs eeprom node in production, io.BytesIO in tests). Neither
# function raises on an unreadable source; the sentinel is returned instead.

def is_readable(stream):
    return stream is not None and not getattr(stream, "closed", False)

##
# Read up to size bytes at offset. Returns a zero-initialized bytearray of
# exactly size bytes with whatever was actually read copied over the front,
# or None if the stream couldn't be read at all.
def read_window(stream, offset, size):
    buf = bytearray(size)
    try:
        stream.seek(offset)
        data = stream.read(size)
    except (OSError, ValueError):
        log.error("error reading EEPROM offset %d, len %d", offset, size, exc_info=1)
        return None

    if data is None:
        data = b""
    if len(data) < size:
        log.debug("short read at offset %d: wanted %d bytes, got %d", offset, size, len(data))
    buf[:len(data)] = data
    return buf

##
# Extract the window [offset, offset + length) as a string of exactly length
# characters. Bytes map one-to-one to characters, and anything past the end
# of the stream reads as NUL.
#
# @param stream  open binary stream, or None
# @param offset  byte offset from the start of the EEPROM (>= 0)
# @param length  window size in bytes (> 0)
# @returns the window as text, or UNKNOWN if the stream is invalid
def read_field(stream, offset, length):
    if offset < 0:
        raise ValueError(f"negative offset {offset}")
    if length <= 0:
        raise ValueError(f"invalid length {length}")

    if not is_readable(stream):
        return UNKNOWN

    buf = read_window(stream, offset, length)
    if buf is None:
        return UNKNOWN

    log.debug("read_field(%d, %d): %s", offset, length, utils.to_hex(buf))
    return buf.decode("latin-1")

def format_mac(buf):
    """ render bytes as lowercase colon-delimited hex pairs """
    return ":".join([f"{b:02x}" for b in buf])

##
# Read a 6-byte MAC address at offset. An invalid stream or short read leaves
# the untouched bytes at zero, so the result always has six groups.
def read_mac(stream, offset):
    if offset < 0:
        raise ValueError(f"negative offset {offset}")

    buf = bytearray(MAC_ADDRESS_SIZE)
    if is_readable(stream):
        data = read_window(stream, offset, MAC_ADDRESS_SIZE)
        if data is not None:
            buf = data

    return format_mac(buf)
