# ##############################################################################
#                                                                              #
#                                   utils.py                                   #
#                                                                              #
# ##############################################################################

import logging
import os

log = logging.getLogger(__name__)

def to_bool(value):
    if isinstance(value, bool):
        return value
    elif isinstance(value, int):
        return 0 != value
    elif isinstance(value, str):
        s = value.lower().strip()
        return s in ['true', 'y', 'yes', 'on', '1']
    return False

## render a byte buffer for debug logging
def to_hex(a):
    if a is None:
        return "[ ]"
    return "[ " + ", ".join([f"0x{v:02x}" for v in a]) + " ]"

## D-Bus strings can't carry embedded NULs (unprogrammed EEPROM padding)
def strip_nulls(s):
    if s is None:
        return ""
    return s.replace("\0", "")

##
# Keep only the last nbytes of the given file, so an appending logfile
# can't grow without bound across restarts.
def resize_file(path, nbytes):
    if not os.path.exists(path):
        return

    size = os.path.getsize(path)
    if size <= nbytes:
        return

    with open(path, "rb") as f:
        f.seek(size - nbytes)
        tail = f.read()

    with open(path, "wb") as f:
        f.write(tail)

    log.debug("resize_file: truncated %s from %d to %d bytes", path, size, len(tail))
