import logging

from . import common
from .FieldReader    import read_field, read_mac
from .IdentityRecord import IdentityRecord

log = logging.getLogger(__name__)

##
# Finds the FRU EEPROM among a short ordered list of candidate paths and
# decodes the identity fields from it.
#
# Only the first candidate which opens is read; the rest are never touched.
# Nothing here raises on a missing or unreadable source: the affected fields
# keep their sentinel values and the scan still returns a complete record.
#
# @par Layout
#
# All fields are fixed-width at fixed offsets from the start of the EEPROM:
#
# \verbatim
#   offset len  field
#      1   16   serial number
#    109   16   part number
#    132    6   MAC0
#    138    6   MAC1
#    144   16   PCA serial number
#    160   16   PCA part number
# \endverbatim
class DeviceLocator(object):

    SERIAL_NUMBER     = (  1, 16)
    PART_NUMBER       = (109, 16)
    PCA_SERIAL_NUMBER = (144, 16)
    PCA_PART_NUMBER   = (160, 16)
    MAC0_OFFSET       = 132
    MAC1_OFFSET       = 138

    ##
    # @param eeprom_paths    ordered candidates (default common.EEPROM_PATHS)
    # @param server_id_path  one-line text file holding the server id
    # @param manufacturer    constant reported as PRODUCT_MANUFACTURER
    def __init__(self, eeprom_paths=None, server_id_path=None, manufacturer=None):
        self.eeprom_paths   = list(common.EEPROM_PATHS if eeprom_paths is None else eeprom_paths)
        self.server_id_path = common.SERVER_ID_PATH if server_id_path is None else server_id_path
        self.manufacturer   = common.MANUFACTURER if manufacturer is None else manufacturer

    def read_server_id(self):
        try:
            with open(self.server_id_path, "r", encoding="utf-8", errors="replace") as f:
                line = f.readline()
        except OSError:
            log.debug("unable to read server id from %s", self.server_id_path, exc_info=1)
            return common.UNKNOWN
        return line.rstrip("\r\n")

    def get_manufacturer(self):
        return self.manufacturer

    ## @returns the first candidate path which opens, or None
    def find_eeprom(self):
        for pathname in self.eeprom_paths:
            try:
                with open(pathname, "rb"):
                    return pathname
            except OSError as ex:
                log.debug("find_eeprom: skipping %s (%s)", pathname, ex)
        return None

    ##
    # Fill the EEPROM-sourced fields of record from an open stream.
    def read_fields(self, stream, record):
        record.part_number       = read_field(stream, *self.PART_NUMBER)
        record.serial_number     = read_field(stream, *self.SERIAL_NUMBER)
        record.pca_part_number   = read_field(stream, *self.PCA_PART_NUMBER)
        record.pca_serial_number = read_field(stream, *self.PCA_SERIAL_NUMBER)
        record.mac0              = read_mac(stream, self.MAC0_OFFSET)
        record.mac1              = read_mac(stream, self.MAC1_OFFSET)

    ##
    # Build a fresh IdentityRecord from the current contents of the sources.
    def scan(self):
        record = IdentityRecord(
            server_id    = self.read_server_id(),
            manufacturer = self.get_manufacturer())

        for pathname in self.eeprom_paths:
            try:
                stream = open(pathname, "rb")
            except OSError as ex:
                log.debug("scan: can't open %s (%s)", pathname, ex)
                continue

            with stream:
                log.debug("scan: reading FRU fields from %s", pathname)
                self.read_fields(stream, record)
            break
        else:
            log.warning("scan: no readable EEPROM among %s", self.eeprom_paths)

        record.dump()
        return record
