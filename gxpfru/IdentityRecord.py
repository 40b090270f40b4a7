import json
import logging

from . import utils
from .common import UNKNOWN, UNKNOWN_MAC, MANUFACTURER

log = logging.getLogger(__name__)

##
# The complete set of FRU identity fields produced by one scan.
#
# Every attribute always holds a string: EEPROM-sourced text fields default
# to UNKNOWN and MAC addresses to UNKNOWN_MAC, so a record built from an
# unreadable EEPROM is still complete. DeviceLocator builds a fresh record on
# every scan; nothing modifies one after it has been published.
class IdentityRecord(object):

    ## attribute name -> published property name, in publication order
    FIELDS = [
        ("server_id",         "SERVER_ID"),
        ("manufacturer",      "PRODUCT_MANUFACTURER"),
        ("part_number",       "PRODUCT_PART_NUMBER"),
        ("serial_number",     "PRODUCT_SERIAL_NUMBER"),
        ("pca_part_number",   "PCA_PART_NUMBER"),
        ("pca_serial_number", "PCA_SERIAL_NUMBER"),
        ("mac0",              "MAC0"),
        ("mac1",              "MAC1"),
    ]

    def __init__(self,
            server_id         = UNKNOWN,
            manufacturer      = MANUFACTURER,
            part_number       = UNKNOWN,
            serial_number     = UNKNOWN,
            pca_part_number   = UNKNOWN,
            pca_serial_number = UNKNOWN,
            mac0              = UNKNOWN_MAC,
            mac1              = UNKNOWN_MAC):

        self.server_id         = server_id
        self.manufacturer      = manufacturer
        self.part_number       = part_number
        self.serial_number     = serial_number
        self.pca_part_number   = pca_part_number
        self.pca_serial_number = pca_serial_number
        self.mac0              = mac0
        self.mac1              = mac1

    def __eq__(self, other):
        if not isinstance(other, IdentityRecord):
            return NotImplemented
        return self.to_dict() == other.to_dict()

    def __repr__(self):
        return f"IdentityRecord({self.to_dict()})"

    def get(self, property_name):
        for attr, name in IdentityRecord.FIELDS:
            if name == property_name:
                return getattr(self, attr)
        raise KeyError(property_name)

    ##
    # published property names -> values
    #
    # @param strip_nulls  drop NUL padding left by short or unprogrammed fields
    def to_dict(self, strip_nulls=False):
        d = {}
        for attr, name in IdentityRecord.FIELDS:
            value = getattr(self, attr)
            d[name] = utils.strip_nulls(value) if strip_nulls else value
        return d

    def json(self, strip_nulls=False):
        return json.dumps(self.to_dict(strip_nulls), indent=2)

    ## KEY=VALUE lines, as printed by --dump
    def to_lines(self, strip_nulls=False):
        return [f"{k}={v}" for k, v in self.to_dict(strip_nulls).items()]

    ## log this object
    def dump(self):
        log.debug("IdentityRecord:")
        log.debug("  Server ID:         %s", self.server_id)
        log.debug("  Manufacturer:      %s", self.manufacturer)
        log.debug("  Part Number:       %s", self.part_number)
        log.debug("  Serial Number:     %s", self.serial_number)
        log.debug("  PCA Part Number:   %s", self.pca_part_number)
        log.debug("  PCA Serial Number: %s", self.pca_serial_number)
        log.debug("  MAC0:              %s", self.mac0)
        log.debug("  MAC1:              %s", self.mac1)
