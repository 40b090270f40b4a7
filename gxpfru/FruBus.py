import logging

from dbus_fast import PropertyAccess
from dbus_fast.service import ServiceInterface, method, dbus_property

from . import common
from . import utils
from .DeviceLocator import DeviceLocator

log = logging.getLogger(__name__)

##
# Read-only view of one IdentityRecord as the xyz.openbmc_project.FruDevice
# interface. A new instance is exported on every rescan; an instance never
# changes the record it was built with.
class FruDeviceInterface(ServiceInterface):

    def __init__(self, record, interface_name=common.FRU_DEVICE_INTERFACE):
        super().__init__(interface_name)
        self.record = record

    def value(self, property_name):
        return utils.strip_nulls(self.record.get(property_name))

    @dbus_property(access=PropertyAccess.READ, name="SERVER_ID")
    def server_id(self) -> "s":
        return self.value("SERVER_ID")

    @dbus_property(access=PropertyAccess.READ, name="PRODUCT_MANUFACTURER")
    def product_manufacturer(self) -> "s":
        return self.value("PRODUCT_MANUFACTURER")

    @dbus_property(access=PropertyAccess.READ, name="PRODUCT_PART_NUMBER")
    def product_part_number(self) -> "s":
        return self.value("PRODUCT_PART_NUMBER")

    @dbus_property(access=PropertyAccess.READ, name="PRODUCT_SERIAL_NUMBER")
    def product_serial_number(self) -> "s":
        return self.value("PRODUCT_SERIAL_NUMBER")

    @dbus_property(access=PropertyAccess.READ, name="PCA_PART_NUMBER")
    def pca_part_number(self) -> "s":
        return self.value("PCA_PART_NUMBER")

    @dbus_property(access=PropertyAccess.READ, name="PCA_SERIAL_NUMBER")
    def pca_serial_number(self) -> "s":
        return self.value("PCA_SERIAL_NUMBER")

    @dbus_property(access=PropertyAccess.READ, name="MAC0")
    def mac0(self) -> "s":
        return self.value("MAC0")

    @dbus_property(access=PropertyAccess.READ, name="MAC1")
    def mac1(self) -> "s":
        return self.value("MAC1")

class FruDeviceManagerInterface(ServiceInterface):
    """ exposes the ReScan trigger """

    def __init__(self, fru_bus, interface_name=common.FRU_MANAGER_INTERFACE):
        super().__init__(interface_name)
        self.fru_bus = fru_bus

    @method(name="ReScan")
    def rescan(self):
        log.info("ReScan requested")
        self.fru_bus.rescan()

##
# Publishes the FRU identity on an already-connected bus session.
#
# The bus is anything with dbus_fast.aio.MessageBus's export() and unexport();
# FruDeviceDaemon passes a real connection, tests pass a recording fake.
#
# @par Atomicity
#
# rescan() is plain synchronous code with no await, and the daemon runs a
# single-threaded asyncio loop, so a rescan (scan, unexport old, export new)
# always completes before the loop services another ReScan or a property Get.
class FruBus:

    def __init__(self,
            bus,
            locator        = None,
            object_path    = common.FRU_DEVICE_PATH,
            interface_name = common.FRU_DEVICE_INTERFACE,
            manager_path   = common.FRU_MANAGER_PATH):

        self.bus            = bus
        self.locator        = DeviceLocator() if locator is None else locator
        self.object_path    = object_path
        self.interface_name = interface_name
        self.manager_path   = manager_path

        self.record         = None
        self.fru_iface      = None
        self.manager_iface  = None
        self.rescan_count   = 0

    ## export the manager interface and run the initial scan
    def start(self):
        if self.manager_iface is None:
            self.manager_iface = FruDeviceManagerInterface(self)
            self.bus.export(self.manager_path, self.manager_iface)
            log.debug("exported %s at %s", self.manager_iface.name, self.manager_path)

        return self.rescan()

    ##
    # Re-read the EEPROM and replace the published interface.
    #
    # @returns the newly published IdentityRecord
    def rescan(self):
        record = self.locator.scan()
        iface = FruDeviceInterface(record, self.interface_name)

        if self.fru_iface is not None:
            self.bus.unexport(self.object_path, self.fru_iface)
        self.bus.export(self.object_path, iface)

        self.fru_iface = iface
        self.record = record
        self.rescan_count += 1

        log.info("published FRU %s (serial %s, part %s) at %s",
            record.server_id, record.serial_number.rstrip("\0"),
            record.part_number.rstrip("\0"), self.object_path)
        return record

    def stop(self):
        if self.fru_iface is not None:
            self.bus.unexport(self.object_path, self.fru_iface)
            self.fru_iface = None
        if self.manager_iface is not None:
            self.bus.unexport(self.manager_path, self.manager_iface)
            self.manager_iface = None
        log.debug("FruBus stopped after %d scans", self.rescan_count)

    def dump(self):
        log.debug("FruBus:")
        log.debug("  object path: %s", self.object_path)
        log.debug("  scans:       %d", self.rescan_count)
        if self.record is not None:
            for k, v in self.record.to_dict().items():
                log.debug("  %-22s %s", k, v)
