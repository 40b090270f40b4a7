################################################################################
#                              FruDeviceDaemon.py                              #
################################################################################
#                                                                              #
#  DESCRIPTION:  Publishes the GXP FRU EEPROM identity (serial, part number,   #
#                MACs) as xyz.openbmc_project.FruDevice properties on D-Bus,   #
#                and re-reads it on FruDeviceManager.ReScan.                   #
#                                                                              #
#  INVOCATION:   $ gxp-fru-device [--log-level DEBUG] [--dump]                 #
#                                                                              #
################################################################################

import sys
import signal
import asyncio
import logging
import argparse

from dbus_fast import BusType, RequestNameReply
from dbus_fast.aio import MessageBus

import gxpfru
from . import common
from . import applog
from .FruBus        import FruBus
from .DeviceLocator import DeviceLocator

log = logging.getLogger(__name__)

class FruDeviceDaemon:

    ############################################################################
    #                                                                          #
    #                               Lifecycle                                  #
    #                                                                          #
    ############################################################################

    def __init__(self, argv=None):
        self.bus     = None
        self.fru_bus = None
        self.logger  = None
        self.stopped = None

        self.args = self.parse_args(argv)

        if self.args.log_level != "NEVER":
            self.logger = applog.MainLogger(
                self.args.log_level,
                logfile    = self.args.logfile,
                append_arg = self.args.log_append,
                stream     = sys.stderr if self.args.dump else sys.stdout)
        log.info("gxpfru version %s", gxpfru.__version__)

        self.locator = DeviceLocator(
            eeprom_paths   = self.args.eeprom,
            server_id_path = self.args.server_id_path)

    ############################################################################
    #                                                                          #
    #                             Command-Line Args                            #
    #                                                                          #
    ############################################################################

    def parse_args(self, argv=None):
        parser = argparse.ArgumentParser(description="Publish FRU EEPROM identity on D-Bus")
        parser.add_argument("--log-level",      type=str.upper, default="INFO", help="logging level", choices=["DEBUG","INFO","WARNING","ERROR","CRITICAL","NEVER"])
        parser.add_argument("--logfile",        type=str, default=None,     help="also log to this file")
        parser.add_argument("--log-append",     type=str, default="True",   help="append to logfile (True, False or limit)", choices=["True","False","limit"])
        parser.add_argument("--eeprom",         type=str, action="append",  help="candidate EEPROM path, tried in order (repeatable)")
        parser.add_argument("--server-id-path", type=str, default=common.SERVER_ID_PATH, help="file holding the server id")
        parser.add_argument("--bus",            type=str, default="system", help="bus to publish on", choices=["system", "session"])
        parser.add_argument("--dump",           action="store_true",        help="scan once, print the record and exit")
        parser.add_argument("--json",           action="store_true",        help="with --dump, print JSON instead of KEY=VALUE")
        parser.add_argument("--version",        action="store_true",        help="display gxpfru version and exit")

        args = parser.parse_args(argv)
        if args.version:
            print("gxpfru %s" % gxpfru.__version__)
            sys.exit(0)

        if args.eeprom is None:
            args.eeprom = list(common.EEPROM_PATHS)

        return args

    ############################################################################
    #                                                                          #
    #                                 Dump                                     #
    #                                                                          #
    ############################################################################

    def dump(self):
        """ one-shot scan to stdout, no bus involved (logging goes to stderr) """
        log.debug("dump: EEPROM is %s", self.locator.find_eeprom())
        record = self.locator.scan()
        if self.args.json:
            print(record.json(strip_nulls=True))
        else:
            for line in record.to_lines(strip_nulls=True):
                print(line)
        return 0

    ############################################################################
    #                                                                          #
    #                              Run-Time Loop                               #
    #                                                                          #
    ############################################################################

    async def connect(self):
        bus_type = BusType.SYSTEM if self.args.bus == "system" else BusType.SESSION
        self.bus = await MessageBus(bus_type=bus_type).connect()

        reply = await self.bus.request_name(common.BUS_NAME)
        if reply not in [RequestNameReply.PRIMARY_OWNER, RequestNameReply.ALREADY_OWNER]:
            log.critical("unable to own %s (%s)", common.BUS_NAME, reply)
            return False

        log.debug("own %s on the %s bus", common.BUS_NAME, self.args.bus)
        return True

    async def run(self):
        try:
            ok = await self.connect()
        except Exception:
            log.critical("unable to connect to the %s bus", self.args.bus, exc_info=1)
            return 1
        if not ok:
            self.bus.disconnect()
            return 1

        log.info("using EEPROM %s", self.locator.find_eeprom())
        self.fru_bus = FruBus(self.bus, self.locator)
        self.fru_bus.start()

        self.stopped = asyncio.Event()
        loop = asyncio.get_running_loop()
        for signum in [signal.SIGINT, signal.SIGTERM]:
            loop.add_signal_handler(signum, self.stopped.set)

        disconnected = asyncio.ensure_future(self.bus.wait_for_disconnect())
        stopping = asyncio.ensure_future(self.stopped.wait())
        await asyncio.wait([disconnected, stopping], return_when=asyncio.FIRST_COMPLETED)

        if stopping.done():
            log.info("signal received, shutting down")
            disconnected.cancel()
            self.fru_bus.stop()
            self.bus.disconnect()
        else:
            log.error("lost connection to the %s bus", self.args.bus)
            stopping.cancel()
            self.fru_bus.stop()

        for signum in [signal.SIGINT, signal.SIGTERM]:
            loop.remove_signal_handler(signum)

        self.fru_bus.dump()
        return 0

    def close(self):
        if self.logger is not None:
            self.logger.close()

################################################################################
# main()
################################################################################

def main(argv=None):
    daemon = FruDeviceDaemon(argv)
    try:
        if daemon.args.dump:
            return daemon.dump()
        return asyncio.run(daemon.run())
    finally:
        daemon.close()

if __name__ == "__main__":
    sys.exit(main())
