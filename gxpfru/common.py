################################################################################
#                                                                              #
#                                  common.py                                   #
#                                                                              #
################################################################################

""" sentinels substituted when a source can't be read """
UNKNOWN     = "Unknown"
UNKNOWN_MAC = "00:00:00:00:00:00"

MANUFACTURER = "Hewlett Packard Enterprise"

""" ordered EEPROM candidates (first one that opens wins) """
EEPROM_PATHS = [
    "/sys/bus/i2c/devices/2-0055/eeprom",
    "/sys/bus/i2c/devices/2-0054/eeprom",
    "/sys/bus/i2c/devices/2-0050/eeprom"
]
SERVER_ID_PATH = "/sys/class/soc/xreg/server_id"

""" D-Bus names """
BUS_NAME                 = "xyz.openbmc_project.GxpFruDevice"
FRU_MANAGER_PATH         = "/xyz/openbmc_project/FruDevice"
FRU_MANAGER_INTERFACE    = "xyz.openbmc_project.FruDeviceManager"
FRU_DEVICE_PATH          = "/xyz/openbmc_project/FruDevice/HPE"
FRU_DEVICE_INTERFACE     = "xyz.openbmc_project.FruDevice"
