"""This package publishes GXP FRU EEPROM identity data on D-Bus"""

__version__ = "1.0.0"  # This is used by flit and other pypi things
version = __version__
