import asyncio

import pytest

SERIAL_NUMBER     = b"SN00000000000001"
PART_NUMBER       = b"ABC1234567890123"
PCA_SERIAL_NUMBER = b"PCASN00000000001"
PCA_PART_NUMBER   = b"PCAPN00000000001"
MAC0              = bytes([0x0a, 0x1b, 0x2c, 0x3d, 0x4e, 0x5f])
MAC1              = bytes([0x80, 0x91, 0xa2, 0xb3, 0xc4, 0xff])

def make_image(serial=SERIAL_NUMBER, part=PART_NUMBER, pca_serial=PCA_SERIAL_NUMBER,
               pca_part=PCA_PART_NUMBER, mac0=MAC0, mac1=MAC1, size=256):
    """ a fabricated FRU EEPROM with every field at its fixed offset """
    buf = bytearray(size)
    buf[1:17]    = serial
    buf[109:125] = part
    buf[132:138] = mac0
    buf[138:144] = mac1
    buf[144:160] = pca_serial
    buf[160:176] = pca_part
    return bytes(buf)

class FakeBus:
    """ records export/unexport calls in place of a dbus_fast MessageBus """

    def __init__(self):
        self.calls = []
        self.exported = {}

    def export(self, path, iface):
        self.calls.append(("export", path, iface))
        self.exported[(path, iface.name)] = iface

    def unexport(self, path, iface):
        self.calls.append(("unexport", path, iface))
        del self.exported[(path, iface.name)]

@pytest.fixture
def eeprom(tmp_path):
    pathname = tmp_path / "eeprom"
    pathname.write_bytes(make_image())
    return str(pathname)

@pytest.fixture
def server_id_file(tmp_path):
    pathname = tmp_path / "server_id"
    pathname.write_text("42\n")
    return str(pathname)

@pytest.fixture
def missing(tmp_path):
    return str(tmp_path / "no-such-eeprom")

@pytest.fixture
def fake_bus():
    return FakeBus()

class FakeMessageBus(FakeBus):
    """ stands in for dbus_fast.aio.MessageBus in the daemon's run loop """

    def __init__(self, reply):
        super().__init__()
        self.reply = reply
        self.requested = []
        self.disconnected = None

    async def connect(self):
        self.disconnected = asyncio.Event()
        return self

    async def request_name(self, name):
        self.requested.append(name)
        return self.reply

    async def wait_for_disconnect(self):
        await self.disconnected.wait()

    def disconnect(self):
        self.disconnected.set()
