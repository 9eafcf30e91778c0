import struct

import pytest


class FakeI2C:
    """CircuitPython style bus that records every transfer."""

    def __init__(self):
        self.writes = []
        self.locked = False
        self.deinited = False
        self.fail_after = None  # Raise OSError once this many writes succeeded
        self.busy = False

    def try_lock(self):
        if self.busy or self.locked:
            return False
        self.locked = True
        return True

    def unlock(self):
        self.locked = False

    def writeto(self, address, buffer):
        if self.fail_after is not None and len(self.writes) >= self.fail_after:
            raise OSError(121, "Remote I/O error")
        self.writes.append((address, bytes(buffer)))

    def deinit(self):
        self.deinited = True

    # Helpers for assertions

    def commands(self):
        return [w[1][1:] for w in self.writes if w[1][0] == 0x00]

    def data(self):
        return b"".join(w[1][1:] for w in self.writes if w[1][0] == 0x40)

    def clear(self):
        self.writes.clear()


@pytest.fixture
def fake_bus():
    return FakeI2C()


def build_bf2(glyphs, height=8, max_w=8, default_w=8, proportional=False, wide=False):
    """
    Build a BF2 font image.

    Args:
        glyphs: {codepoint: (width, [row bytes])}, one byte per row
    """
    bpr = (max_w + 7) // 8
    flags = (0x01 if proportional else 0) | (0x02 if wide else 0)
    header = b"B2" + struct.pack("<BBBBHBBH", 2, flags, max_w, height,
                                 len(glyphs), bpr, default_w, 0)
    index = b""
    data = b""
    for cp, (w, rows) in sorted(glyphs.items()):
        offset = len(data)
        cp_bytes = struct.pack("<I" if wide else "<H", cp)
        index += cp_bytes + bytes((w, offset & 0xFF, (offset >> 8) & 0xFF, offset >> 16))
        data += bytes(rows).ljust(height * bpr, b"\x00")
    return header + index + data


@pytest.fixture
def bf2_file(tmp_path):
    """Write a BF2 font to disk and return its path."""

    def _write(glyphs, **kw):
        path = tmp_path / "font.bf2"
        path.write_bytes(build_bf2(glyphs, **kw))
        return str(path)

    return _write


@pytest.fixture
def bf2_builder():
    return build_bf2
