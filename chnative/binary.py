"""Little-endian primitives and length-prefixed strings for the native protocol."""

from __future__ import annotations

import struct
from typing import BinaryIO

MAX_VARINT_LEN64 = 10
_TEXT_ERRORS = "surrogateescape"


def _to_bytes(value: str) -> bytes:
    return value.encode("utf-8", _TEXT_ERRORS)


class Encoder:
    """Writes protocol values to a binary stream."""

    def __init__(self, output: BinaryIO) -> None:
        self._output = output

    def _pack(self, fmt: str, value: int | float) -> None:
        try:
            data = struct.pack(fmt, value)
        except struct.error as exc:
            raise ValueError(f"{value!r} does not fit the {fmt!r} encoding") from exc
        self._output.write(data)

    def write_raw(self, data: bytes) -> None:
        self._output.write(bytes(data))

    def write_bool(self, value: bool) -> None:
        self.write_uint8(1 if value else 0)

    def write_byte(self, value: int) -> None:
        self.write_uint8(value)

    def write_int8(self, value: int) -> None:
        self._pack("<b", value)

    def write_int16(self, value: int) -> None:
        self._pack("<h", value)

    def write_int32(self, value: int) -> None:
        self._pack("<i", value)

    def write_int64(self, value: int) -> None:
        self._pack("<q", value)

    def write_uint8(self, value: int) -> None:
        self._pack("<B", value)

    def write_uint16(self, value: int) -> None:
        self._pack("<H", value)

    def write_uint32(self, value: int) -> None:
        self._pack("<I", value)

    def write_uint64(self, value: int) -> None:
        self._pack("<Q", value)

    def write_float32(self, value: float) -> None:
        self._pack("<f", value)

    def write_float64(self, value: float) -> None:
        self._pack("<d", value)

    def write_uvarint(self, value: int) -> None:
        if not 0 <= value < 1 << 64:
            raise ValueError(f"{value!r} does not fit an unsigned 64-bit varint")
        out = bytearray()
        while value >= 0x80:
            out.append((value & 0x7F) | 0x80)
            value >>= 7
        out.append(value)
        self._output.write(bytes(out))

    def write_string(self, value: str) -> None:
        data = _to_bytes(value)
        self.write_uvarint(len(data))
        self._output.write(data)

    def flush(self) -> None:
        flush = getattr(self._output, "flush", None)
        if flush is not None:
            flush()


class Decoder:
    """Reads protocol values from a binary stream."""

    def __init__(self, source: BinaryIO) -> None:
        self._source = source

    def _read_exact(self, size: int) -> bytes:
        if size < 0:
            raise ValueError(f"negative read size {size}")
        buf = bytearray()
        while len(buf) < size:
            chunk = self._source.read(size - len(buf))
            if not chunk:
                raise EOFError(f"expected {size} bytes, got {len(buf)}")
            buf += chunk
        return bytes(buf)

    def _unpack(self, fmt: str) -> int | float:
        return struct.unpack(fmt, self._read_exact(struct.calcsize(fmt)))[0]

    def read_raw(self, size: int) -> bytes:
        return self._read_exact(size)

    def read_bool(self) -> bool:
        return self.read_byte() == 1

    def read_byte(self) -> int:
        return self._read_exact(1)[0]

    def read_int8(self) -> int:
        return self._unpack("<b")

    def read_int16(self) -> int:
        return self._unpack("<h")

    def read_int32(self) -> int:
        return self._unpack("<i")

    def read_int64(self) -> int:
        return self._unpack("<q")

    def read_uint8(self) -> int:
        return self.read_byte()

    def read_uint16(self) -> int:
        return self._unpack("<H")

    def read_uint32(self) -> int:
        return self._unpack("<I")

    def read_uint64(self) -> int:
        return self._unpack("<Q")

    def read_float32(self) -> float:
        return self._unpack("<f")

    def read_float64(self) -> float:
        return self._unpack("<d")

    def read_uvarint(self) -> int:
        result = 0
        shift = 0
        for index in range(MAX_VARINT_LEN64):
            chunk = self._source.read(1)
            if not chunk:
                if index == 0:
                    raise EOFError("no data for varint")
                raise EOFError("unexpected end of data inside varint")
            byte = chunk[0]
            if byte < 0x80:
                if index == MAX_VARINT_LEN64 - 1 and byte > 1:
                    raise OverflowError("varint overflows a 64-bit integer")
                return result | (byte << shift)
            result |= (byte & 0x7F) << shift
            shift += 7
        raise OverflowError("varint overflows a 64-bit integer")

    def read_fixed(self, length: int) -> bytes:
        return self._read_exact(length)

    def read_string(self) -> str:
        length = self.read_uvarint()
        return self.read_fixed(length).decode("utf-8", _TEXT_ERRORS)