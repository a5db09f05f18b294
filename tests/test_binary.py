import io

import pytest
from hypothesis import given
from hypothesis import strategies as st

from chnative.binary import Decoder, Encoder


def _encode(method, value):
    buf = io.BytesIO()
    getattr(Encoder(buf), method)(value)
    return buf.getvalue()


def _decode(method, data):
    return getattr(Decoder(io.BytesIO(data)), method)()


INT_CASES = [
    ("int8", -(1 << 7), (1 << 7) - 1, 1),
    ("int16", -(1 << 15), (1 << 15) - 1, 2),
    ("int32", -(1 << 31), (1 << 31) - 1, 4),
    ("int64", -(1 << 63), (1 << 63) - 1, 8),
    ("uint8", 0, (1 << 8) - 1, 1),
    ("uint16", 0, (1 << 16) - 1, 2),
    ("uint32", 0, (1 << 32) - 1, 4),
    ("uint64", 0, (1 << 64) - 1, 8),
]


@pytest.mark.parametrize("name,low,high,size", INT_CASES)
def test_integer_round_trip_at_bounds(name, low, high, size):
    for value in (low, high, 0):
        data = _encode(f"write_{name}", value)
        assert len(data) == size
        assert _decode(f"read_{name}", data) == value


@pytest.mark.parametrize("name,low,high,size", INT_CASES)
def test_integer_out_of_range_rejected(name, low, high, size):
    with pytest.raises(ValueError):
        _encode(f"write_{name}", high + 1)
    with pytest.raises(ValueError):
        _encode(f"write_{name}", low - 1)


def test_little_endian_layout():
    assert _encode("write_uint16", 0x0102) == b"\x02\x01"
    assert _encode("write_uint32", 0x01020304) == b"\x04\x03\x02\x01"
    assert _encode("write_int8", -1) == b"\xff"


def test_uvarint_wire_bytes():
    assert _encode("write_uvarint", 300) == b"\xac\x02"
    assert _encode("write_uvarint", 0) == b"\x00"


@given(st.integers(min_value=0, max_value=(1 << 64) - 1))
def test_uvarint_round_trip(value):
    data = _encode("write_uvarint", value)
    assert len(data) <= 10
    assert _decode("read_uvarint", data) == value


def test_uvarint_negative_rejected():
    with pytest.raises(ValueError):
        _encode("write_uvarint", -1)


def test_uvarint_overflow():
    with pytest.raises(OverflowError):
        _decode("read_uvarint", b"\xff" * 9 + b"\x02")
    with pytest.raises(OverflowError):
        _decode("read_uvarint", b"\xff" * 11)


def test_uvarint_truncated():
    with pytest.raises(EOFError):
        _decode("read_uvarint", b"")
    with pytest.raises(EOFError):
        _decode("read_uvarint", b"\x80")


@given(st.floats(allow_nan=False))
def test_float64_round_trip(value):
    assert _decode("read_float64", _encode("write_float64", value)) == value


@given(st.floats(width=32, allow_nan=False))
def test_float32_round_trip(value):
    data = _encode("write_float32", value)
    assert len(data) == 4
    assert _decode("read_float32", data) == value


@given(st.text())
def test_string_round_trip(value):
    assert _decode("read_string", _encode("write_string", value)) == value


def test_string_layout():
    assert _encode("write_string", "ab") == b"\x02ab"
    assert _encode("write_string", "") == b"\x00"


def test_bool_encoding_and_decoding():
    assert _encode("write_bool", True) == b"\x01"
    assert _encode("write_bool", False) == b"\x00"
    assert _decode("read_bool", b"\x01") is True
    assert _decode("read_bool", b"\x02") is False


def test_byte_and_raw():
    buf = io.BytesIO()
    enc = Encoder(buf)
    enc.write_byte(7)
    enc.write_raw(b"xyz")
    dec = Decoder(io.BytesIO(buf.getvalue()))
    assert dec.read_byte() == 7
    assert dec.read_raw(3) == b"xyz"
    with pytest.raises(EOFError):
        dec.read_raw(1)


def test_read_fixed_short_input():
    dec = Decoder(io.BytesIO(b"abc"))
    assert dec.read_fixed(2) == b"ab"
    with pytest.raises(EOFError):
        dec.read_fixed(2)


def test_read_uint64_short_input():
    with pytest.raises(EOFError):
        _decode("read_uint64", b"\x01\x02\x03")


def test_sequence_round_trip():
    buf = io.BytesIO()
    enc = Encoder(buf)
    enc.write_uint8(1)
    enc.write_string("hello")
    enc.write_int64(-42)
    enc.write_float64(1.5)
    enc.write_uvarint(1 << 40)
    dec = Decoder(io.BytesIO(buf.getvalue()))
    assert dec.read_uint8() == 1
    assert dec.read_string() == "hello"
    assert dec.read_int64() == -42
    assert dec.read_float64() == 1.5
    assert dec.read_uvarint() == 1 << 40


class _Chunked(io.RawIOBase):
    def __init__(self, data):
        self._data = data

    def readable(self):
        return True

    def read(self, size=-1):
        chunk, self._data = self._data[:1], self._data[1:]
        return chunk


def test_decoder_handles_short_reads():
    data = _encode("write_uint64", (1 << 64) - 1)
    assert Decoder(_Chunked(data)).read_uint64() == (1 << 64) - 1


class _Flushable:
    def __init__(self):
        self.data = bytearray()
        self.flushes = 0

    def write(self, data):
        self.data += data
        return len(data)

    def flush(self):
        self.flushes += 1


def test_flush_delegates_to_output():
    out = _Flushable()
    enc = Encoder(out)
    enc.write_uint8(5)
    enc.flush()
    assert out.flushes == 1
    assert bytes(out.data) == b"\x05"


class _Sink:
    def __init__(self):
        self.data = bytearray()

    def write(self, data):
        self.data.extend(data)
        return len(data)


def test_flush_without_support_keeps_encoder_usable():
    sink = _Sink()
    enc = Encoder(sink)
    enc.write_uint8(9)
    enc.flush()
    enc.write_uint16(0x0102)
    assert bytes(sink.data) == b"\x09\x02\x01"