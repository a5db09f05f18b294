# chnative

Pure-Python building blocks for the ClickHouse native protocol. The package
has no dependencies outside the standard library.

## Modules

### `chnative.binary`

`Encoder` writes protocol values to any binary file-like object. `Decoder`
reads them back.

- Fixed-width integers and floats are little-endian: `write_int8` through
  `write_uint64`, `write_float32`, `write_float64`, and the matching `read_*`
  methods.
- `write_bool` writes one byte, 1 or 0. `read_bool` is true only for the
  byte 1.
- `write_uvarint` / `read_uvarint` handle unsigned LEB128 varints of up to
  64 bits.
- `write_string` / `read_string` handle UTF-8 text with a varint length
  prefix.
- `write_raw`, `read_raw` and `read_fixed` move plain bytes.
- `Encoder.flush` flushes the underlying stream when the stream has a
  `flush` method.

Errors:

- The encoder raises `ValueError` for a value that does not fit its type.
- The decoder raises `EOFError` when the stream ends before a value is
  complete.
- The decoder raises `OverflowError` for a varint longer than 64 bits.

### `chnative.cityhash`

CityHash 1.0.2. This is the variant ClickHouse uses for the checksums of
compressed blocks.

- `city_hash64(data)`, `city_hash64_with_seed(data, seed)` and
  `city_hash64_with_seeds(data, seed0, seed1)` return 64-bit integers.
- `city_hash128(data)` and `city_hash128_with_seed(data, seed)` return a
  `Uint128`. It has the fields `lower` and `higher`. Its `to_bytes()` gives
  the low half then the high half, each little-endian.
- `City64` is an incremental 64-bit hasher with a hashlib-like interface:
  `update`, `intdigest`, `digest`, `hexdigest`, `reset` and `copy`.
  `digest()` returns eight big-endian bytes.

Inputs must be bytes-like. Passing a `str` raises `TypeError`. A seed
outside the unsigned 64-bit range raises `ValueError`.

### `chnative.options`

Per-query options are held in a `QueryOptions` dataclass. You build one
with `build_query_options(*options)` from option functions:

- `with_query_id` and `with_quota_key`
- `with_settings`, which replaces the settings dictionary
- `with_span`
- the callback setters `with_logs`, `with_progress`, `with_profile_info`
  and `with_profile_events`
- `with_external_table(*tables)`, which appends tables
- `with_std_async(wait)`

`QueryOptions.effective(deadline)` returns a copy of the options. When the
deadline is more than a second away, that copy's settings include
`max_execution_time` set to the remaining seconds plus five.

`QueryOptions.on_process()` returns an `OnProcess` holding the `logs`,
`progress`, `profile_info` and `profile_events` handlers. Each handler
forwards to the matching callback and does nothing when that callback is
unset. The `logs` handler calls the log callback once for each entry.

### `chnative.events`

`profile_events_from_columns(names, columns)` turns a columnar
profile-events block into a list of `ProfileEvent` records, one per row.
It maps these columns:

- `host_name`
- `current_time`
- `thread_id`
- `type`
- `name`
- `value`, read as a signed 64-bit number

It ignores other columns. It raises `ValueError` when the names and
columns do not match, or when the columns differ in length.

## What it does not do

This package is not a client. It opens no connections, sends no queries
and does not compress or decompress blocks. It provides the pieces such a
client is built from: wire encoding, checksums, query options and decoding
of profile events.

## Install

```
pip install .
```

For the test suite:

```
pip install ".[test]"
pytest
```

## Examples

Write values to a buffer and read them back:

```python
import io
from chnative.binary import Encoder, Decoder

buf = io.BytesIO()
enc = Encoder(buf)
enc.write_uvarint(300)
enc.write_string("hello")
enc.write_uint32(42)

dec = Decoder(io.BytesIO(buf.getvalue()))
assert dec.read_uvarint() == 300
assert dec.read_string() == "hello"
assert dec.read_uint32() == 42
```

Compute a CityHash128 checksum:

```python
from chnative.cityhash import city_hash128

h = city_hash128(b"some compressed block")
print(hex(h.lower), hex(h.higher), h.to_bytes())
```

Set up query options:

```python
from chnative.options import build_query_options, with_query_id, with_settings, with_progress

opts = build_query_options(
    with_query_id("q-1"),
    with_settings({"max_block_size": 10}),
    with_progress(lambda p: print("progress:", p)),
)
handlers = opts.on_process()
handlers.progress({"rows": 10})
```