"""Building blocks for the ClickHouse native protocol: wire encoding, CityHash, query options and profile events."""

__version__ = "0.1.0"
__all__ = ["binary", "cityhash", "events", "options"]