"""Stable string hash used for hatch-angle buckets.

``hash()`` on ``str`` is salted per process, so it cannot drive a
reproducible drawing. ``hash_string`` is a rolling ``h * 31 + c``
accumulator over UTF-16 code units, truncated to a signed 32-bit integer
after every step::

    h = 0
    for c in utf16_code_units(s):
        h = int32((h << 5) - h + c)
    return abs(h)

The constants are part of the drawing format: changing them changes which
of the four default angles an unknown event kind receives.
"""

HASH_VERSION = 1

_UINT32 = 0xFFFFFFFF


def _to_int32(value: int) -> int:
    value &= _UINT32
    return value - 0x100000000 if value & 0x80000000 else value


def _utf16_units(text: str):
    data = text.encode("utf-16-le")
    for i in range(0, len(data), 2):
        yield data[i] | (data[i + 1] << 8)


def hash_string(text: str) -> int:
    """Return the non-negative v1 hash of ``text``."""
    h = 0
    for unit in _utf16_units(text):
        h = _to_int32((h << 5) - h + unit)
    return abs(h)
