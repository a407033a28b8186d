"""Encoded polyline codec.

Each point is sent as the difference from the previous point, scaled by
1e5 and rounded, zig-zag signed, split into 5-bit groups (low bits first)
with 0x20 marking "more groups follow", and offset by 63 into printable
ASCII.
"""

from __future__ import annotations

from typing import Iterable

from ...models.domain import Coordinate

PRECISION = 1e5


def _decode_value(polyline: str, index: int) -> tuple[int, int]:
    shift = 0
    result = 0
    while True:
        if index >= len(polyline):
            raise ValueError("Polyline ended in the middle of a value.")
        b = ord(polyline[index]) - 63
        index += 1
        if b < 0 or b > 0x3F:
            raise ValueError(f"Invalid polyline character {polyline[index - 1]!r}.")
        result |= (b & 0x1F) << shift
        shift += 5
        if b < 0x20:
            break
    delta = ~(result >> 1) if (result & 1) else (result >> 1)
    return delta, index


def decode_polyline(polyline: str) -> list[Coordinate]:
    """Decode an encoded polyline string to a list of coordinates."""
    coordinates: list[Coordinate] = []
    index = 0
    lat = 0
    lng = 0

    while index < len(polyline):
        d_lat, index = _decode_value(polyline, index)
        d_lng, index = _decode_value(polyline, index)
        lat += d_lat
        lng += d_lng
        coordinates.append(Coordinate(lat / PRECISION, lng / PRECISION))

    return coordinates


def _encode_value(value: int) -> str:
    value = ~(value << 1) if value < 0 else (value << 1)
    chunks = []
    while value >= 0x20:
        chunks.append(chr((0x20 | (value & 0x1F)) + 63))
        value >>= 5
    chunks.append(chr(value + 63))
    return "".join(chunks)


def encode_polyline(coordinates: Iterable[Coordinate]) -> str:
    """Encode coordinates, rounded to 1e-5 degrees, as a polyline string."""
    parts: list[str] = []
    prev_lat = 0
    prev_lng = 0
    for point in coordinates:
        lat = round(point.latitude * PRECISION)
        lng = round(point.longitude * PRECISION)
        parts.append(_encode_value(lat - prev_lat))
        parts.append(_encode_value(lng - prev_lng))
        prev_lat, prev_lng = lat, lng
    return "".join(parts)
