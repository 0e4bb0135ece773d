"""Typed views over raw image data such as pathing grids and height maps."""

from __future__ import annotations

import struct
from dataclasses import dataclass, field
from typing import ClassVar


@dataclass
class ImageData:
    """Raw image data as sent by the game: a size, a pixel depth and a buffer."""

    bits_per_pixel: int
    width: int
    height: int
    data: bytearray = field(default_factory=bytearray)

    def __post_init__(self) -> None:
        if not isinstance(self.data, bytearray):
            self.data = bytearray(self.data)

    def copy(self) -> ImageData:
        """Return an ImageData with its own copy of the buffer."""
        return ImageData(self.bits_per_pixel, self.width, self.height, bytearray(self.data))

    def _require_bpp(self, expected: int) -> None:
        if self.bits_per_pixel != expected:
            raise ValueError(
                f"bad BitsPerPixel, expected {expected} got {self.bits_per_pixel}"
            )

    def bits(self) -> ImageDataBits:
        """A bit-indexed view sharing this buffer; requires 1 bit per pixel."""
        self._require_bpp(1)
        return ImageDataBits(self.width, self.height, self.data)

    def bytes(self) -> ImageDataBytes:
        """A byte-indexed view sharing this buffer; requires 8 bits per pixel."""
        self._require_bpp(8)
        return ImageDataBytes(self.width, self.height, self.data)

    def ints(self) -> ImageDataInt32:
        """An int32-indexed view sharing this buffer; requires 32 bits per pixel."""
        self._require_bpp(32)
        return ImageDataInt32(self.width, self.height, self.data)


@dataclass
class ImageGrid:
    """Common storage for typed image views, origin at the upper left.

    When no buffer is given an empty (zeroed) one of the right size is created.
    """

    width: int
    height: int
    data: bytearray | None = None

    bits_per_pixel: ClassVar[int] = 8

    def __post_init__(self) -> None:
        needed = (self.width * self.height * self.bits_per_pixel + 7) // 8
        if self.data is None:
            self.data = bytearray(needed)
        elif not isinstance(self.data, bytearray):
            self.data = bytearray(self.data)
        if len(self.data) < needed:
            raise ValueError(
                f"image buffer too small: {len(self.data)} bytes, need {needed}"
            )

    def in_bounds(self, x: int, y: int) -> bool:
        """Check that the coordinates fall within the image."""
        return 0 <= x < self.width and 0 <= y < self.height

    def copy(self):
        """Return a view of the same kind over a copy of the buffer."""
        return type(self)(self.width, self.height, bytearray(self.data))

    def _offset(self, x: int, y: int) -> int:
        return x + y * self.width


class ImageDataBits(ImageGrid):
    """One bit per pixel, most significant bit first."""

    bits_per_pixel: ClassVar[int] = 1

    @staticmethod
    def _locate(i: int) -> tuple[int, int]:
        return i // 8, 1 << (7 - i % 8)

    def get(self, x: int, y: int) -> bool:
        """The bit at (x, y); False when out of bounds."""
        if not self.in_bounds(x, y):
            return False
        index, bit = self._locate(self._offset(x, y))
        return bool(self.data[index] & bit)

    def set(self, x: int, y: int, value: bool) -> None:
        """Set or clear the bit at (x, y); out of bounds does nothing."""
        if not self.in_bounds(x, y):
            return
        index, bit = self._locate(self._offset(x, y))
        if value:
            self.data[index] |= bit
        else:
            self.data[index] &= ~bit & 0xFF

    def to_bytes(self) -> ImageDataBytes:
        """Convert to a byte map with False -> 0 and True -> 255."""
        result = ImageDataBytes(self.width, self.height)
        for y in range(self.height):
            for x in range(self.width):
                if self.get(x, y):
                    result.set(x, y, 255)
        return result


class ImageDataBytes(ImageGrid):
    """One byte per pixel."""

    bits_per_pixel: ClassVar[int] = 8

    def get(self, x: int, y: int) -> int:
        """The byte at (x, y); 0 when out of bounds."""
        if self.in_bounds(x, y):
            return self.data[self._offset(x, y)]
        return 0

    def set(self, x: int, y: int, value: int) -> None:
        """Set the byte at (x, y); out of bounds does nothing."""
        if self.in_bounds(x, y):
            self.data[self._offset(x, y)] = value


_INT32 = struct.Struct("<i")
_UINT32 = struct.Struct("<I")


class ImageDataInt32(ImageGrid):
    """One little-endian signed 32-bit integer per pixel."""

    bits_per_pixel: ClassVar[int] = 32

    def get(self, x: int, y: int) -> int:
        """The int32 at (x, y); 0 when out of bounds."""
        if self.in_bounds(x, y):
            return _INT32.unpack_from(self.data, 4 * self._offset(x, y))[0]
        return 0

    def set(self, x: int, y: int, value: int) -> None:
        """Set the int32 at (x, y), wrapping to 32 bits; out of bounds does nothing."""
        if self.in_bounds(x, y):
            _UINT32.pack_into(self.data, 4 * self._offset(x, y), value & 0xFFFFFFFF)