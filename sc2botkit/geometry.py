"""Integer and real points and vectors on the game map."""

from __future__ import annotations

import math
from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class VecI:
    """A 2D vector with integer components."""

    x: int = 0
    y: int = 0

    def neg(self) -> VecI:
        """Return the vector pointing the opposite way."""
        return VecI(-self.x, -self.y)

    def add(self, other: VecI) -> VecI:
        return VecI(self.x + other.x, self.y + other.y)

    def sub(self, other: VecI) -> VecI:
        return VecI(self.x - other.x, self.y - other.y)

    def mul(self, c: int) -> VecI:
        return VecI(self.x * c, self.y * c)

    def dot(self, other: VecI) -> int:
        return self.x * other.x + self.y * other.y

    def len2(self) -> int:
        """Squared length of the vector."""
        return self.dot(self)

    def length(self) -> float:
        """Length (magnitude) of the vector."""
        return self.len64()

    def len64(self) -> float:
        return math.sqrt(self.len2())

    def manhattan(self) -> int:
        """Manhattan distance represented by this vector."""
        return abs(self.x) + abs(self.y)

    __neg__ = neg
    __add__ = add
    __sub__ = sub
    __mul__ = mul


@dataclass(frozen=True, slots=True)
class Vec2D:
    """A 2D vector with real components."""

    x: float = 0.0
    y: float = 0.0

    def neg(self) -> Vec2D:
        return Vec2D(-self.x, -self.y)

    def add(self, other: Vec2D) -> Vec2D:
        return Vec2D(self.x + other.x, self.y + other.y)

    def sub(self, other: Vec2D) -> Vec2D:
        return Vec2D(self.x - other.x, self.y - other.y)

    def mul(self, c: float) -> Vec2D:
        return Vec2D(self.x * c, self.y * c)

    def div(self, c: float) -> Vec2D:
        return Vec2D(self.x / c, self.y / c)

    def mul64(self, c: float) -> Vec2D:
        return Vec2D(float(self.x) * c, float(self.y) * c)

    def dot(self, other: Vec2D) -> float:
        return self.x * other.x + self.y * other.y

    def len2(self) -> float:
        return self.dot(self)

    def length(self) -> float:
        return self.len64()

    def len64(self) -> float:
        return math.sqrt(self.len2())

    def manhattan(self) -> float:
        return abs(self.x) + abs(self.y)

    def norm(self) -> Vec2D:
        """Unit vector in the same direction; raises ZeroDivisionError for a zero vector."""
        return self.mul64(1.0 / self.len64())

    def quadrant(self, n: int) -> Vec2D:
        """Round the angle to the nearest nth of a circle and return a unit vector."""
        a = math.atan2(self.y, self.x)
        q = int(n * a / (2 * math.pi) + n + 0.5) % n
        a = 2 * math.pi * q / n
        return Vec2D(math.cos(a), math.sin(a))

    __neg__ = neg
    __add__ = add
    __sub__ = sub
    __mul__ = mul
    __truediv__ = div


@dataclass(frozen=True, slots=True)
class Vec:
    """A 3D vector with real components."""

    x: float = 0.0
    y: float = 0.0
    z: float = 0.0

    def neg(self) -> Vec:
        return Vec(-self.x, -self.y, -self.z)

    def add(self, other: Vec) -> Vec:
        return Vec(self.x + other.x, self.y + other.y, self.z + other.z)

    def sub(self, other: Vec) -> Vec:
        return Vec(self.x - other.x, self.y - other.y, self.z - other.z)

    def mul(self, c: float) -> Vec:
        return Vec(self.x * c, self.y * c, self.z * c)

    def div(self, c: float) -> Vec:
        return Vec(self.x / c, self.y / c, self.z / c)

    def mul64(self, c: float) -> Vec:
        return Vec(float(self.x) * c, float(self.y) * c, float(self.z) * c)

    def dot(self, other: Vec) -> float:
        return self.x * other.x + self.y * other.y + self.z * other.z

    def len2(self) -> float:
        return self.dot(self)

    def length(self) -> float:
        return self.len64()

    def len64(self) -> float:
        return math.sqrt(self.len2())

    def manhattan(self) -> float:
        return abs(self.x) + abs(self.y) + abs(self.z)

    def norm(self) -> Vec:
        """Unit vector in the same direction; raises ZeroDivisionError for a zero vector."""
        return self.mul64(1.0 / self.len64())

    def cross(self, other: Vec) -> Vec:
        """Cross product self x other."""
        return Vec(
            self.y * other.z - self.z * other.y,
            self.z * other.x - self.x * other.z,
            self.x * other.y - self.y * other.x,
        )

    __neg__ = neg
    __add__ = add
    __sub__ = sub
    __mul__ = mul
    __truediv__ = div


@dataclass(frozen=True, slots=True)
class PointI:
    """A map cell with integer coordinates."""

    x: int = 0
    y: int = 0

    def to_point2d(self) -> Point2D:
        return Point2D(float(self.x), float(self.y))

    def to_point2d_centered(self) -> Point2D:
        """Convert to a Point2D at the centre of this cell."""
        return Point2D(self.x + 0.5, self.y + 0.5)

    def to_point(self) -> Point:
        return Point(float(self.x), float(self.y), 0.0)

    def to_point_centered(self) -> Point:
        return Point(self.x + 0.5, self.y + 0.5, 0.0)

    def vec_to(self, other: PointI) -> VecI:
        return VecI(other.x - self.x, other.y - self.y)

    def distance(self, other: PointI) -> float:
        return self.vec_to(other).length()

    def distance2(self, other: PointI) -> int:
        return self.vec_to(other).len2()

    def manhattan(self, other: PointI) -> int:
        return self.vec_to(other).manhattan()

    def add(self, v: VecI) -> PointI:
        return PointI(self.x + v.x, self.y + v.y)

    def offset4_by(self, by: int) -> tuple[PointI, PointI, PointI, PointI]:
        """Von Neumann neighbourhood at distance ``by``: N, E, S, W."""
        x, y = self.x, self.y
        return (PointI(x, y - by), PointI(x + by, y), PointI(x, y + by), PointI(x - by, y))

    def offset8_by(self, by: int) -> tuple[PointI, ...]:
        """Moore neighbourhood at distance ``by``, clockwise from N."""
        x, y = self.x, self.y
        return (
            PointI(x, y - by),
            PointI(x + by, y - by),
            PointI(x + by, y),
            PointI(x + by, y + by),
            PointI(x, y + by),
            PointI(x - by, y + by),
            PointI(x - by, y),
            PointI(x - by, y - by),
        )


@dataclass(frozen=True, slots=True)
class Point2D:
    """A real-valued 2D map position."""

    x: float = 0.0
    y: float = 0.0

    def to_point_i(self) -> PointI:
        """Convert by truncating the coordinates."""
        return PointI(int(self.x), int(self.y))

    def to_point(self) -> Point:
        return Point(self.x, self.y, 0.0)

    def vec_to(self, other: Point2D) -> Vec2D:
        return Vec2D(other.x - self.x, other.y - self.y)

    def dir_to(self, other: Point2D) -> Vec2D:
        """Unit vector pointing from this point to ``other``."""
        return self.vec_to(other).norm()

    def offset(self, toward: Point2D, by: float) -> Point2D:
        """Move toward a target by the given distance."""
        return self.add(self.dir_to(toward).mul(by))

    def distance(self, other: Point2D) -> float:
        return self.vec_to(other).length()

    def distance2(self, other: Point2D) -> float:
        return self.vec_to(other).len2()

    def manhattan(self, other: Point2D) -> float:
        return self.vec_to(other).manhattan()

    def add(self, v: Vec2D) -> Point2D:
        return Point2D(self.x + v.x, self.y + v.y)

    def offset4_by(self, by: float) -> tuple[Point2D, Point2D, Point2D, Point2D]:
        x, y = self.x, self.y
        return (Point2D(x, y - by), Point2D(x + by, y), Point2D(x, y + by), Point2D(x - by, y))

    def offset8_by(self, by: float) -> tuple[Point2D, ...]:
        x, y = self.x, self.y
        return (
            Point2D(x, y - by),
            Point2D(x + by, y - by),
            Point2D(x + by, y),
            Point2D(x + by, y + by),
            Point2D(x, y + by),
            Point2D(x - by, y + by),
            Point2D(x - by, y),
            Point2D(x - by, y - by),
        )


@dataclass(frozen=True, slots=True)
class Point:
    """A real-valued 3D world position."""

    x: float = 0.0
    y: float = 0.0
    z: float = 0.0

    def to_point_i(self) -> PointI:
        """Convert by truncating X/Y and dropping Z."""
        return PointI(int(self.x), int(self.y))

    def to_point2d(self) -> Point2D:
        return Point2D(self.x, self.y)

    def vec_to(self, other: Point) -> Vec:
        return Vec(other.x - self.x, other.y - self.y, other.z - self.z)

    def dir_to(self, other: Point) -> Vec:
        return self.vec_to(other).norm()

    def offset(self, toward: Point, by: float) -> Point:
        return self.add(self.dir_to(toward).mul(by))

    def distance(self, other: Point) -> float:
        return self.vec_to(other).length()

    def distance2(self, other: Point) -> float:
        return self.vec_to(other).len2()

    def add(self, v: Vec) -> Point:
        return Point(self.x + v.x, self.y + v.y, self.z + v.z)