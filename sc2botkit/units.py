"""Lazily filtered collections of units."""

from __future__ import annotations

from collections.abc import Callable, Collection, Iterable, Iterator, Mapping, Sequence

from sc2botkit.geometry import Point2D, Vec2D
from sc2botkit.unit import Unit

UnitPredicate = Callable[[Unit], bool]


class Units:
    """A sequence of units with an optional filter applied when iterated."""

    __slots__ = ("_units", "_predicate")

    def __init__(
        self, units: Iterable[Unit] = (), predicate: UnitPredicate | None = None
    ) -> None:
        self._units: Sequence[Unit] = units if isinstance(units, Sequence) else tuple(units)
        self._predicate = predicate

    def __iter__(self) -> Iterator[Unit]:
        if self._predicate is None:
            return iter(self._units)
        return (u for u in self._units if self._predicate(u))

    def __len__(self) -> int:
        if self._predicate is None:
            return len(self._units)
        return sum(1 for _ in self)

    def __bool__(self) -> bool:
        return any(True for _ in self)

    def __repr__(self) -> str:
        return f"Units({list(self)!r})"

    def tags(self) -> list[int]:
        """The tag of every unit."""
        return [u.tag for u in self]

    def each_while(self, func: UnitPredicate) -> bool:
        """Call func until it returns false; False if it stopped early."""
        return all(func(u) for u in self)

    def each_until(self, func: UnitPredicate) -> bool:
        """Call func until it returns true; True if it stopped early."""
        return any(func(u) for u in self)

    def choose(self, predicate: UnitPredicate) -> Units:
        """The units for which predicate is true, evaluated lazily."""
        if not self._units:
            return self
        previous = self._predicate
        if previous is None:
            return Units(self._units, predicate)
        return Units(self._units, lambda u: previous(u) and predicate(u))

    def drop(self, predicate: UnitPredicate) -> Units:
        """The units for which predicate is false."""
        return self.choose(lambda u: not predicate(u))

    def partition(self, predicate: UnitPredicate) -> tuple[Units, Units]:
        """Split into the units predicate accepts and those it rejects."""
        chosen: list[Unit] = []
        dropped: list[Unit] = []
        for u in self:
            (chosen if predicate(u) else dropped).append(u)
        return Units(chosen), Units(dropped)

    def first(self) -> Unit:
        """The first unit, or an empty Unit if there is none."""
        return next(iter(self), Unit())

    def closest_to(self, pos: Point2D) -> Unit:
        """The unit nearest to pos, or an empty Unit if there is none."""
        return min(self, key=lambda u: pos.distance2(u.pos2d()), default=Unit())

    def closer_than(self, dist: float, pos: Point2D) -> Units:
        """The units at most dist away from pos."""
        dist2 = dist * dist
        return self.choose(lambda u: u.pos2d().distance2(pos) <= dist2)

    def center(self) -> Point2D:
        """The average location of the units; the origin if there are none."""
        total = Vec2D()
        count = 0
        for u in self:
            p = u.pos2d()
            total = total.add(Vec2D(p.x, p.y))
            count += 1
        if count == 0:
            return Point2D()
        mean = total.div(count)
        return Point2D(mean.x, mean.y)

    def concat(self, other: Units) -> Units:
        """These units followed by the other's."""
        if not self._units:
            return other
        return Units([*self, *other])

    @staticmethod
    def _tag_check(tags: Collection[int] | Mapping[int, bool]) -> UnitPredicate:
        if isinstance(tags, Mapping):
            return lambda u: bool(tags.get(u.tag, False))
        return lambda u: u.tag in tags

    def tagged(self, tags: Collection[int] | Mapping[int, bool]) -> Units:
        """The units whose tag is in tags (or maps to true)."""
        return self.choose(self._tag_check(tags))

    def not_tagged(self, tags: Collection[int] | Mapping[int, bool]) -> Units:
        """The units whose tag is not in tags (or does not map to true)."""
        check = self._tag_check(tags)
        return self.choose(lambda u: not check(u))

    def has_energy(self, energy: float) -> Units:
        return self.choose(lambda u: u.energy >= energy)

    def has_buff(self, buff_id: int) -> Units:
        return self.choose(lambda u: buff_id in u.buff_ids)

    def no_buff(self, buff_id: int) -> Units:
        return self.choose(lambda u: buff_id not in u.buff_ids)

    def is_started(self) -> Units:
        return self.choose(Unit.is_started)

    def is_built(self) -> Units:
        return self.choose(Unit.is_built)

    def is_idle(self) -> Units:
        return self.choose(Unit.is_idle)