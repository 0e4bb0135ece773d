"""A unit from an observation joined with its type data, and unit predicates."""

from __future__ import annotations

from collections.abc import Callable, Sequence
from typing import Any

from sc2botkit.geometry import Point2D
from sc2botkit.models import (
    Alliance,
    Attribute,
    DisplayType,
    RawUnit,
    UnitTypeData,
    Weapon,
    WeaponTargetType,
)


class Unit:
    """A unit from the latest observation combined with its unit type data.

    Attributes of the raw unit and of its type data can be read directly from
    the Unit (``unit.tag``, ``unit.mineral_cost``). A Unit without a raw unit
    stands for "no unit" and is false in a boolean context.
    """

    __slots__ = ("raw", "data", "context")

    def __init__(
        self,
        raw: RawUnit | None = None,
        data: UnitTypeData | None = None,
        context: Any = None,
    ) -> None:
        self.raw = raw
        self.data = data
        self.context = context

    def __getattr__(self, name: str) -> Any:
        if name in Unit.__slots__:
            raise AttributeError(name)
        for source in (self.raw, self.data):
            if source is not None and hasattr(source, name):
                return getattr(source, name)
        raise AttributeError(f"{type(self).__name__} has no attribute {name!r}")

    def __bool__(self) -> bool:
        return self.raw is not None

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Unit):
            return NotImplemented
        return self.raw is other.raw and self.data is other.data

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        if self.raw is None:
            return "Unit(None)"
        return f"Unit(tag={self.raw.tag}, unit_type={self.raw.unit_type})"

    @property
    def _attributes(self) -> Sequence[Attribute]:
        return self.data.attributes if self.data is not None else ()

    @property
    def _weapons(self) -> Sequence[Weapon]:
        return self.data.weapons if self.data is not None else ()

    def _display_is(self, display: DisplayType) -> bool:
        return self.raw is not None and self.raw.display_type == display

    def is_visible(self) -> bool:
        return self._display_is(DisplayType.VISIBLE)

    def is_snapshot(self) -> bool:
        return self._display_is(DisplayType.SNAPSHOT)

    def is_hidden(self) -> bool:
        return self._display_is(DisplayType.HIDDEN)

    def has_attribute(self, attr: Attribute) -> bool:
        """Whether this unit's type has the given attribute."""
        return self.raw is not None and attr in self._attributes

    def is_structure(self) -> bool:
        """Whether the unit is a building."""
        return self.has_attribute(Attribute.STRUCTURE)

    def pos2d(self) -> Point2D:
        """The x/y location of the unit."""
        if self.raw is None:
            raise AttributeError("no unit")
        return self.raw.pos.to_point2d()

    def is_started(self) -> bool:
        """Whether the unit has started building (is not a placement ghost)."""
        return self.raw is not None and self.raw.build_progress > 0

    def is_built(self) -> bool:
        return self.raw is not None and self.raw.build_progress == 1

    def is_idle(self) -> bool:
        """Whether the unit has no orders."""
        return self.raw is not None and not self.raw.orders

    def has_buff(self, buff_id: int) -> bool:
        return self.raw is not None and buff_id in self.raw.buff_ids

    def has_energy(self, energy: float) -> bool:
        return self.raw is not None and self.raw.energy >= energy

    def _weapon_damage(self, target_type: WeaponTargetType) -> float:
        return max(
            (
                w.damage
                for w in self._weapons
                if w.type in (target_type, WeaponTargetType.ANY)
            ),
            default=0.0,
        )

    def ground_weapon_damage(self) -> float:
        """Damage per shot against ground targets."""
        return max(self._weapon_damage(WeaponTargetType.GROUND), 0.0)

    def air_weapon_damage(self) -> float:
        """Damage per shot against air targets."""
        return max(self._weapon_damage(WeaponTargetType.AIR), 0.0)

    def weapon_damage(self, target: Unit) -> float:
        """Damage per shot against the given target."""
        if target.is_flying:
            return self.air_weapon_damage()
        return self.ground_weapon_damage()

    def weapon_range(self, target: Unit) -> float:
        """Maximum range to attack the target from; negative if it cannot be attacked."""
        if not target:
            return -1.0
        target_type = WeaponTargetType.AIR if target.is_flying else WeaponTargetType.GROUND
        return max(
            (
                w.range
                for w in self._weapons
                if w.type in (target_type, WeaponTargetType.ANY) and w.damage > 0
            ),
            default=-1.0,
        )

    def is_in_weapons_range(self, target: Unit, gap: float) -> bool:
        """Whether the target is within weapon range, allowing an extra gap."""
        if self.raw is None:
            return False
        max_range = self.weapon_range(target)
        if max_range < 0:
            return False
        dist = self.pos2d().distance(target.pos2d())
        return dist - gap <= max_range + self.raw.radius + target.radius


UnitPredicate = Callable[[Unit], bool]


def is_type(unit_type: int) -> UnitPredicate:
    """A predicate matching units of the given type."""
    return lambda unit: unit.unit_type == unit_type


def is_self_type(unit_type: int) -> UnitPredicate:
    """A predicate matching the player's own units of the given type."""
    return lambda unit: unit.alliance == Alliance.SELF and unit.unit_type == unit_type


def is_mineral(unit: Unit) -> bool:
    return bool(unit.has_minerals)


def is_geyser(unit: Unit) -> bool:
    return bool(unit.has_vespene)


def has_attribute(attribute: Attribute) -> UnitPredicate:
    """A predicate matching units whose type has the given attribute."""
    return lambda unit: attribute in unit.attributes


def is_structure(unit: Unit) -> bool:
    return Attribute.STRUCTURE in unit.attributes