"""Units of one observation, sorted into groups and filtered by alliance and role."""

from __future__ import annotations

from bisect import bisect_left
from collections.abc import Callable, Iterable, Iterator, Mapping, Sequence
from dataclasses import dataclass, replace
from enum import IntFlag
from itertools import chain
from typing import Any

from sc2botkit.models import Alliance, Attribute, RawUnit, UnitTypeData
from sc2botkit.unit import Unit
from sc2botkit.units import Units

UnitPredicate = Callable[[Unit], bool]


class UnitGroup(IntFlag):
    """Selectors that narrow a filtered view of one alliance's units."""

    FLYING = 1
    GROUND = 2
    CAN_ATTACK = 4
    PASSIVE = 8
    UNITS = 16
    STRUCTURES = 32


# Each alliance owns eight consecutive groups:
#   0 ground passive units      4 flying attacking units
#   1 ground passive structures 5 flying attacking structures
#   2 ground attack structures  6 flying passive structures
#   3 ground attack units       7 flying passive units
# Neutral units use 24 (other), 25 (minerals) and 26 (vespene).
_GROUPS_PER_ALLIANCE = 8
_NEUTRAL_ALL = 24
_NEUTRAL_MINERALS = 25
_NEUTRAL_VESPENE = 26
_GROUP_COUNT = 28

_ALLIANCE_INDEX: dict[Alliance, int] = {
    Alliance.SELF: 0,
    Alliance.ALLY: 1,
    Alliance.ENEMY: 2,
    Alliance.NEUTRAL: 3,
}


def _alliance_index(alliance: Alliance) -> int:
    try:
        return _ALLIANCE_INDEX[alliance]
    except KeyError:
        raise ValueError(f"unsupported alliance: {alliance!r}") from None


def sort_key(unit: RawUnit, data: UnitTypeData | None) -> tuple[int, int]:
    """The (group, unit type) pair that orders a unit within an observation."""
    base = _alliance_index(unit.alliance) * _GROUPS_PER_ALLIANCE
    if unit.alliance == Alliance.NEUTRAL:
        if data is not None and data.has_vespene:
            sub = 2
        elif data is not None and data.has_minerals:
            sub = 1
        else:
            sub = 0
    else:
        structure = data is not None and Attribute.STRUCTURE in data.attributes
        attacker = data is not None and bool(data.weapons)
        if attacker:
            sub = 2 if structure else 3
        else:
            sub = 1 if structure else 0
        if unit.is_flying:
            sub = 7 - sub
    return base + sub, unit.unit_type


_GROUND = (0, 1, 2, 3)
_FLYING = (4, 5, 6, 7)
_PASSIVE = (0, 1, 6, 7)
_ATTACKERS = (2, 3, 4, 5)
_PLAIN_UNITS = (0, 3, 4, 7)
_STRUCTURES = (1, 2, 5, 6)


def filter_to_mask(bits: UnitGroup | int) -> tuple[bool, ...]:
    """Which of an alliance's eight groups (plus a closing False) the bits select.

    A pair of opposing selectors with neither set means both.
    """
    bits = UnitGroup(bits)
    for pair in (
        UnitGroup.FLYING | UnitGroup.GROUND,
        UnitGroup.CAN_ATTACK | UnitGroup.PASSIVE,
        UnitGroup.UNITS | UnitGroup.STRUCTURES,
    ):
        if not bits & pair:
            bits |= pair

    excluded: set[int] = set()
    for flag, groups in (
        (UnitGroup.GROUND, _GROUND),
        (UnitGroup.FLYING, _FLYING),
        (UnitGroup.PASSIVE, _PASSIVE),
        (UnitGroup.CAN_ATTACK, _ATTACKERS),
        (UnitGroup.UNITS, _PLAIN_UNITS),
        (UnitGroup.STRUCTURES, _STRUCTURES),
    ):
        if not bits & flag:
            excluded.update(groups)
    return tuple(i not in excluded for i in range(_GROUPS_PER_ALLIANCE)) + (False,)


@dataclass(frozen=True)
class FilteredUnits:
    """A lazily evaluated selection of one alliance's units."""

    context: UnitContext
    alliance: Alliance
    bits: UnitGroup = UnitGroup(0)
    predicate: UnitPredicate | None = None

    def __post_init__(self) -> None:
        if self.alliance == Alliance.NEUTRAL:
            raise ValueError("neutral units cannot be filtered by role")
        _alliance_index(self.alliance)

    def _with(self, flag: UnitGroup) -> FilteredUnits:
        return replace(self, bits=self.bits | flag)

    def flying(self) -> FilteredUnits:
        return self._with(UnitGroup.FLYING)

    def ground(self) -> FilteredUnits:
        return self._with(UnitGroup.GROUND)

    def can_attack(self) -> FilteredUnits:
        return self._with(UnitGroup.CAN_ATTACK)

    def passive(self) -> FilteredUnits:
        return self._with(UnitGroup.PASSIVE)

    def units(self) -> FilteredUnits:
        return self._with(UnitGroup.UNITS)

    def structures(self) -> FilteredUnits:
        return self._with(UnitGroup.STRUCTURES)

    def choose(self, predicate: UnitPredicate) -> FilteredUnits:
        """Also require predicate to hold."""
        previous = self.predicate
        if previous is None:
            return replace(self, predicate=predicate)
        return replace(self, predicate=lambda u: previous(u) and predicate(u))

    def _iter(self) -> Iterator[Unit]:
        base = _alliance_index(self.alliance) * _GROUPS_PER_ALLIANCE
        groups = self.context._groups
        wrapped = self.context._wrapped
        selected = chain.from_iterable(
            wrapped[groups[base + i]:groups[base + i + 1]]
            for i, ok in enumerate(filter_to_mask(self.bits))
            if ok
        )
        if self.predicate is None:
            return selected
        return (u for u in selected if self.predicate(u))

    def all(self) -> Units:
        """Every selected unit, in group order."""
        return Units(list(self._iter()))

    def first(self) -> Unit:
        """The first selected unit, or an empty Unit."""
        return next(self._iter(), Unit())


class _TypedUnits:
    """One alliance's units indexed by unit type."""

    def __init__(self, context: UnitContext, alliance: Alliance) -> None:
        self.context = context
        self.alliance = alliance
        self._by_type: dict[int, list[Unit]] = {}

    def _reset(self) -> None:
        self._by_type = {}

    def _add(self, unit: Unit) -> None:
        self._by_type.setdefault(unit.raw.unit_type, []).append(unit)

    def __getitem__(self, unit_type: int) -> Units:
        return Units(self._by_type.get(unit_type, ()))

    def __contains__(self, unit_type: object) -> bool:
        return unit_type in self._by_type

    def types(self) -> list[int]:
        """The unit types present, in sorted order."""
        return list(self._by_type)


class AllianceUnits(_TypedUnits):
    """Units of the player, an ally or the enemy, with role filters."""

    def _filter(self) -> FilteredUnits:
        return FilteredUnits(self.context, self.alliance)

    def flying(self) -> FilteredUnits:
        return self._filter().flying()

    def ground(self) -> FilteredUnits:
        return self._filter().ground()

    def can_attack(self) -> FilteredUnits:
        return self._filter().can_attack()

    def passive(self) -> FilteredUnits:
        return self._filter().passive()

    def units(self) -> FilteredUnits:
        return self._filter().units()

    def structures(self) -> FilteredUnits:
        return self._filter().structures()

    def choose(self, predicate: UnitPredicate) -> FilteredUnits:
        return self._filter().choose(predicate)

    def all(self) -> Units:
        return self._filter().all()

    def first(self) -> Unit:
        return self._filter().first()


class SelfUnits(AllianceUnits):
    """The player's own units, with production counts."""

    def tech_alias(self, unit_type: int) -> Units:
        """Units of the type plus units of every type that is a tech alias of it."""
        units = self[unit_type]
        for data in self.context._all_type_data():
            if unit_type in data.tech_alias:
                units = units.concat(self[data.unit_id])
        return units

    def count(self, unit_type: int) -> int:
        """Finished or in-progress units of the type."""
        return len(self[unit_type])

    def count_in_production(self, unit_type: int) -> int:
        """Orders queued on own units that will produce the type."""
        data = self.context._type_data(unit_type)
        if data is None:
            raise KeyError(f"no data for unit type {unit_type}")
        ability = data.ability_id
        return sum(
            1
            for unit in self.all()
            for order in unit.raw.orders
            if order.ability_id == ability
        )

    def count_all(self, unit_type: int) -> int:
        return self.count(unit_type) + self.count_in_production(unit_type)

    def count_if(self, predicate: UnitPredicate) -> int:
        return sum(1 for unit in self.all() if predicate(unit))


class NeutralUnits(_TypedUnits):
    """Neutral units: resources and everything else."""

    def _span(self, start: int, length: int) -> Units:
        groups = self.context._groups
        return Units(self.context._wrapped[groups[start]:groups[start + length]])

    def minerals(self) -> Units:
        return self._span(_NEUTRAL_MINERALS, 1)

    def vespene(self) -> Units:
        return self._span(_NEUTRAL_VESPENE, 1)

    def resources(self) -> Units:
        return self._span(_NEUTRAL_MINERALS, 2)

    def all(self) -> Units:
        return self._span(_NEUTRAL_ALL, 3)


class UnitContext:
    """The units of the latest observation with filtered access to them."""

    def __init__(self) -> None:
        self._data: Sequence[UnitTypeData | None] | Mapping[int, UnitTypeData] = ()
        self._wrapped: list[Unit] = []
        self._by_tag: dict[int, Unit] = {}
        self._groups: list[int] = [0] * _GROUP_COUNT
        self.own = SelfUnits(self, Alliance.SELF)
        self.ally = AllianceUnits(self, Alliance.ALLY)
        self.enemy = AllianceUnits(self, Alliance.ENEMY)
        self.neutral = NeutralUnits(self, Alliance.NEUTRAL)

    def _type_data(self, unit_type: int) -> UnitTypeData | None:
        try:
            return self._data[unit_type]
        except (IndexError, KeyError):
            return None

    def _all_type_data(self) -> Iterator[UnitTypeData]:
        items: Iterable[Any] = (
            self._data.values() if isinstance(self._data, Mapping) else self._data
        )
        return (d for d in items if d is not None)

    def update(
        self,
        units: Iterable[RawUnit],
        unit_data: Sequence[UnitTypeData | None] | Mapping[int, UnitTypeData],
        abilities: Mapping[int, Sequence[int]] | None = None,
    ) -> None:
        """Load the units of a new observation.

        ``unit_data`` is indexed by unit type; ``abilities`` maps each unit's tag
        to the abilities it can use now and is stored on the raw unit.
        """
        raw = list(units)
        if abilities is not None:
            answered = sum(1 for u in raw if u.tag in abilities)
            if answered != len(raw):
                raise ValueError(
                    f"missing ability responses, expected: {len(raw)} got: {answered}"
                )

        self._data = unit_data
        keyed = sorted(
            ((sort_key(u, self._type_data(u.unit_type)), u) for u in raw),
            key=lambda pair: pair[0],
        )

        self._wrapped = []
        self._by_tag = {}
        by_alliance = {
            Alliance.SELF: self.own,
            Alliance.ALLY: self.ally,
            Alliance.ENEMY: self.enemy,
            Alliance.NEUTRAL: self.neutral,
        }
        for typed in by_alliance.values():
            typed._reset()

        group_of: list[int] = []
        for (group, _), raw_unit in keyed:
            if abilities is not None:
                raw_unit.actions = list(abilities[raw_unit.tag])
            unit = Unit(raw_unit, self._type_data(raw_unit.unit_type), self)
            self._wrapped.append(unit)
            self._by_tag[raw_unit.tag] = unit
            by_alliance[raw_unit.alliance]._add(unit)
            group_of.append(group)

        self._groups = [bisect_left(group_of, g) for g in range(_GROUP_COUNT)]

    def was_observed(self, tag: int) -> bool:
        """Whether a unit with the tag was in the last observation."""
        return tag in self._by_tag

    def unit_by_tag(self, tag: int) -> Unit:
        """The unit with the tag, or an empty Unit if it was not observed."""
        return self._by_tag.get(tag, Unit())

    def all_units(self) -> Units:
        """Every unit of the latest observation, in sorted order."""
        return Units(self._wrapped)