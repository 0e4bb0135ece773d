"""Identifiers, enumerations and plain records for game units."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import IntEnum
from typing import NewType

from sc2botkit.geometry import Point, Point2D

AbilityID = NewType("AbilityID", int)
BuffID = NewType("BuffID", int)
EffectID = NewType("EffectID", int)
UnitTypeID = NewType("UnitTypeID", int)
UpgradeID = NewType("UpgradeID", int)
PlayerID = NewType("PlayerID", int)
UnitTag = NewType("UnitTag", int)


class Alliance(IntEnum):
    SELF = 1
    ALLY = 2
    NEUTRAL = 3
    ENEMY = 4


class DisplayType(IntEnum):
    VISIBLE = 1
    SNAPSHOT = 2
    HIDDEN = 3
    PLACEHOLDER = 4


class Attribute(IntEnum):
    LIGHT = 1
    ARMORED = 2
    BIOLOGICAL = 3
    MECHANICAL = 4
    ROBOTIC = 5
    PSIONIC = 6
    MASSIVE = 7
    STRUCTURE = 8
    HOVER = 9
    HEROIC = 10
    SUMMONED = 11


class Race(IntEnum):
    NO_RACE = 0
    TERRAN = 1
    ZERG = 2
    PROTOSS = 3
    RANDOM = 4


class WeaponTargetType(IntEnum):
    GROUND = 1
    AIR = 2
    ANY = 3


@dataclass
class Weapon:
    """A weapon of a unit type."""

    type: WeaponTargetType = WeaponTargetType.GROUND
    damage: float = 0.0
    range: float = 0.0
    attacks: int = 1
    speed: float = 0.0


@dataclass
class UnitOrder:
    """An order currently queued on a unit."""

    ability_id: int = 0
    target_unit_tag: int = 0
    target_world_space_pos: Point | None = None
    progress: float = 0.0


@dataclass
class UnitTypeData:
    """Static data describing a unit type."""

    unit_id: int = 0
    name: str = ""
    available: bool = True
    ability_id: int = 0
    mineral_cost: int = 0
    vespene_cost: int = 0
    food_required: float = 0.0
    food_provided: float = 0.0
    race: Race = Race.NO_RACE
    attributes: list[Attribute] = field(default_factory=list)
    weapons: list[Weapon] = field(default_factory=list)
    has_minerals: bool = False
    has_vespene: bool = False
    tech_alias: list[int] = field(default_factory=list)
    unit_alias: int = 0
    tech_requirement: int = 0


@dataclass
class RawUnit:
    """A unit as reported by one observation."""

    tag: int = 0
    unit_type: int = 0
    alliance: Alliance = Alliance.SELF
    owner: int = 0
    display_type: DisplayType = DisplayType.VISIBLE
    pos: Point = field(default_factory=Point)
    facing: float = 0.0
    radius: float = 0.0
    build_progress: float = 0.0
    health: float = 0.0
    health_max: float = 0.0
    shield: float = 0.0
    energy: float = 0.0
    mineral_contents: int = 0
    vespene_contents: int = 0
    is_flying: bool = False
    is_burrowed: bool = False
    orders: list[UnitOrder] = field(default_factory=list)
    buff_ids: list[int] = field(default_factory=list)
    actions: list[int] = field(default_factory=list)

    def pos2d(self) -> Point2D:
        """The x/y location of the unit."""
        return self.pos.to_point2d()