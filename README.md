# sc2botkit

Building blocks for StarCraft II bots. It covers map geometry, typed views
over map images, unit bookkeeping and queries, and a tool that upgrades the
game's protocol definitions for code generation.

## Installing

```
pip install .
pip install ".[test]"   # with the test suite's requirements
```

## What is inside

- `sc2botkit.geometry`: integer and real points and vectors (`PointI`,
  `Point2D`, `Point`, `VecI`, `Vec2D`, `Vec`). It provides distances, Manhattan
  distance, normalisation (`norm`, which raises `ZeroDivisionError` for a zero
  vector), cross products, 4- and 8-neighbourhoods (`offset4_by`,
  `offset8_by`), and `Vec2D.quadrant` for snapping a direction to the nearest
  n-th of a circle.
- `sc2botkit.image`: typed views over raw map images. `ImageData.bits()`,
  `.bytes()` and `.ints()` return `ImageDataBits`, `ImageDataBytes` and
  `ImageDataInt32` grids that share the buffer. Each grid has `get`/`set` and
  `copy`. A read outside the grid returns a zero value and a write outside it
  does nothing. A request for the wrong pixel depth raises `ValueError`.
  `ImageDataBits.to_bytes()` turns a bitmap into a 0/255 byte map.
- `sc2botkit.models`: plain data types for units and unit-type data
  (`RawUnit`, `UnitTypeData`, `Weapon`, `UnitOrder`) and the enums they use
  (`Alliance`, `DisplayType`, `Attribute`, `Race`, `WeaponTargetType`).
- `sc2botkit.player`: `Player` resource bookkeeping with `Cost`, covering
  `can_afford`, `spend` and `food_left`.
- `sc2botkit.unit`: a `Unit` wrapper that joins a raw unit with its type data.
  It offers status helpers (`is_idle`, `is_built`, `has_buff`, and more) and
  weapon helpers (`weapon_damage`, `weapon_range`, `is_in_weapons_range`).
  The module also has predicate functions and factories: `is_type`,
  `is_self_type`, `is_mineral`, `is_geyser`, `has_attribute` and
  `is_structure`.
- `sc2botkit.units`: the lazily filtered `Units` collection, with `choose`,
  `drop`, `partition`, `first`, `closest_to`, `closer_than`, `center`,
  `concat`, `tagged`, `not_tagged`, `has_energy`, `has_buff` and `no_buff`.
- `sc2botkit.unit_context`: `UnitContext.update(units, unit_data, abilities)`
  sorts each observation into alliance and role groups. The views `own`,
  `ally` and `enemy` offer `.flying()`, `.ground()`, `.can_attack()`,
  `.passive()`, `.units()`, `.structures()`, `.choose()`, `.all()` and
  `.first()`, and can be indexed by unit type. `own` also counts units with
  `count`, `count_in_production`, `count_all`, `count_if` and `tech_alias`.
  `neutral` offers `minerals()`, `vespene()`, `resources()` and `all()`.
- `sc2botkit.settings`: player setup helpers (`new_participant`,
  `new_computer`, `new_observer`) and port validation (`Ports.is_valid`).
- `sc2botkit.version`: `format_version` and `version_report`, which check the
  running game against the data build the identifiers belong to.
- `sc2botkit.protogen`: `ProtoUpgrader` rewrites proto2 definitions as proto3.
  It adds zero values to enums and tags identifier fields with cast types.
  `upgrade_proto_file` rewrites a file in place.

## Example

```python
from sc2botkit.geometry import Point2D
from sc2botkit.player import Cost
from sc2botkit.version import format_version

a = Point2D(1.0, 2.0)
b = Point2D(4.0, 6.0)
print(a.distance(b))             # 5.0

print(Cost(50, 25, 1).mul(3))    # Cost(minerals=150, vespene=75, food=3)

print(format_version("5.0.7.84643", 84643))   # 5.0.7.84643
```

## Command line

```
sc2botkit-protogen PROTO_DIR [--out DIR] [--protoc PATH] [-I DIR ...]
```

The command upgrades every `.proto` file in `PROTO_DIR` in place, then runs
`protoc` on them with the `gogofaster` output plugin (default output
directory: `api`). It prints any identifier mappings that no field matched.
The include directories default to the gogo protobuf sources under `$GOPATH`
when `-I` is not given. `protoc` must be on your `PATH`, or you can name it
with `--protoc`. The command does not download the protocol files. You supply
the directory.

## What it does not do

The package does not connect to a running game. It has no client, no request
loop, and no way to send actions or unit orders. It also does not generate
ability, unit, buff, effect or upgrade identifier tables. Observations and
unit-type data have to be loaded into `UnitContext` by the caller.

## Running the tests

```
pytest
```