"""Rewrite the game's protocol definitions for proto3 and run the code generator."""

from __future__ import annotations

import argparse
import os
import subprocess
from collections.abc import Iterable, Sequence
from pathlib import Path

# Identifier types, each with the dotted field paths that should carry it.
_CAST_TYPES: dict[str, tuple[str, ...]] = {
    "AbilityID": (
        "AvailableAbility.ability_id",
        "AbilityData.ability_id",
        "AbilityData.remaps_to_ability_id",
        "UnitTypeData.ability_id",
        "UpgradeData.ability_id",
        "RequestQueryBuildingPlacement.ability_id",
        "UnitOrder.ability_id",
        "ActionRawUnitCommand.ability_id",
        "ActionRawToggleAutocast.ability_id",
        "ActionError.ability_id",
        "BuildItem.ability_id",
        "ActionToggleAutocast.ability_id",
    ),
    "UnitTypeID": (
        "UnitTypeData.unit_id",
        "UnitTypeData.tech_alias",
        "UnitTypeData.unit_alias",
        "UnitTypeData.tech_requirement",
        "DebugCreateUnit.unit_type",
        "ResponseQueryAvailableAbilities.unit_type_id",
        "PassengerUnit.unit_type",
        "Unit.unit_type",
        "ControlGroup.leader_unit_type",
        "UnitInfo.unit_type",
    ),
    "UpgradeID": ("UpgradeData.upgrade_id", "PlayerRaw.upgrade_ids"),
    "BuffID": ("BuffData.buff_id", "Unit.buff_ids"),
    "EffectID": ("EffectData.effect_id", "Effect.effect_id"),
    "PlayerID": (
        "DebugCreateUnit.owner",
        "Unit.owner",
        "RequestJoinGame.participation.observed_player_id",
        "ResponseJoinGame.player_id",
        "RequestStartReplay.observed_player_id",
        "ChatReceived.player_id",
        "PlayerInfo.player_id",
        "PlayerCommon.player_id",
        "ActionObserverPlayerPerspective.player_id",
        "ActionObserverCameraFollowPlayer.player_id",
        "PlayerResult.player_id",
        "UnitInfo.player_relative",
    ),
    "UnitTag": (
        "DebugKillUnit.tag",
        "DebugSetUnitValue.unit_tag",
        "RequestQueryPathing.start.unit_tag",
        "RequestQueryAvailableAbilities.unit_tag",
        "ResponseQueryAvailableAbilities.unit_tag",
        "RequestQueryBuildingPlacement.placing_unit_tag",
        "PowerSource.tag",
        "UnitOrder.target.target_unit_tag",
        "PassengerUnit.tag",
        "Unit.tag",
        "Unit.add_on_tag",
        "Unit.engaged_target_tag",
        "Event.dead_units",
        "ActionRawUnitCommand.target.target_unit_tag",
        "ActionRawUnitCommand.unit_tags",
        "ActionRawToggleAutocast.unit_tags",
        "ActionError.unit_tag",
        "ActionObserverCameraFollowUnits.unit_tags",
    ),
}

TYPE_MAP: dict[str, str] = {
    field: cast for cast, fields in _CAST_TYPES.items() for field in fields
}

_IMPORT_PREFIX = 'import "s2clientprotocol/'
_OPTIONAL = "optional "
_ENUM = "enum "
_OLD_SYNTAX = 'syntax = "proto2";'
_NEW_HEADER = ('syntax = "proto3";', 'option go_package = "./;api";', 'import "gogo.proto";')
_UNIT_ACTIONS_FIELD = "repeated AvailableAbility actions = 100;"
# These enums define a zero value already.
_ENUMS_WITH_ZERO = frozenset({"Race", "CloakState"})


class ProtoUpgrader:
    """Upgrades proto2 definitions to proto3 and tags identifier fields with cast types.

    A single upgrader should see every file of the protocol, so that
    :meth:`unmapped` can report mappings no field ever matched.
    """

    def __init__(self, type_map: dict[str, str] | None = None) -> None:
        self._pending = dict(TYPE_MAP if type_map is None else type_map)

    def upgrade(self, lines: Iterable[str]) -> list[str]:
        """Return the upgraded lines of one proto file."""
        scope: list[str] = []
        result: list[str] = []
        for raw in lines:
            cut = raw.find("//")
            text = (raw[:cut] if cut > 0 else raw).strip()

            if text == _OLD_SYNTAX:
                result.extend(_NEW_HEADER)
            elif text.startswith(_IMPORT_PREFIX):
                result.append('import "' + text.removeprefix(_IMPORT_PREFIX))
            elif text.startswith(_OPTIONAL):
                result.append(self.map_types(scope, text.removeprefix(_OPTIONAL)))
            elif text.endswith(" {"):
                scope.append(text.split(" ")[1])
                result.append(text)
                if text.startswith(_ENUM):
                    enum_name = text[len(_ENUM):-2]
                    if enum_name not in _ENUMS_WITH_ZERO:
                        result.append(
                            f'{enum_name}_nil = 0 [(gogoproto.enumvalue_customname) = "nil"];'
                        )
            elif text == "}":
                if not scope:
                    raise ValueError("unbalanced closing brace in proto file")
                if scope.pop() == "Unit":
                    result.append(_UNIT_ACTIONS_FIELD)
                result.append(text)
            else:
                result.append(self.map_types(scope, text))
        return result

    def map_types(self, path: Sequence[str], line: str) -> str:
        """Add a cast type option to a field declaration if its path is mapped."""
        words = line.split(" ")
        if len(words) < 4:
            return line  # too short to be a "type name = number;" declaration

        field_path = ".".join([*path, words[-3]])
        cast = self._pending.pop(field_path, None)
        if cast is None:
            return line

        *head, number = words
        return " ".join(
            [*head, number.removesuffix(number[-1:]), f'[(gogoproto.casttype) = "{cast}"];']
        )

    def unmapped(self) -> list[str]:
        """The mapping keys that no field has matched yet, sorted."""
        return sorted(self._pending)


def upgrade_proto_file(path: str | os.PathLike[str], upgrader: ProtoUpgrader) -> None:
    """Rewrite one proto file in place."""
    file_path = Path(path)
    upgraded = upgrader.upgrade(file_path.read_text().splitlines())
    file_path.write_text("".join(f"{line}\n" for line in upgraded))


def _default_includes() -> list[str]:
    gopath = os.environ.get("GOPATH")
    if not gopath:
        return []
    base = Path(gopath, "src", "github.com", "gogo", "protobuf")
    return [str(base / "gogoproto"), str(base / "protobuf")]


def main(argv: Sequence[str] | None = None) -> int:
    """Upgrade a directory of proto files and generate code from them with protoc."""
    parser = argparse.ArgumentParser(
        prog="sc2-protogen",
        description="Upgrade the game protocol definitions and run protoc on them.",
    )
    parser.add_argument("proto_dir", type=Path, help="directory holding the .proto files")
    parser.add_argument("--out", default="api", help="output directory for generated code")
    parser.add_argument("--protoc", default="protoc", help="protoc executable")
    parser.add_argument(
        "-I", "--include", action="append", default=None, help="extra include directory"
    )
    args = parser.parse_args(argv)

    includes = args.include if args.include is not None else _default_includes()
    command = [f"-I={directory}" for directory in includes]
    command += [f"--proto_path={args.proto_dir}", f"--gogofaster_out={args.out}"]

    upgrader = ProtoUpgrader()
    for proto in sorted(
        p for p in args.proto_dir.iterdir() if p.suffix == ".proto" and p.is_file()
    ):
        upgrade_proto_file(proto, upgrader)
        command.append(str(proto))

    missing = upgrader.unmapped()
    if missing:
        print("Not all types were mapped, missing:")
        print("\n".join(missing))

    print("protoc " + " ".join(command) + "\n\n")
    try:
        result = subprocess.run(
            [args.protoc, *command], capture_output=True, text=True, check=False
        )
    except OSError as exc:
        print(exc)
        return 1
    print((result.stdout or "") + (result.stderr or "") + "\n\n")
    if result.returncode != 0:
        print(f"protoc exited with status {result.returncode}")
    return result.returncode