from unittest.mock import MagicMock, patch

import pytest

from sc2botkit.protogen import TYPE_MAP, ProtoUpgrader, main, upgrade_proto_file


def test_syntax_line_becomes_proto3_with_gogo_import():
    out = ProtoUpgrader().upgrade(['syntax = "proto2";'])
    assert out[0] == 'syntax = "proto3";'
    assert 'option go_package = "./;api";' in out
    assert 'import "gogo.proto";' in out


def test_import_subdirectory_is_removed():
    out = ProtoUpgrader().upgrade(['import "s2clientprotocol/common.proto";'])
    assert out == ['import "common.proto";']


def test_optional_field_is_mapped_and_consumed():
    upgrader = ProtoUpgrader()
    out = upgrader.upgrade(
        ["message AvailableAbility {", "  optional uint32 ability_id = 1;", "}"]
    )
    assert out[1] == 'uint32 ability_id = 1 [(gogoproto.casttype) = "AbilityID"];'
    assert "AvailableAbility.ability_id" not in upgrader.unmapped()
    assert len(upgrader.unmapped()) == len(TYPE_MAP) - 1


def test_unmapped_field_only_loses_optional():
    out = ProtoUpgrader().upgrade(["message Foo {", "optional int32 bar = 2;", "}"])
    assert out == ["message Foo {", "int32 bar = 2;", "}"]


def test_enum_gets_zero_value():
    out = ProtoUpgrader().upgrade(["enum Alliance {", "Self = 1;", "}"])
    assert out[1] == 'Alliance_nil = 0 [(gogoproto.enumvalue_customname) = "nil"];'


@pytest.mark.parametrize("enum", ["Race", "CloakState"])
def test_enums_with_own_zero_are_left_alone(enum):
    out = ProtoUpgrader().upgrade([f"enum {enum} {{", "}"])
    assert out == [f"enum {enum} {{", "}"]


def test_unit_message_gets_actions_field():
    out = ProtoUpgrader().upgrade(["message Unit {", "}"])
    assert out == ["message Unit {", "repeated AvailableAbility actions = 100;", "}"]


def test_nested_oneof_path_is_used_for_mapping():
    upgrader = ProtoUpgrader()
    out = upgrader.upgrade(
        [
            "message RequestQueryPathing {",
            "  oneof start {",
            "    uint64 unit_tag = 2;",
            "  }",
            "}",
        ]
    )
    assert out[2].endswith('[(gogoproto.casttype) = "UnitTag"];')
    assert "RequestQueryPathing.start.unit_tag" not in upgrader.unmapped()


def test_mapping_applies_only_once():
    upgrader = ProtoUpgrader({"A.x": "UnitTag"})
    first = upgrader.map_types(["A"], "uint64 x = 1;")
    second = upgrader.map_types(["A"], "uint64 x = 1;")
    assert first != second
    assert second == "uint64 x = 1;"
    assert upgrader.unmapped() == []


def test_short_lines_are_not_mapped():
    upgrader = ProtoUpgrader({"A.x": "UnitTag"})
    assert upgrader.map_types(["A"], "x = 1;") == "x = 1;"
    assert upgrader.unmapped() == ["A.x"]


def test_comments():
    out = ProtoUpgrader().upgrade(["// top level", "  // indented", "int32 a = 1; // trailing"])
    assert out == ["// top level", "", "int32 a = 1;"]


def test_unbalanced_brace_raises():
    with pytest.raises(ValueError):
        ProtoUpgrader().upgrade(["}"])


def test_upgrade_proto_file_rewrites_in_place(tmp_path):
    proto = tmp_path / "common.proto"
    proto.write_text(
        'syntax = "proto2";\n'
        "message AvailableAbility {\n"
        "  optional uint32 ability_id = 1;\n"
        "}\n"
    )
    upgrader = ProtoUpgrader()
    upgrade_proto_file(proto, upgrader)
    lines = proto.read_text().splitlines()
    assert lines[0] == 'syntax = "proto3";'
    assert any('"AbilityID"' in line for line in lines)
    assert proto.read_text().endswith("}\n")


def test_main_upgrades_files_and_runs_protoc(tmp_path, capsys):
    proto_dir = tmp_path / "protos"
    proto_dir.mkdir()
    (proto_dir / "b.proto").write_text('syntax = "proto2";\n')
    (proto_dir / "a.proto").write_text('syntax = "proto2";\n')
    (proto_dir / "notes.txt").write_text("ignored\n")

    completed = MagicMock(returncode=0, stdout="", stderr="")
    with patch("sc2botkit.protogen.subprocess.run", return_value=completed) as run:
        status = main([str(proto_dir), "--out", "gen", "-I", "inc"])

    assert status == 0
    command = run.call_args.args[0]
    assert command[0] == "protoc"
    assert "-I=inc" in command
    assert "--gogofaster_out=gen" in command
    assert command[-2:] == [str(proto_dir / "a.proto"), str(proto_dir / "b.proto")]
    assert (proto_dir / "a.proto").read_text().startswith('syntax = "proto3";')
    assert (proto_dir / "notes.txt").read_text() == "ignored\n"
    assert "Not all types were mapped" in capsys.readouterr().out


def test_main_reports_failing_protoc(tmp_path):
    completed = MagicMock(returncode=3, stdout="", stderr="boom")
    with patch("sc2botkit.protogen.subprocess.run", return_value=completed):
        assert main([str(tmp_path), "-I", "inc"]) == 3