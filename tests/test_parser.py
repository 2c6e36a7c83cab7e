"""Unit tests for the block parser."""

import textwrap
from typing import List

from sage_ini.ini.blocks import Block, BlockKind, ModuleCategory, PropertyMap
from sage_ini.ini.diagnostics import (
    MALFORMED_HEADER,
    MALFORMED_PROPERTY,
    STRAY_END,
    UNEXPECTED_LINE,
    UNTERMINATED_BLOCK,
)
from sage_ini.ini.parser import BlockParser
from sage_ini.ini.values import Value, ValueKind


def parse(text: str, source: str = "test.ini"):
    parser = BlockParser()
    result = parser.parse(textwrap.dedent(text), source)
    return parser, result


class TestBlockHeaders:
    """Test recognition of block-opening lines."""

    def test_object_block(self) -> None:
        """Test a simple object block with properties."""
        _, result = parse(
            """
            Object AmericaInfantryRanger
                Side = America
                BuildCost = 225
            End
            """
        )
        assert len(result.blocks) == 1
        block = result.blocks[0]
        assert block.kind is BlockKind.OBJECT
        assert block.name == "AmericaInfantryRanger"
        assert block.parent_name is None
        assert block.properties["Side"] == Value.string("America")
        assert block.properties["BuildCost"] == Value.integer(225)
        assert result.diagnostics == []

    def test_keywords_case_insensitive(self) -> None:
        """Test block keywords and END ignore case."""
        _, result = parse(
            """
            WEAPON RangerAdvancedCombatRifle
                AttackRange = 100.0
            end
            """
        )
        assert result.blocks[0].kind is BlockKind.WEAPON

    def test_reskin_takes_parent(self) -> None:
        """Test ObjectReskin reads the new name and the parent name."""
        _, result = parse(
            """
            ObjectReskin AmericaVehicleHumveeDesert AmericaVehicleHumvee
            End
            """
        )
        block = result.blocks[0]
        assert block.kind is BlockKind.OBJECT_RESKIN
        assert block.name == "AmericaVehicleHumveeDesert"
        assert block.parent_name == "AmericaVehicleHumvee"

    def test_reskin_without_parent_warns(self) -> None:
        """Test a reskin missing its parent still opens a block."""
        _, result = parse(
            """
            ObjectReskin Orphan
            End
            """
        )
        assert result.blocks[0].parent_name is None
        assert [d.code for d in result.diagnostics] == [MALFORMED_HEADER]

    def test_object_extra_token_ignored(self) -> None:
        """Test extra header tokens on non-reskin kinds are ignored."""
        _, result = parse(
            """
            Object Foo Bar
            End
            """
        )
        assert result.blocks[0].name == "Foo"
        assert result.blocks[0].parent_name is None

    def test_unknown_keyword_is_unexpected_line(self) -> None:
        """Test unrecognised keywords are skipped with a warning."""
        _, result = parse(
            """
            MappedImage SomeImage
            Object Foo
            End
            """
        )
        assert [d.code for d in result.diagnostics] == [UNEXPECTED_LINE]
        assert [b.name for b in result.blocks] == ["Foo"]

    def test_keyword_without_name_is_unexpected(self) -> None:
        """Test a lone keyword does not open a block."""
        _, result = parse("Object\n")
        assert result.blocks == []
        assert result.diagnostics[0].code == UNEXPECTED_LINE

    def test_stray_end(self) -> None:
        """Test END outside a block is reported."""
        _, result = parse("End\n")
        assert [d.code for d in result.diagnostics] == [STRAY_END]


class TestBlockBodies:
    """Test property and module lines."""

    def test_comments_and_blank_lines(self) -> None:
        """Test comments are stripped before parsing."""
        _, result = parse(
            """
            ; header comment
            Object Foo ; trailing
                DisplayName = "Foo; the unit" ; comment

            End
            """
        )
        block = result.blocks[0]
        assert block.name == "Foo"
        assert block.properties["displayname"] == Value.string("Foo; the unit")

    def test_property_lookup_case_insensitive(self) -> None:
        """Test lookups ignore case while keys keep their spelling."""
        _, result = parse(
            """
            Object Foo
                KindOf = INFANTRY SELECTABLE
            End
            """
        )
        props = result.blocks[0].properties
        assert "KINDOF" in props
        assert list(props) == ["KindOf"]
        assert props["kindof"].kind is ValueKind.LIST

    def test_modules_captured_with_tags(self) -> None:
        """Test module keys become module entries, not properties."""
        _, result = parse(
            """
            Object Foo
                Behavior = AIUpdateInterface ModuleTag_01
                Draw = W3DModelDraw ModuleTag=Draw_02
                Body = ActiveBody
                Locomotor = SET_NORMAL BasicHumanLocomotor
            End
            """
        )
        block = result.blocks[0]
        assert "Behavior" not in block.properties
        modules = block.modules
        assert [m.category for m in modules] == [
            ModuleCategory.BEHAVIOR,
            ModuleCategory.DRAW,
            ModuleCategory.BODY,
            ModuleCategory.LOCOMOTOR,
        ]
        assert (modules[0].payload, modules[0].tag) == ("AIUpdateInterface", "ModuleTag_01")
        assert (modules[1].payload, modules[1].tag) == ("W3DModelDraw", "Draw_02")
        assert (modules[2].payload, modules[2].tag) == ("ActiveBody", None)
        assert modules[3].payload == "SET_NORMAL BasicHumanLocomotor"

    def test_bad_property_line_skipped(self) -> None:
        """Test an unparseable line is reported and the rest still applies."""
        _, result = parse(
            """
            Object Foo
                Side = China
                Garbage
                BuildCost = 100
            End
            """
        )
        block = result.blocks[0]
        assert [d.code for d in result.diagnostics] == [MALFORMED_PROPERTY]
        assert block.properties["Side"] == Value.string("China")
        assert block.properties["BuildCost"] == Value.integer(100)

    def test_repeated_keys_kept_in_assignments(self) -> None:
        """Test the property map keeps the last value, assignments keep all."""
        _, result = parse(
            """
            Armor TankArmor
                Armor = DEFAULT 100%
                Armor = SMALL_ARMS 25%
            End
            """
        )
        block = result.blocks[0]
        assert block.properties["Armor"].as_list() == ["SMALL_ARMS", "25%"]
        assert [v.as_list()[0] for v in block.assigned("armor")] == ["DEFAULT", "SMALL_ARMS"]

    def test_source_location(self) -> None:
        """Test blocks remember where they started."""
        _, result = parse("\n\nObject Foo\nEnd\n", source="units.ini")
        location = result.blocks[0].location
        assert location is not None
        assert (location.file, location.line) == ("units.ini", 3)
        assert str(location) == "units.ini:3"


class TestMergeAndRecovery:
    """Test duplicate merging and unterminated blocks."""

    def test_duplicate_blocks_merge(self) -> None:
        """Test later values win, earlier-only keys survive, modules append."""
        _, result = parse(
            """
            Object Foo
                Side = America
                BuildCost = 100
                Behavior = First ModuleTag_01
            End
            Object Foo
                BuildCost = 200
                Behavior = Second ModuleTag_02
            End
            """
        )
        assert len(result.blocks) == 1
        block = result.blocks[0]
        assert block.properties["Side"] == Value.string("America")
        assert block.properties["BuildCost"] == Value.integer(200)
        assert [m.payload for m in block.modules] == ["First", "Second"]

    def test_merge_across_parse_calls(self) -> None:
        """Test one parser instance merges blocks across inputs."""
        parser = BlockParser()
        parser.parse("Object Foo\nSide = GLA\nEnd\n", "a.ini")
        parser.parse("Object Foo\nBuildCost = 5\nEnd\n", "b.ini")
        assert len(parser.blocks) == 1
        block = parser.get_block(BlockKind.OBJECT, "Foo")
        assert block is not None
        assert block.properties["Side"] == Value.string("GLA")
        assert block.properties["BuildCost"] == Value.integer(5)

    def test_same_name_different_kind_not_merged(self) -> None:
        """Test merging is keyed on kind and name together."""
        _, result = parse(
            """
            Object Foo
            End
            Weapon Foo
            End
            """
        )
        assert len(result.blocks) == 2

    def test_unterminated_block_kept(self) -> None:
        """Test a block missing END keeps what was parsed."""
        _, result = parse(
            """
            Object Foo
                Side = America
                BuildCost = 100
            """
        )
        assert [d.code for d in result.diagnostics] == [UNTERMINATED_BLOCK]
        block = result.blocks[0]
        assert block.properties["BuildCost"] == Value.integer(100)

    def test_callback_sees_merged_block(self) -> None:
        """Test on_block fires for every closed block with the merged state."""
        seen: List[Block] = []
        parser = BlockParser()
        parser.parse(
            "Object Foo\nSide = A\nEnd\nObject Foo\nBuildCost = 1\nEnd\n",
            on_block=seen.append,
        )
        assert len(seen) == 2
        assert seen[0] is seen[1]
        assert "Side" in seen[1].properties and "BuildCost" in seen[1].properties


class TestPropertyMap:
    """Test the case-insensitive property map."""

    def test_later_spelling_wins(self) -> None:
        """Test re-assigning with different case replaces key and value."""
        props = PropertyMap()
        props["BuildCost"] = Value.integer(1)
        props["BUILDCOST"] = Value.integer(2)
        assert len(props) == 1
        assert list(props) == ["BUILDCOST"]
        assert props["buildcost"] == Value.integer(2)

    def test_first_alias(self) -> None:
        """Test alias lookup returns the first present key."""
        props = PropertyMap({"Range": Value.integer(5), "Clip": Value.integer(3)})
        assert props.first("AttackRange", "Range") == Value.integer(5)
        assert props.first("Missing") is None
