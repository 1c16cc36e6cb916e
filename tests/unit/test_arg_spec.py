"""
Unit tests for the command-line tool specification parser.
"""

import re

import pytest

from llamacloud_mcp.mcp_server.arg_spec import parse_top_k, parse_tool_definitions
from llamacloud_mcp.mcp_server.errors import ErrorKind, NoDefinitionsError
from llamacloud_mcp.mcp_server.tool_registry import ToolDefinition


class TestParseToolDefinitions:
    """Tests for parse_tool_definitions."""

    def test_single_definition_with_top_k(self):
        definitions = parse_tool_definitions(
            ["--index", "Docs", "--description", "Company handbook", "--topK", "3"]
        )

        assert definitions == [
            ToolDefinition(
                index_name="Docs", description="Company handbook", similarity_top_k=3
            )
        ]
        assert definitions[0].tool_name == "get_information_docs"

    def test_top_k_is_optional(self):
        definitions = parse_tool_definitions(["--index", "Docs", "--description", "x"])

        assert len(definitions) == 1
        assert definitions[0].similarity_top_k is None

    def test_multiple_definitions_keep_order(self):
        definitions = parse_tool_definitions(
            [
                "--index", "Docs", "--description", "Handbook", "--topK", "5",
                "--index", "Wiki", "--description", "Engineering wiki",
                "--index", "Tickets", "--description", "Support tickets", "--topK", "10",
            ]
        )

        assert [d.index_name for d in definitions] == ["Docs", "Wiki", "Tickets"]
        assert [d.similarity_top_k for d in definitions] == [5, None, 10]
        assert [d.tool_name for d in definitions] == [
            "get_information_docs",
            "get_information_wiki",
            "get_information_tickets",
        ]

    def test_special_characters_in_index_name(self):
        definitions = parse_tool_definitions(["--index", "My Index!", "--description", "x"])

        assert definitions[0].tool_name == "get_information_my_index_"
        assert definitions[0].index_name == "My Index!"

    def test_flag_order_within_block_does_not_matter(self):
        definitions = parse_tool_definitions(
            ["--index", "Docs", "--topK", "2", "--description", "Handbook"]
        )

        assert definitions[0].description == "Handbook"
        assert definitions[0].similarity_top_k == 2

    def test_orphan_description_is_fatal(self):
        with pytest.raises(NoDefinitionsError) as exc_info:
            parse_tool_definitions(["--description", "orphan"])

        assert exc_info.value.kind is ErrorKind.NO_DEFINITIONS

    def test_orphan_description_is_not_carried_into_next_index(self):
        with pytest.raises(NoDefinitionsError):
            parse_tool_definitions(["--description", "orphan", "--index", "Docs"])

    def test_no_tokens_is_fatal(self):
        with pytest.raises(NoDefinitionsError, match="No arguments provided"):
            parse_tool_definitions([])

    def test_incomplete_block_is_dropped_but_others_kept(self):
        definitions = parse_tool_definitions(
            [
                "--index", "NoDescription",
                "--index", "Docs", "--description", "Handbook",
            ]
        )

        assert [d.index_name for d in definitions] == ["Docs"]

    def test_incomplete_last_block_is_dropped(self):
        definitions = parse_tool_definitions(
            ["--index", "Docs", "--description", "Handbook", "--index", "Wiki"]
        )

        assert [d.index_name for d in definitions] == ["Docs"]

    def test_empty_values_count_as_missing(self):
        with pytest.raises(NoDefinitionsError):
            parse_tool_definitions(["--index", "", "--description", "x"])
        with pytest.raises(NoDefinitionsError):
            parse_tool_definitions(["--index", "Docs", "--description", ""])

    def test_invalid_top_k_keeps_definition_without_override(self):
        definitions = parse_tool_definitions(
            ["--index", "Docs", "--description", "Handbook", "--topK", "abc"]
        )

        assert len(definitions) == 1
        assert definitions[0].similarity_top_k is None

    def test_invalid_top_k_does_not_clear_prior_override(self):
        definitions = parse_tool_definitions(
            ["--index", "Docs", "--topK", "4", "--description", "x", "--topK", "abc"]
        )

        assert definitions[0].similarity_top_k == 4

    def test_non_positive_top_k_is_ignored(self):
        definitions = parse_tool_definitions(
            ["--index", "Docs", "--description", "x", "--topK", "0"]
        )

        assert definitions[0].similarity_top_k is None

    def test_unknown_tokens_are_skipped(self):
        definitions = parse_tool_definitions(
            ["--verbose", "--index", "Docs", "stray", "--description", "Handbook"]
        )

        assert [d.index_name for d in definitions] == ["Docs"]
        assert definitions[0].description == "Handbook"

    def test_flag_without_value_at_end_is_ignored(self):
        definitions = parse_tool_definitions(
            ["--index", "Docs", "--description", "Handbook", "--topK"]
        )

        assert definitions[0].similarity_top_k is None

    def test_top_k_does_not_leak_into_next_definition(self):
        definitions = parse_tool_definitions(
            [
                "--index", "Docs", "--description", "a", "--topK", "7",
                "--index", "Wiki", "--description", "b",
            ]
        )

        assert definitions[1].similarity_top_k is None

    def test_every_definition_is_complete_and_well_named(self):
        tokens = [
            "--index", "Sales Q3 (2024)", "--description", "Quarterly numbers",
            "--index", "", "--description", "nameless",
            "--index", "ÜberDocs", "--description", "Unicode name",
            "--index", "no-desc",
        ]

        definitions = parse_tool_definitions(tokens)

        for definition in definitions:
            assert definition.index_name
            assert definition.description
            assert re.fullmatch(r"get_information_[a-z0-9_]*", definition.tool_name)
        assert [d.tool_name for d in definitions] == [
            "get_information_sales_q3__2024_",
            "get_information__berdocs",
        ]


class TestParseTopK:
    """Tests for parse_top_k."""

    @pytest.mark.parametrize(
        "value,expected",
        [("3", 3), (" 12 ", 12), ("abc", None), ("0", None), ("-2", None), ("2.5", None), ("", None)],
    )
    def test_parse_top_k(self, value, expected):
        assert parse_top_k(value) == expected
