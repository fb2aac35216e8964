#!/usr/bin/env python3
"""Tests for skill_frontmatter.py - restricted YAML frontmatter parser."""

import pytest
from skill_frontmatter import (
    FrontmatterError,
    MissingClosingDelimiter,
    MissingOpeningDelimiter,
    extract_frontmatter_block,
    has_frontmatter,
    parse_frontmatter,
    serialize_frontmatter,
    strict_yaml_problem,
)


def doc(*lines: str) -> str:
    """Build a Markdown document with the given frontmatter lines."""
    return "\n".join(["---", *lines, "---", "", "# Body"]) + "\n"


class TestDelimiters:
    """Tests for locating the frontmatter block."""

    def test_missing_opening_delimiter(self) -> None:
        """A document not starting with --- fails with MissingOpeningDelimiter."""
        with pytest.raises(MissingOpeningDelimiter, match="must start with --- on line 1"):
            parse_frontmatter("# Title\n---\nname: x\n---\n")

    def test_missing_closing_delimiter(self) -> None:
        """An opening --- without a closing one fails with MissingClosingDelimiter."""
        with pytest.raises(MissingClosingDelimiter, match="missing closing ---"):
            parse_frontmatter("---\nname: my-skill\n\n# Body\n")

    def test_errors_share_base_class(self) -> None:
        """Both delimiter errors are FrontmatterError (and ValueError)."""
        assert issubclass(MissingOpeningDelimiter, FrontmatterError)
        assert issubclass(MissingClosingDelimiter, FrontmatterError)
        assert issubclass(FrontmatterError, ValueError)

    def test_closing_delimiter_may_be_indented(self) -> None:
        """The closing delimiter is matched after trimming whitespace."""
        assert parse_frontmatter("---\nname: my-skill\n  ---  \nbody\n") == {"name": "my-skill"}

    def test_crlf_line_endings(self) -> None:
        """Windows line endings are tolerated."""
        content = "---\r\nname: my-skill\r\ndescription: Text\r\n---\r\n"
        assert parse_frontmatter(content) == {"name": "my-skill", "description": "Text"}

    def test_has_frontmatter(self) -> None:
        assert has_frontmatter("---\nname: x\n---\n")
        assert not has_frontmatter("# Title\n")
        assert not has_frontmatter("----\nname: x\n---\n")

    def test_empty_block(self) -> None:
        """An empty frontmatter block parses to an empty mapping."""
        assert parse_frontmatter("---\n---\nbody") == {}

    def test_extract_block(self) -> None:
        assert extract_frontmatter_block(doc("name: a", "title: b")) == "name: a\ntitle: b"


class TestScalars:
    """Tests for plain key: value lines."""

    def test_plain_scalars(self) -> None:
        data = parse_frontmatter(doc("name: my-skill", "description: Does things. Use when needed."))
        assert data == {"name": "my-skill", "description": "Does things. Use when needed."}

    def test_value_keeps_later_colons(self) -> None:
        """Only the first colon separates key from value."""
        assert parse_frontmatter(doc("description: Use when: deploying"))["description"] == "Use when: deploying"

    @pytest.mark.parametrize(
        ("line", "expected"),
        [
            ('title: "Quoted title"', "Quoted title"),
            ("title: 'Single quoted'", "Single quoted"),
            ("title: \"'nested'\"", "'nested'"),
            ('title: Ends with "quote"', 'Ends with "quote'),
            ("title: 'foo-bar", "foo-bar"),
            ('title: "I help you', "I help you"),
            ("title: \"mixed'", "mixed"),
        ],
    )
    def test_quote_stripping(self, line: str, expected: str) -> None:
        """One leading and one trailing quote are removed independently."""
        assert parse_frontmatter(doc(line))["title"] == expected

    def test_blank_and_comment_lines_skipped(self) -> None:
        data = parse_frontmatter(doc("# comment", "", "name: my-skill", "   # indented comment"))
        assert data == {"name": "my-skill"}

    def test_lines_without_colon_skipped(self) -> None:
        """Malformed lines are ignored rather than raising."""
        data = parse_frontmatter(doc("just some words", "name: my-skill"))
        assert data == {"name": "my-skill"}

    def test_empty_value_is_empty_string(self) -> None:
        assert parse_frontmatter(doc("name:", "title: x")) == {"name": "", "title": "x"}


class TestLists:
    """Tests for inline and multi-line flow arrays."""

    def test_inline_array(self) -> None:
        assert parse_frontmatter(doc("tags: [react, hooks, state]"))["tags"] == ["react", "hooks", "state"]

    def test_inline_array_drops_empty_items(self) -> None:
        assert parse_frontmatter(doc("tags: [a, , b,]"))["tags"] == ["a", "b"]

    def test_empty_inline_array(self) -> None:
        assert parse_frontmatter(doc("tags: []"))["tags"] == []

    def test_quoted_array(self) -> None:
        """Quotes around the whole array are stripped before list detection."""
        assert parse_frontmatter(doc('tags: "[a, b]"'))["tags"] == ["a", "b"]

    def test_multiline_flow_array(self) -> None:
        data = parse_frontmatter(
            doc(
                "tags:",
                "  [",
                "    testing,",
                "    vitest,",
                "  ]",
                "title: After",
            )
        )
        assert data == {"tags": ["testing", "vitest"], "title": "After"}

    def test_multiline_flow_array_after_blank_line(self) -> None:
        data = parse_frontmatter(doc("tags:", "", "  [one,", "   two]"))
        assert data == {"tags": ["one", "two"]}

    def test_unterminated_flow_array_falls_back(self) -> None:
        """Without a closing bracket the key keeps an empty value."""
        data = parse_frontmatter(doc("tags:", "  [one,", "  two", "title: x"))
        assert data["tags"] == ""
        assert data["title"] == "x"


class TestBlockScalars:
    """Tests for | and > block scalars."""

    def test_literal_block(self) -> None:
        data = parse_frontmatter(
            doc(
                "description: |",
                "  First line.",
                "  Second line.",
                "name: my-skill",
            )
        )
        assert data == {"description": "First line.\nSecond line.", "name": "my-skill"}

    def test_folded_block_at_end(self) -> None:
        """An open block is flushed at the closing delimiter."""
        data = parse_frontmatter(doc("name: my-skill", "description: >", "  Folded text", "  continues"))
        assert data["description"] == "Folded text\ncontinues"

    @pytest.mark.parametrize("indicator", ["|-", "|+", ">-", ">+"])
    def test_chomping_variants_are_plain_scalars(self, indicator: str) -> None:
        """Only a bare | or > opens a block; indented lines after other values are skipped."""
        data = parse_frontmatter(doc(f"description: {indicator}", "  Body text", "name: x"))
        assert data == {"description": indicator, "name": "x"}

    def test_indented_colon_line_stays_in_block(self) -> None:
        """Only a column-0 line with a colon closes a block."""
        data = parse_frontmatter(doc("description: |", "  Use when: deploying", "name: x"))
        assert data["description"] == "Use when: deploying"

    def test_unindented_line_without_colon_stays_in_block(self) -> None:
        data = parse_frontmatter(doc("description: |", "plain text", "name: x"))
        assert data["description"] == "plain text"


class TestSerialization:
    """Tests for the canonical re-serialization."""

    @pytest.mark.parametrize(
        "lines",
        [
            ("name: my-skill", "description: Use when testing"),
            ('title: "\'quoted\'"', "empty:"),
            ("tags: [a, b, c]", "other: []"),
            ("description: |", "  line one", "  line two", "name: x"),
            ("tags:", "  [", "    x,", "    y", "  ]"),
            ("value: |x", 'quote: """', "bracket: '[not a list'"),
            ("notes: |", "  [a, b]", "empty: |", "  []"),
            ("lead: \"'open", "trail: close'\""),
        ],
    )
    def test_parse_serialize_parse_is_stable(self, lines: tuple[str, ...]) -> None:
        """Re-serializing a parsed block and parsing again yields the same map."""
        parsed = parse_frontmatter(doc(*lines))
        assert parse_frontmatter(serialize_frontmatter(parsed)) == parsed

    def test_serialized_form(self) -> None:
        text = serialize_frontmatter({"name": "a", "tags": ["x", "y"], "notes": "one\ntwo"})
        assert text == '---\nname: "a"\ntags: [x, y]\nnotes: |\n  one\n  two\n---\n'


class TestStrictYaml:
    """Tests for the PyYAML cross-check."""

    def test_valid_yaml(self) -> None:
        assert strict_yaml_problem(doc("name: my-skill", "tags: [a, b]")) is None

    def test_empty_block_is_fine(self) -> None:
        assert strict_yaml_problem("---\n---\n") is None

    def test_colon_in_plain_scalar(self) -> None:
        """A second ': ' in an unquoted value breaks real YAML loaders."""
        problem = strict_yaml_problem(doc("name: my-skill", "description: Use when: deploying"))
        assert problem is not None
        assert problem.startswith("line 3:")

    def test_non_mapping(self) -> None:
        problem = strict_yaml_problem(doc("- one", "- two"))
        assert problem == "top level is a list, not a mapping"

    def test_requires_delimiters(self) -> None:
        with pytest.raises(MissingClosingDelimiter):
            strict_yaml_problem("---\nname: x\n")
