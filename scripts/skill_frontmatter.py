#!/usr/bin/env python3
"""
Skill Package Validation - Frontmatter Parser

Parses the restricted YAML dialect used in skill frontmatter:

    ---
    name: my-skill
    description: "Quoted or bare scalars"
    tags: [inline, arrays]
    keywords:
      [
        multi-line,
        flow arrays
      ]
    notes: |
      Block scalars, folded into one trimmed string
    ---

Nested mappings, anchors and multiple documents are not part of the dialect.
Unrecognized lines are skipped; the only hard failures are a missing opening
or closing delimiter.

A strict cross-check against PyYAML is available for authors who want the
frontmatter to load with a real YAML parser as well.
"""

from __future__ import annotations

from enum import Enum

import yaml

Frontmatter = dict[str, str | list[str]]

DELIMITER = "---"

BLOCK_INDICATORS = {"|", ">"}

QUOTE_CHARS = ('"', "'")


class FrontmatterError(ValueError):
    """Frontmatter could not be located in the document."""


class MissingOpeningDelimiter(FrontmatterError):
    def __init__(self) -> None:
        super().__init__("YAML frontmatter must start with --- on line 1")


class MissingClosingDelimiter(FrontmatterError):
    def __init__(self) -> None:
        super().__init__("Invalid YAML frontmatter: missing closing ---")


class _Mode(Enum):
    SCALAR = "scalar"
    BLOCK = "block"


def has_frontmatter(content: str) -> bool:
    """Check if the first line of *content* is an opening delimiter."""
    first_line = content.split("\n", 1)[0]
    return first_line.rstrip() == DELIMITER


def _locate(content: str) -> tuple[list[str], int]:
    """Split *content* into lines and find the closing delimiter index."""
    if not has_frontmatter(content):
        raise MissingOpeningDelimiter()

    lines = content.split("\n")
    for index in range(1, len(lines)):
        if lines[index].strip() == DELIMITER:
            return lines, index
    raise MissingClosingDelimiter()


def extract_frontmatter_block(content: str) -> str:
    """Return the raw text between the frontmatter delimiters."""
    lines, end = _locate(content)
    return "\n".join(lines[1:end])


def _unquote(value: str) -> str:
    """Strip one leading and one trailing quote, matched or not."""
    if value.startswith(QUOTE_CHARS):
        value = value[1:]
    if value.endswith(QUOTE_CHARS):
        value = value[:-1]
    return value


def _split_items(inner: str) -> list[str]:
    return [item.strip() for item in inner.split(",") if item.strip()]


def _read_flow_array(lines: list[str], start: int, end: int) -> tuple[list[str] | None, int]:
    """Collect a flow array that opens on the next non-blank line.

    Returns (items, index of the first line after the array), or
    (None, start) when no complete array follows.
    """
    index = start
    while index < end and not lines[index].strip():
        index += 1
    if index >= end or not lines[index].strip().startswith("["):
        return None, start

    parts: list[str] = []
    while index < end:
        stripped = lines[index].strip()
        parts.append(stripped)
        if stripped.endswith("]"):
            break
        index += 1

    joined = " ".join(parts).strip()
    if joined.startswith("[") and joined.endswith("]"):
        return _split_items(joined[1:-1]), index + 1
    return None, start


def parse_frontmatter(content: str) -> Frontmatter:
    """Parse the frontmatter at the top of a Markdown document.

    Args:
        content: Full text of the Markdown file

    Returns:
        Mapping of keys to string or list-of-string values

    Raises:
        MissingOpeningDelimiter: The first line is not ``---``
        MissingClosingDelimiter: No later ``---`` line closes the block
    """
    lines, end = _locate(content)

    data: Frontmatter = {}
    mode = _Mode.SCALAR
    pending_key = ""
    buffer: list[str] = []

    index = 1
    while index < end:
        line = lines[index]
        stripped = line.strip()
        index += 1

        if not stripped or stripped.startswith("#"):
            continue

        if mode is _Mode.BLOCK:
            # A non-indented `key:` line ends the block scalar
            if line[0].isspace() or ":" not in line:
                buffer.append(stripped)
                continue
            data[pending_key] = "\n".join(buffer).strip()
            mode = _Mode.SCALAR

        key, sep, value = line.partition(":")
        if not sep:
            continue
        key = key.strip()
        value = value.strip()

        if value in BLOCK_INDICATORS:
            pending_key = key
            buffer = []
            mode = _Mode.BLOCK
            continue

        if not value:
            items, next_index = _read_flow_array(lines, index, end)
            if items is not None:
                data[key] = items
                index = next_index
                continue

        value = _unquote(value)
        if value.startswith("[") and value.endswith("]"):
            data[key] = _split_items(value[1:-1])
        else:
            data[key] = value

    if mode is _Mode.BLOCK:
        data[pending_key] = "\n".join(buffer).strip()

    return data


def serialize_frontmatter(data: Frontmatter) -> str:
    """Write *data* back in the canonical form accepted by parse_frontmatter.

    Scalars are double-quoted (the parser strips one quote from each end),
    lists use the inline ``[a, b]`` form. Multi-line strings and strings that
    look like an inline array become ``|`` blocks, since quoting would not
    keep the latter from being read back as a list.
    """
    out = [DELIMITER]
    for key, value in data.items():
        if isinstance(value, list):
            out.append(f"{key}: [{', '.join(value)}]")
        elif "\n" in value or (value.startswith("[") and value.endswith("]")):
            out.append(f"{key}: |")
            out.extend(f"  {line}" for line in value.split("\n"))
        else:
            out.append(f'{key}: "{value}"')
    out.append(DELIMITER)
    return "\n".join(out) + "\n"


def strict_yaml_problem(content: str) -> str | None:
    """Load the frontmatter block with PyYAML and describe any failure.

    Returns None when the block loads as a mapping (or is empty).
    """
    block = extract_frontmatter_block(content)
    try:
        loaded = yaml.safe_load(block)
    except yaml.YAMLError as e:
        mark = getattr(e, "problem_mark", None)
        problem = getattr(e, "problem", None) or str(e)
        if mark is not None:
            # +2: mark lines are 0-based and the block starts after line 1
            return f"line {mark.line + 2}: {problem}"
        return problem

    if loaded is None or isinstance(loaded, dict):
        return None
    return f"top level is a {type(loaded).__name__}, not a mapping"
