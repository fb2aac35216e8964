#!/usr/bin/env python3
"""
Skill Package Validation - Common Module

Shared validation infrastructure for the skill package validators.
This module contains:
- Type definitions (ValidationResult, ValidatorConfig)
- Common constants (stopwords, vague description patterns, excluded files)
- Utility functions (trigger word extraction, terminal colors)

All individual validators should import from this module to ensure consistency.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from pathlib import Path

# =============================================================================
# Exit Codes
# =============================================================================

EXIT_OK = 0  # Every processed skill is free of errors (warnings allowed)
EXIT_FAILED = 1  # At least one skill has errors, or nothing was found to validate

# =============================================================================
# Common Constants
# =============================================================================

SKILL_FILE = "SKILL.md"
REFERENCES_DIR = "references"
SCRIPTS_DIR = "scripts"

# Function words plus filler that says nothing about when a skill applies
COMMON_WORDS = frozenset(
    {
        "use", "when", "for", "the", "and", "or", "to", "in", "on", "with",
        "this", "that", "is", "are", "be", "been", "being", "have", "has", "had",
        "do", "does", "did", "will", "would", "could", "should", "may", "might",
        "must", "shall", "can", "need", "about", "into", "through", "during",
        "before", "after", "above", "below", "from", "up", "down", "out", "off",
        "over", "under", "again", "further", "then", "once", "here", "there",
        "all", "each", "few", "more", "most", "other", "some", "such", "no",
        "nor", "not", "only", "own", "same", "so", "than", "too", "very", "just",
        "also", "now", "of", "a", "an", "as", "at", "by", "if", "it", "its",
        "any", "how", "what", "which", "who", "whom", "these", "those", "am",
        "was", "were", "you", "your", "they", "them", "their", "we", "our", "i",
        "me", "my", "he", "she", "him", "her", "his", "hers",
        "skill", "skills", "best", "practices", "patterns", "creating",
        "building", "implementing", "working", "handling", "managing", "using",
    }
)

# (pattern, term) pairs; matched against the lowercased description
VAGUE_PATTERNS: tuple[tuple[re.Pattern[str], str], ...] = (
    (re.compile(r"\bhelps?\s+with\b"), "helps with"),
    (re.compile(r"\bworks?\s+with\b"), "works with"),
    (re.compile(r"\bassists?\s+with\b"), "assists with"),
    (re.compile(r"\bfor\s+working\s+with\b"), "for working with"),
    (re.compile(r"\bhandles?\b"), "handles"),
    (re.compile(r"\bmanages?\b"), "manages"),
)

# Anything that looks like an XML/HTML tag
XML_TAG_PATTERN = re.compile(r"<[^>]+>")

NAME_CHARSET_PATTERN = re.compile(r"^[a-z0-9-]+$")

WORD_PATTERN = re.compile(r"[a-z]+")


# =============================================================================
# Configuration
# =============================================================================


@dataclass(frozen=True)
class ValidatorConfig:
    """Thresholds and word lists shared by every validator in a run.

    Built once in main() and handed to each validator function. The defaults
    are the rules the skills corpus is held to.
    """

    skills_dir: str = "skills"

    skill_max_lines: int = 500
    skill_warn_lines: int = 400
    skill_target_lines: int = 150
    ref_max_lines: int = 750
    ref_warn_lines: int = 500

    min_name_length: int = 4
    max_name_length: int = 64
    reserved_words: tuple[str, ...] = ("anthropic", "claude")

    max_description_length: int = 1024
    first_person_words: frozenset[str] = frozenset({"i", "you", "we"})
    trigger_phrases: tuple[str, ...] = ("use when", "use for")
    density_marker: str = "use for"
    min_trigger_keywords: int = 5
    recommended_trigger_keywords: int = 8
    stopwords: frozenset[str] = COMMON_WORDS
    vague_patterns: tuple[tuple[re.Pattern[str], str], ...] = VAGUE_PATTERNS

    required_sections: tuple[str, ...] = ("## Common Mistakes", "## Delegation")

    # Files the skills CLI drops when installing a skill
    excluded_files: frozenset[str] = frozenset({"README.md", "metadata.json"})
    script_extensions: tuple[str, ...] = (".py", ".sh")

    similarity_threshold: float = 0.5
    max_common_words: int = 5

    strict_yaml: bool = False


DEFAULT_CONFIG = ValidatorConfig()


# =============================================================================
# Type Definitions
# =============================================================================


@dataclass
class ValidationResult:
    """Errors and warnings collected for one document or one skill.

    Every check appends to the lists instead of stopping at the first
    problem, so a single run reports the full defect list.
    """

    errors: list[str] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)

    def error(self, message: str) -> None:
        """Add a blocking issue."""
        self.errors.append(message)

    def warning(self, message: str) -> None:
        """Add an advisory issue — never affects the exit code."""
        self.warnings.append(message)

    def merge(self, other: ValidationResult) -> None:
        """Merge results from another result into this one."""
        self.errors.extend(other.errors)
        self.warnings.extend(other.warnings)

    @property
    def passed(self) -> bool:
        """True when no errors were recorded."""
        return not self.errors

    def to_dict(self) -> dict[str, list[str]]:
        """Convert to dictionary for JSON serialization."""
        return {"errors": list(self.errors), "warnings": list(self.warnings)}


# =============================================================================
# Utility Functions
# =============================================================================


def extract_trigger_words(text: str, stopwords: frozenset[str] = COMMON_WORDS) -> set[str]:
    """Lowercase alphabetic words of *text* that are not stopwords."""
    return {word for word in WORD_PATTERN.findall(text.lower()) if word not in stopwords}


def as_text(value: str | list[str] | None) -> str:
    """Render a frontmatter value as a string (lists are comma-joined)."""
    if value is None:
        return ""
    if isinstance(value, list):
        return ",".join(value)
    return value


def is_script_executable(path: Path) -> bool:
    """Check if any of the owner/group/other execute bits is set."""
    return bool(path.stat().st_mode & 0o111)


# =============================================================================
# Color Formatting (for terminal output)
# =============================================================================

# ANSI color codes
COLORS = {
    "ERROR": "\033[91m",  # Red
    "WARNING": "\033[93m",  # Yellow
    "PASSED": "\033[92m",  # Green
    "RESET": "\033[0m",  # Reset
    "BOLD": "\033[1m",  # Bold
}


def colorize(text: str, level: str, enabled: bool = True) -> str:
    """Apply color to text based on level."""
    if not enabled:
        return text
    color = COLORS.get(level, "")
    return f"{color}{text}{COLORS['RESET']}"
