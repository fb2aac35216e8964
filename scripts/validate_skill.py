#!/usr/bin/env python3
"""
Skill Package Validation - Skill Validator

Validates a single skill directory:
- SKILL.md frontmatter (name, description) and body (size, code fences,
  required sections)
- references/*.md frontmatter and size
- links between SKILL.md and references/ (broken links, orphan files)
- files the skills CLI excludes at install time
- executable bits on scripts/

Errors block the skill; warnings are advisory. Every check runs, so one pass
reports the complete list of problems.

Usage:
    uv run python scripts/validate_skills.py skills/my-skill
"""

from __future__ import annotations

import os
import re
from pathlib import Path

from skill_frontmatter import (
    Frontmatter,
    FrontmatterError,
    has_frontmatter,
    parse_frontmatter,
    strict_yaml_problem,
)
from skill_validation_common import (
    DEFAULT_CONFIG,
    NAME_CHARSET_PATTERN,
    REFERENCES_DIR,
    SCRIPTS_DIR,
    SKILL_FILE,
    XML_TAG_PATTERN,
    ValidationResult,
    ValidatorConfig,
    as_text,
    extract_trigger_words,
    is_script_executable,
)

# Links from SKILL.md into references/, e.g. [Setup](references/setup.md)
REFERENCE_LINK_PATTERN = re.compile(r"\(references/([^)]+\.md)\)")

CODE_FENCE = "```"


# =============================================================================
# SKILL.md
# =============================================================================


def validate_name_field(name: str, dir_name: str, result: ValidationResult, config: ValidatorConfig) -> None:
    """Validate the 'name' frontmatter field."""
    if len(name) > config.max_name_length:
        result.error(f"Field 'name' exceeds {config.max_name_length} characters ({len(name)} chars)")
    elif len(name) < config.min_name_length:
        result.error(
            f"Field 'name' is too short ({len(name)} chars, min {config.min_name_length}). "
            "Use a descriptive name, not an abbreviation"
        )
    elif not NAME_CHARSET_PATTERN.match(name):
        result.error("Field 'name' must use only lowercase letters, numbers, and hyphens")

    if name.startswith("-") or name.endswith("-"):
        result.error("Field 'name' must not start or end with a hyphen")

    if "--" in name:
        result.error("Field 'name' must not contain consecutive hyphens (--)")

    for word in config.reserved_words:
        if word in name:
            result.error(f"Field 'name' contains reserved word '{word}'")

    if XML_TAG_PATTERN.search(name):
        result.error("Field 'name' must not contain XML tags")

    if name != dir_name:
        result.error(f"Field 'name' ({name}) must match directory name ({dir_name})")


def validate_description_field(desc: str, result: ValidationResult, config: ValidatorConfig) -> None:
    """Validate the 'description' frontmatter field.

    Length is checked first; an oversized description gets no further
    quality checks.
    """
    if len(desc) > config.max_description_length:
        result.error(
            f"Field 'description' exceeds {config.max_description_length} characters ({len(desc)} chars)"
        )
        return

    if XML_TAG_PATTERN.search(desc):
        result.error("Field 'description' must not contain XML tags")

    words = desc.split()
    first_word = words[0].lower() if words else ""
    if first_word in config.first_person_words:
        result.warning(
            "Description should use third-person voice "
            "('Extracts text from PDFs', not 'I help you' or 'You can use')"
        )

    desc_lower = desc.lower()
    if not any(phrase in desc_lower for phrase in config.trigger_phrases):
        result.warning("Description should include trigger phrases like 'Use when...' or 'Use for...'")

    # One vague term is enough to make the point
    for pattern, term in config.vague_patterns:
        if pattern.search(desc_lower):
            result.warning(f"Vague term '{term}' in description - use specific triggers instead")
            break

    if config.density_marker in desc_lower:
        after_marker = desc_lower.split(config.density_marker)[1]
        triggers = extract_trigger_words(after_marker, config.stopwords)
        if len(triggers) < config.min_trigger_keywords:
            result.warning(
                f"Low trigger density: only {len(triggers)} keywords after "
                f"'{config.density_marker.capitalize()}' (recommend {config.recommended_trigger_keywords}+)"
            )


def validate_frontmatter_fields(
    frontmatter: Frontmatter, dir_name: str, result: ValidationResult, config: ValidatorConfig
) -> None:
    """Validate required SKILL.md frontmatter fields."""
    name = as_text(frontmatter.get("name"))
    if not name:
        result.error("Missing required field: 'name' in frontmatter")
    else:
        validate_name_field(name, dir_name, result, config)

    desc = as_text(frontmatter.get("description"))
    if not desc:
        result.error("Missing required field: 'description' in frontmatter")
    else:
        validate_description_field(desc, result, config)


def validate_code_blocks(lines: list[str], result: ValidationResult) -> None:
    """Check that fenced code blocks are tagged with a language and closed."""
    in_code_block = False
    block_start = 0
    for line_no, line in enumerate(lines, start=1):
        stripped = line.strip()
        if not stripped.startswith(CODE_FENCE):
            continue
        if not in_code_block:
            block_start = line_no
            if not stripped[len(CODE_FENCE) :].strip():
                result.error(f"Line {line_no}: Code block missing language specifier (MD040)")
        in_code_block = not in_code_block

    if in_code_block:
        result.error(f"Unclosed code block starting at line {block_start}")


def validate_skill_md(file_path: Path, content: str, config: ValidatorConfig = DEFAULT_CONFIG) -> ValidationResult:
    """Validate a SKILL.md document.

    Args:
        file_path: Path to SKILL.md (its parent directory names the skill)
        content: Raw file content
        config: Thresholds for this run

    Returns:
        ValidationResult with all errors and warnings found
    """
    result = ValidationResult()
    lines = content.split("\n")
    line_count = len(lines)

    try:
        frontmatter = parse_frontmatter(content)
    except FrontmatterError as e:
        result.error(str(e))
    else:
        validate_frontmatter_fields(frontmatter, file_path.parent.name, result, config)
        if config.strict_yaml:
            problem = strict_yaml_problem(content)
            if problem:
                result.warning(f"Frontmatter is not valid YAML for strict parsers ({problem})")

    if line_count > config.skill_max_lines:
        result.error(f"{SKILL_FILE} is {line_count} lines (max {config.skill_max_lines}). Split to references/")
    elif line_count > config.skill_warn_lines:
        result.warning(
            f"{SKILL_FILE} is {line_count} lines "
            f"(target ~{config.skill_target_lines}, max {config.skill_max_lines})"
        )

    validate_code_blocks(lines, result)

    content_lower = content.lower()
    for section in config.required_sections:
        if section.lower() not in content_lower:
            result.warning(f"Missing '{section}' section")

    return result


# =============================================================================
# references/*.md
# =============================================================================


def validate_reference_md(
    file_path: Path, content: str, config: ValidatorConfig = DEFAULT_CONFIG
) -> ValidationResult:
    """Validate a reference document. Frontmatter problems are warnings only."""
    result = ValidationResult()
    line_count = len(content.split("\n"))
    file_name = file_path.name

    if line_count > config.ref_max_lines:
        result.error(f"{file_name}: {line_count} lines (max {config.ref_max_lines})")
    elif line_count > config.ref_warn_lines:
        result.warning(f"{file_name}: {line_count} lines (consider splitting at ~{config.ref_warn_lines})")

    if not has_frontmatter(content):
        result.warning(f"{file_name}: Missing YAML frontmatter (title, description, tags required)")
        return result

    try:
        frontmatter = parse_frontmatter(content)
    except FrontmatterError as e:
        result.warning(f"{file_name}: {e}")
        return result

    for field_name in ("title", "description"):
        if not as_text(frontmatter.get(field_name)).strip():
            result.warning(f"{file_name}: Missing '{field_name}' in frontmatter")

    if not frontmatter.get("tags"):
        result.warning(f"{file_name}: Missing 'tags' in frontmatter")

    return result


def list_reference_files(skill_dir: Path) -> list[Path]:
    """Reference documents in references/, sorted, underscore files excluded."""
    refs_dir = skill_dir / REFERENCES_DIR
    if not refs_dir.is_dir():
        return []
    return sorted(
        path for path in refs_dir.iterdir() if path.name.endswith(".md") and not path.name.startswith("_")
    )


def cross_validate_references(skill_dir: Path, skill_content: str) -> ValidationResult:
    """Check that SKILL.md links and references/ files match one-to-one."""
    result = ValidationResult()

    # dict keeps first-appearance order
    linked = dict.fromkeys(REFERENCE_LINK_PATTERN.findall(skill_content))
    actual = dict.fromkeys(path.name for path in list_reference_files(skill_dir))

    for name in linked:
        if name not in actual:
            result.error(f"Broken reference link: {REFERENCES_DIR}/{name} (file not found)")

    for name in actual:
        if name not in linked:
            result.error(f"Orphan reference file: {REFERENCES_DIR}/{name} (not linked in {SKILL_FILE})")

    return result


# =============================================================================
# Skill directory
# =============================================================================


def validate_excluded_files(skill_dir: Path, result: ValidationResult, config: ValidatorConfig) -> None:
    """Warn about top-level files the skills CLI leaves out when installing."""
    for entry in sorted(skill_dir.iterdir()):
        if entry.name in config.excluded_files or entry.name.startswith("_"):
            result.warning(f"'{entry.name}' is excluded by the skills CLI during installation")


def validate_scripts(skill_dir: Path, result: ValidationResult, config: ValidatorConfig) -> None:
    """Warn about helper scripts that are missing the execute bit."""
    scripts_dir = skill_dir / SCRIPTS_DIR
    if not scripts_dir.is_dir():
        return

    # No POSIX execute semantics on Windows
    if os.name == "nt":
        return

    for script in sorted(scripts_dir.iterdir()):
        if not script.is_file() or not script.name.endswith(config.script_extensions):
            continue
        if not is_script_executable(script):
            result.warning(f"Script not executable: {SCRIPTS_DIR}/{script.name} (run chmod +x)")


def validate_skill(skill_dir: Path, config: ValidatorConfig = DEFAULT_CONFIG) -> ValidationResult:
    """Validate a complete skill directory.

    Args:
        skill_dir: Path to the skill directory
        config: Thresholds for this run

    Returns:
        ValidationResult with all results
    """
    result = ValidationResult()

    dir_name = skill_dir.name
    if len(dir_name) < config.min_name_length:
        result.error(
            f"Directory name '{dir_name}' is too short ({len(dir_name)} chars, "
            f"min {config.min_name_length}). Use a descriptive name, not an abbreviation"
        )

    skill_file = skill_dir / SKILL_FILE
    if not skill_file.is_file():
        # Nothing else is meaningful without the primary document
        return ValidationResult(errors=[f"{SKILL_FILE} not found"])

    skill_content = skill_file.read_text(encoding="utf-8")
    result.merge(validate_skill_md(skill_file, skill_content, config))

    for ref_path in list_reference_files(skill_dir):
        result.merge(validate_reference_md(ref_path, ref_path.read_text(encoding="utf-8"), config))

    result.merge(cross_validate_references(skill_dir, skill_content))

    validate_excluded_files(skill_dir, result, config)
    validate_scripts(skill_dir, result, config)

    return result


def read_description(skill_dir: Path) -> str | None:
    """Frontmatter description of a skill, or None if it has none."""
    skill_file = skill_dir / SKILL_FILE
    if not skill_file.is_file():
        return None
    try:
        frontmatter = parse_frontmatter(skill_file.read_text(encoding="utf-8"))
    except FrontmatterError:
        return None
    return as_text(frontmatter.get("description")) or None
