#!/usr/bin/env python3
"""
Skill Package Validation - Command Line Entry Point

Validates one or more skill directories and reports errors and warnings.
Multi-skill runs also compare descriptions across skills and warn about
near-duplicates.

Usage:
    uv run python scripts/validate_skills.py
    uv run python scripts/validate_skills.py skills/my-skill
    uv run python scripts/validate_skills.py skills/my-skill/SKILL.md
    uv run python scripts/validate_skills.py skills/ --json

Exit codes:
    0 - No processed skill has errors (warnings never fail a run)
    1 - At least one skill has errors, or no skills were found
"""

from __future__ import annotations

import argparse
import dataclasses
import json
import sys
from pathlib import Path

from skill_validation_common import (
    EXIT_FAILED,
    EXIT_OK,
    REFERENCES_DIR,
    SKILL_FILE,
    ValidationResult,
    ValidatorConfig,
    colorize,
)
from validate_skill import read_description, validate_skill
from validate_skill_conflicts import check_description_conflicts

EPILOG = """\
  No args         Validate all skills in skills/
  skills/name     Validate a single skill
  file1 file2     Validate skills containing these files

Examples:
  validate-skills
  validate-skills skills/tanstack-query
  validate-skills skills/tanstack-query/SKILL.md
"""


# =============================================================================
# Skill Discovery
# =============================================================================


def _is_skill_dir(path: Path) -> bool:
    return path.is_dir() and (path / SKILL_FILE).is_file()


def discover_skill_dirs(root: Path) -> list[Path]:
    """Immediate subdirectories of *root* that contain a SKILL.md."""
    if not root.is_dir():
        return []
    return sorted(child for child in root.iterdir() if _is_skill_dir(child))


def resolve_skill_dirs(paths: list[str], config: ValidatorConfig) -> list[Path]:
    """Turn command-line paths into a sorted, de-duplicated list of skill dirs.

    Each path may be a SKILL.md or reference .md file, a skill directory, or
    a directory of skill directories. With no paths, every skill under
    config.skills_dir is returned.
    """
    if not paths:
        return discover_skill_dirs(Path(config.skills_dir).resolve())

    skill_dirs: set[Path] = set()
    for arg in paths:
        resolved = Path(arg).resolve()

        if not resolved.exists():
            print(f"Warning: path not found: {arg}", file=sys.stderr)
            continue

        if resolved.is_file():
            if resolved.suffix != ".md":
                continue
            owner = resolved.parent
            if owner.name == REFERENCES_DIR:
                owner = owner.parent
            if (owner / SKILL_FILE).is_file():
                skill_dirs.add(owner)
        elif _is_skill_dir(resolved):
            skill_dirs.add(resolved)
        else:
            skill_dirs.update(discover_skill_dirs(resolved))

    return sorted(skill_dirs)


# =============================================================================
# Output
# =============================================================================


def print_single_result(name: str, result: ValidationResult, color: bool) -> None:
    """Print the full error/warning detail for a single-skill run."""
    cross = colorize("x", "ERROR", color)
    bang = colorize("!", "WARNING", color)

    if result.errors:
        print(f"{cross} {name}: FAILED\n")
        print("Errors:")
        for error in result.errors:
            print(f"  {cross} {error}")
        print()

    if result.warnings:
        print("Warnings:")
        for warning in result.warnings:
            print(f"  {bang} {warning}")
        print()

    if not result.errors and not result.warnings:
        print(f"  {name}: {colorize('passed', 'PASSED', color)}")
    elif not result.errors:
        print(f"  {name}: valid (with warnings)")


def print_summary_line(name: str, result: ValidationResult, color: bool) -> None:
    """Print the one-line status of a skill in a multi-skill run."""
    cross = colorize("x", "ERROR", color)
    if result.errors:
        print(f"{cross} {name}: FAILED")
        for error in result.errors:
            print(f"   {cross} {error}")
    elif result.warnings:
        print(f"  {name}: valid ({len(result.warnings)} warning(s))")
    else:
        print(f"  {name}: {colorize('passed', 'PASSED', color)}")


def print_json(
    results: list[tuple[Path, ValidationResult]],
    conflicts: list[str],
    failed: list[str],
    total_warnings: int,
    exit_code: int,
) -> None:
    """Print validation results as JSON.

    Skills are listed in validation order with their full path, so two skill
    directories sharing a basename both appear.
    """
    output = {
        "skills": [
            {"name": skill_dir.name, "path": str(skill_dir), **result.to_dict()} for skill_dir, result in results
        ],
        "conflicts": conflicts,
        "failed": failed,
        "total_errors": sum(len(result.errors) for _, result in results),
        "total_warnings": total_warnings,
        "exit_code": exit_code,
    }
    print(json.dumps(output, indent=2))


# =============================================================================
# Main
# =============================================================================


def main(argv: list[str] | None = None) -> int:
    """Main entry point."""
    parser = argparse.ArgumentParser(
        description="Validate skill packages (SKILL.md, references/, scripts/)",
        epilog=EPILOG,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("paths", nargs="*", help="Skill directories, directories of skills, or files inside a skill")
    parser.add_argument("--json", action="store_true", help="Output as JSON")
    parser.add_argument(
        "--strict-yaml",
        action="store_true",
        help="Also require frontmatter to load with a full YAML parser (reported as warnings)",
    )
    parser.add_argument("--no-color", action="store_true", help="Disable colored output")
    args = parser.parse_args(argv)

    config = dataclasses.replace(ValidatorConfig(), strict_yaml=args.strict_yaml)
    color = not args.no_color and not args.json and sys.stdout.isatty()

    skill_dirs = resolve_skill_dirs(args.paths, config)
    if not skill_dirs:
        if args.json:
            print_json([], [], [], 0, EXIT_FAILED)
        else:
            print("No skills found to validate")
        return EXIT_FAILED

    is_single = len(skill_dirs) == 1
    if not is_single and not args.json:
        print(f"Validating {len(skill_dirs)} skill(s)...\n")

    results: list[tuple[Path, ValidationResult]] = []
    descriptions: dict[str, str] = {}
    failed: list[str] = []
    total_warnings = 0

    for skill_dir in skill_dirs:
        name = skill_dir.name
        result = validate_skill(skill_dir, config)
        results.append((skill_dir, result))
        total_warnings += len(result.warnings)
        if result.errors:
            failed.append(name)

        if not args.json:
            if is_single:
                print_single_result(name, result, color)
            else:
                print_summary_line(name, result, color)

        description = read_description(skill_dir)
        if description:
            descriptions[name] = description

    conflicts: list[str] = []
    if not is_single and len(descriptions) > 1:
        conflicts = check_description_conflicts(descriptions, config=config)
        total_warnings += len(conflicts)
        if conflicts and not args.json:
            print(f"\n{colorize('!', 'WARNING', color)} Description conflicts:")
            for conflict in conflicts:
                print(f"   {conflict}")

    exit_code = EXIT_FAILED if failed else EXIT_OK
    if args.json:
        print_json(results, conflicts, failed, total_warnings, exit_code)
    elif not is_single:
        print()
        if failed:
            print(f"{colorize('x', 'ERROR', color)} {len(failed)} skill(s) failed: {', '.join(failed)}")
        else:
            print(f"  All {len(skill_dirs)} skill(s) passed")
        if total_warnings:
            print(f"  {total_warnings} total warning(s)")

    return exit_code


if __name__ == "__main__":
    sys.exit(main())
