"""Shared fixtures for inline-kanban tests."""

import sys
from pathlib import Path

import pytest

# Ensure the package is importable without installation
sys.path.insert(0, str(Path(__file__).parent.parent))


SAMPLE_BLOCK = [
    "<!-- sprint 12 -->",
    "columns:",
    "  - Todo",
    "  - Doing (2)",
    "  - Done {#22c55e}",
    "",
    "items:",
    "  - [Todo] Write parser",
    "  - [Todo] Write merger",
    "    keep comments intact",
    "  - [Doing] Review payloads",
    "",
    "<!-- end -->",
]


@pytest.fixture
def sample_lines():
    return list(SAMPLE_BLOCK)


@pytest.fixture
def sample_source():
    return "\n".join(SAMPLE_BLOCK)


@pytest.fixture
def markdown_file(tmp_path):
    """A Markdown note with prose around one kanban block."""
    path = tmp_path / "notes.md"
    path.write_text(
        "# Sprint notes\n"
        "\n"
        "Some prose before the board.\n"
        "\n"
        "```kanban\n"
        + "\n".join(SAMPLE_BLOCK)
        + "\n```\n"
        "\n"
        "Prose after.\n",
        encoding="utf-8",
    )
    return path
