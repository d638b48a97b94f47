"""Shared test fixtures for shellqa tests."""

import textwrap
from pathlib import Path

import pytest

from shellqa.scanning import FunctionExtractor, SourceFile


def pytest_addoption(parser):
    """Add --run-slow option for slow tests."""
    parser.addoption(
        "--run-slow",
        action="store_true",
        default=False,
        help="run slow tests",
    )


def pytest_configure(config):
    """Configure slow marker."""
    config.addinivalue_line("markers", "slow: mark test as slow to run")


def pytest_collection_modifyitems(config, items):
    """Skip slow tests unless --run-slow is given."""
    if config.getoption("--run-slow"):
        return
    skip_slow = pytest.mark.skip(reason="need --run-slow option to run")
    for item in items:
        if "slow" in item.keywords:
            item.add_marker(skip_slow)


def make_source(text: str, path: str = "lib.sh") -> SourceFile:
    """Build an in-memory SourceFile from (dedented) shell text."""
    content = textwrap.dedent(text).lstrip("\n")
    return SourceFile(path=path, abs_path=Path("/virtual") / path, lines=tuple(content.splitlines()))


def extract(text: str, path: str = "lib.sh"):
    """Extract records from shell text; returns (records, diagnostics)."""
    return FunctionExtractor().extract(make_source(text, path))


@pytest.fixture
def shell_tree(tmp_path):
    """Write a dict of {relative path: shell text} under tmp_path.

    Returns the root directory.
    """

    def _write(files: dict) -> Path:
        for rel_path, text in files.items():
            target = tmp_path / rel_path
            target.parent.mkdir(parents=True, exist_ok=True)
            target.write_text(textwrap.dedent(text).lstrip("\n"), encoding="utf-8")
        return tmp_path

    return _write


@pytest.fixture
def duplicate_tree(shell_tree):
    """Two files defining near-identical helpers (fails the run)."""
    return shell_tree(
        {
            "lib/a.sh": """
                validate_configuration() {
                    local value="$1"
                    if [ -z "$value" ]; then
                        echo "empty" >&2
                        return 1
                    fi
                    echo "$value"
                }
            """,
            "lib/b.sh": """
                validate_configurations() {
                    local value="$1"
                    if [ -z "$value" ]; then
                        echo "missing" >&2
                        return 1
                    fi
                    printf '%s\\n' "$value"
                }
            """,
        }
    )


@pytest.fixture
def clean_tree(shell_tree):
    """Distinct, non-trivial functions only."""
    return shell_tree(
        {
            "net.sh": """
                fetch_url() {
                    local url="$1"
                    local out="$2"
                    curl -fsSL "$url" -o "$out"
                    echo "saved $out"
                }
            """,
            "text.sh": """
                trim_whitespace() {
                    local s="$1"
                    s="${s#"${s%%[![:space:]]*}"}"
                    s="${s%"${s##*[![:space:]]}"}"
                    printf '%s' "$s"
                }
            """,
        }
    )
