"""Pytest configuration and shared fixtures.

Following Linus's principle: "Simplicity is the ultimate sophistication."
Provides minimal, focused test fixtures and configuration.
"""

import os
import sys
import tempfile
import pytest
from pathlib import Path

# Add src to path for imports
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..', 'src'))


SAMPLE_JS = '''// 这是单行注释 search
function searchFunction() {
    // search inside a line comment
    const searchTerm = "search in a string";

    /* block comment
       search keyword here too */

    const commentInString = "// not a comment";
    const blockCommentInString = "/* not a comment */";

    const searchResult = 'search in a char literal';
    return searchResult;
}
'''

SAMPLE_CPP = '''#include <string>
/* header comment: search */
int search(int value) {
    std::string s = "escaped \\" search still inside";
    char c = '\\'';
    return value; // search trailing comment
}
'''


@pytest.fixture
def sample_project():
    """Create a small project with comments, strings and code."""
    with tempfile.TemporaryDirectory() as temp_dir:
        project_path = Path(temp_dir)

        (project_path / "app.js").write_text(SAMPLE_JS, encoding="utf-8")
        (project_path / "main.cpp").write_text(SAMPLE_CPP, encoding="utf-8")

        lib = project_path / "lib"
        lib.mkdir()
        (lib / "util.ts").write_text(
            "export const search = 1; // search\nexport function doSearch() { return search; }\n",
            encoding="utf-8",
        )

        # Excluded directory and binary file
        node_modules = project_path / "node_modules"
        node_modules.mkdir()
        (node_modules / "dep.js").write_text("const search = 0;\n", encoding="utf-8")
        (project_path / "logo.png").write_bytes(b"\x89PNG\r\n\x1a\nsearch")

        yield project_path


@pytest.fixture
def paged_project():
    """Create numbered files with a known number of matches each."""
    with tempfile.TemporaryDirectory() as temp_dir:
        project_path = Path(temp_dir)
        # file_00 .. file_07, each with 3 code matches
        for i in range(8):
            lines = [f"const needle_{j} = {i}; // needle comment" for j in range(3)]
            (project_path / f"file_{i:02d}.js").write_text("\n".join(lines) + "\n", encoding="utf-8")
        yield project_path


@pytest.fixture
def empty_project():
    """Create an empty temporary directory for testing."""
    with tempfile.TemporaryDirectory() as temp_dir:
        yield temp_dir


# Pytest configuration
def pytest_configure(config):
    """Configure pytest with custom markers."""
    config.addinivalue_line(
        "markers", "integration: marks tests as integration tests"
    )
    config.addinivalue_line(
        "markers", "unit: marks tests as unit tests"
    )
    config.addinivalue_line(
        "markers", "slow: marks tests as slow running"
    )


def pytest_collection_modifyitems(config, items):
    """Automatically mark tests based on their location/name."""
    for item in items:
        # Engine-level modules are unit tests
        if any(name in item.nodeid for name in ("test_lexer", "test_strategies", "test_normalizer", "test_result_filter")):
            item.add_marker(pytest.mark.unit)

        # Tool-level and multi-file tests touch the filesystem
        if any(name in item.nodeid for name in ("test_search_tools", "test_collector", "test_session")):
            item.add_marker(pytest.mark.integration)
