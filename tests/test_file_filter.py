"""File discovery tests - exclusion rules and path predicates."""

from pathlib import Path

import pytest

from comment_search_mcp.utils import FileFilter, FileWalker, create_file_walker, should_include
from core.errors import FileAccessError, InvalidPatternError
from core.models import SearchOptions


class TestShouldInclude:

    def test_no_patterns_includes_everything(self):
        assert should_include("src/a.py", SearchOptions())

    def test_include_pattern(self):
        options = SearchOptions(include_pattern=r"^src/")
        assert should_include("src/a.py", options)
        assert not should_include("tests/a.py", options)

    def test_exclude_pattern_wins(self):
        options = SearchOptions(include_pattern=r"\.py$", exclude_pattern=r"_test\.py$")
        assert should_include("a.py", options)
        assert not should_include("a_test.py", options)

    def test_windows_separators(self):
        assert should_include("src\\a.py", SearchOptions(include_pattern=r"^src/a"))

    def test_invalid_pattern(self):
        with pytest.raises(InvalidPatternError):
            should_include("a.py", SearchOptions(exclude_pattern="["))


class TestFileFilter:

    def test_excluded_directories(self):
        file_filter = FileFilter()
        assert file_filter.should_exclude_directory("node_modules")
        assert file_filter.should_exclude_directory(".git")
        assert not file_filter.should_exclude_directory("src")

    def test_binary_and_temporary_files(self):
        file_filter = FileFilter()
        assert file_filter.should_exclude_file(Path("logo.PNG"))
        assert file_filter.should_exclude_file(Path("main.c~"))
        assert not file_filter.should_exclude_file(Path("main.c"))

    def test_additional_excludes(self):
        file_filter = FileFilter(["*.min.js", "generated"])
        assert file_filter.should_exclude_file(Path("app.min.js"))
        assert file_filter.should_exclude_directory("generated")
        assert "*.min.js" in file_filter.get_exclude_summary()["exclude_patterns"]


class TestFileWalker:

    def test_candidates_in_stable_order(self, sample_project):
        handles = FileWalker().find_candidate_files(str(sample_project))
        assert [h.file_id for h in handles] == ["app.js", "main.cpp", "lib/util.ts"]
        assert all(Path(h.path).is_file() for h in handles)

    def test_file_pattern_by_name(self, sample_project):
        handles = FileWalker().find_candidate_files(str(sample_project), SearchOptions(file_pattern="*.cpp"))
        assert [h.file_id for h in handles] == ["main.cpp"]

    def test_file_pattern_with_directory(self, sample_project):
        handles = FileWalker().find_candidate_files(str(sample_project), SearchOptions(file_pattern="lib/*"))
        assert [h.file_id for h in handles] == ["lib/util.ts"]

    def test_custom_excludes(self, sample_project):
        walker = create_file_walker(["lib"])
        assert walker.count_files(str(sample_project)) == 2

    def test_missing_directory(self, tmp_path):
        with pytest.raises(FileAccessError):
            FileWalker().find_candidate_files(str(tmp_path / "missing"))

    def test_empty_project(self, empty_project):
        assert FileWalker().find_candidate_files(empty_project) == []
