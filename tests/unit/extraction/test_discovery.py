"""Tests for source file discovery."""

from __future__ import annotations

from pathlib import Path

import pytest

from jsmsg_export.extraction.discovery import find_js_files, normalize_pattern


class TestNormalizePattern:
    """Test the normalize_pattern function."""

    def test_embedded_double_star(self) -> None:
        """Test that **.js expands to **/*.js."""
        assert normalize_pattern("../js/classes/**.js") == "../js/classes/**/*.js"

    def test_plain_double_star_unchanged(self) -> None:
        """Test that a whole ** component is left alone."""
        assert normalize_pattern("js/livechat/**") == "js/livechat/**"

    def test_backslashes(self) -> None:
        """Test that Windows separators are normalized."""
        assert normalize_pattern("js\\app.js") == "js/app.js"


class TestFindJsFiles:
    """Test the find_js_files function."""

    def test_recursive_inclusion(self, js_project: Path) -> None:
        """Test that **.js finds files in nested directories."""
        files = find_js_files(["js/classes/**.js"], js_project)

        names = [f.name for f in files]
        assert sorted(names) == ["app.js", "chat.js"]

    def test_negated_exclusion(self, js_project: Path) -> None:
        """Test that a ! pattern removes previously included files."""
        files = find_js_files(["js/classes/**.js", "!js/classes/livechat/**"], js_project)

        assert [f.name for f in files] == ["app.js"]

    def test_exclusion_only_affects_earlier_patterns(self, js_project: Path) -> None:
        """Test that patterns are applied in order."""
        files = find_js_files(
            ["!js/classes/livechat/**", "js/classes/**.js"], js_project
        )

        assert sorted(f.name for f in files) == ["app.js", "chat.js"]

    def test_literal_path_and_duplicates(self, js_project: Path) -> None:
        """Test literal paths and that overlapping patterns do not duplicate files."""
        files = find_js_files(["js/classes/app.js", "js/classes/*.js"], js_project)

        assert files == [(js_project / "js/classes/app.js").resolve()]

    def test_absolute_pattern(self, js_project: Path) -> None:
        """Test that absolute patterns ignore the base directory."""
        pattern = str(js_project / "js" / "classes" / "livechat" / "*.js")

        files = find_js_files([pattern], Path("/"))

        assert [f.name for f in files] == ["chat.js"]

    def test_directories_skipped(self, js_project: Path) -> None:
        """Test that only regular files are returned."""
        files = find_js_files(["js/classes/*"], js_project)

        assert all(f.is_file() for f in files)
        assert [f.name for f in files] == ["app.js"]

    def test_no_match(self, tmp_path: Path) -> None:
        """Test that unmatched patterns give an empty list."""
        assert find_js_files(["nothing/**.js"], tmp_path) == []

    def test_default_base_dir(self, js_project: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        """Test resolution against the working directory."""
        monkeypatch.chdir(js_project)

        files = find_js_files(["js/classes/app.js"])

        assert files == [(js_project / "js/classes/app.js").resolve()]
