"""
Unit Tests for path normalization and language detection
"""
import pytest

from promptide.core.exceptions import InvalidPathError
from promptide.workspace.languages import extension_of, language_for_path, normalize_language
from promptide.workspace.paths import is_valid_path, join_path, normalize_path, parent_folders


class TestNormalizePath:
    """Test normalize_path"""

    @pytest.mark.parametrize("raw,expected", [
        ("src/App.tsx", "src/App.tsx"),
        ("/src/App.tsx", "src/App.tsx"),
        ("./src/./App.tsx", "src/App.tsx"),
        ("src//components///Button.tsx", "src/components/Button.tsx"),
        ("src\\utils\\helpers.ts", "src/utils/helpers.ts"),
        ("  index.html  ", "index.html"),
    ])
    def test_normalizes(self, raw, expected):
        """Test separators, leading slashes and '.' segments are cleaned up"""
        assert normalize_path(raw) == expected

    @pytest.mark.parametrize("raw", ["", "   ", "/", "./", "src/../etc/passwd", "..", "C:/Windows/x.txt", "src/", "a\tb.txt"])
    def test_rejects(self, raw):
        """Test empty and malformed paths raise InvalidPathError"""
        with pytest.raises(InvalidPathError) as exc_info:
            normalize_path(raw)

        assert exc_info.value.code == "INVALID_PATH"

    def test_none_is_rejected(self):
        """Test None is treated as an empty path"""
        with pytest.raises(InvalidPathError):
            normalize_path(None)

    def test_is_valid_path(self):
        """Test boolean wrapper"""
        assert is_valid_path("a/b.txt") is True
        assert is_valid_path("../b.txt") is False


class TestPathHelpers:
    """Test parent_folders and join_path"""

    def test_parent_folders(self):
        assert parent_folders("a/b/c.txt") == ["a", "a/b"]

    def test_parent_folders_top_level(self):
        assert parent_folders("index.html") == []

    def test_join_path(self):
        assert join_path("", "src") == "src"
        assert join_path("src", "App.tsx") == "src/App.tsx"


class TestLanguageDetection:
    """Test the extension table and hint fallback"""

    @pytest.mark.parametrize("path,language", [
        ("app.js", "javascript"),
        ("App.jsx", "javascript"),
        ("server.mjs", "javascript"),
        ("config.cjs", "javascript"),
        ("index.ts", "typescript"),
        ("src/App.tsx", "typescript"),
        ("index.html", "html"),
        ("page.htm", "html"),
        ("style.css", "css"),
        ("package.json", "json"),
        ("README.md", "markdown"),
        ("main.py", "python"),
        ("Makefile", "text"),
        ("notes.txt", "text"),
        ("INDEX.HTML", "html"),
    ])
    def test_extension_table(self, path, language):
        assert language_for_path(path) == language

    def test_extension_wins_over_hint(self):
        """Test a known extension ignores the hint"""
        assert language_for_path("index.html", "python") == "html"

    def test_known_hint_used_for_unknown_extension(self):
        assert language_for_path("Dockerfile", "python") == "python"

    def test_unknown_hint_falls_back_to_text(self):
        assert language_for_path("Dockerfile", "dockerfile") == "text"

    def test_alias_hint_is_normalized(self):
        assert language_for_path("script", "js") == "javascript"

    def test_extension_of(self):
        assert extension_of("src/App.TSX") == "tsx"
        assert extension_of(".gitignore") == ""
        assert extension_of("Makefile") == ""

    def test_normalize_language(self):
        assert normalize_language(None) == "text"
        assert normalize_language(" TS ") == "typescript"
        assert normalize_language("rust") == "rust"
