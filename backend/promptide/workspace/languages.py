"""Extension to language tag table."""

from typing import Optional

DEFAULT_LANGUAGE = "text"

EXTENSION_LANGUAGES = {
    "js": "javascript",
    "jsx": "javascript",
    "mjs": "javascript",
    "cjs": "javascript",
    "ts": "typescript",
    "tsx": "typescript",
    "html": "html",
    "htm": "html",
    "css": "css",
    "json": "json",
    "md": "markdown",
    "py": "python",
}

KNOWN_LANGUAGES = frozenset(EXTENSION_LANGUAGES.values())

# Code fence info strings that name a language by alias
FENCE_ALIASES = {
    "js": "javascript",
    "jsx": "javascript",
    "node": "javascript",
    "ts": "typescript",
    "tsx": "typescript",
    "py": "python",
    "python3": "python",
    "md": "markdown",
    "htm": "html",
    "xml": "html",
    "plaintext": "text",
    "txt": "text",
}


def extension_of(path: str) -> str:
    name = path.rsplit("/", 1)[-1]
    if "." not in name.lstrip("."):
        return ""
    return name.rsplit(".", 1)[-1].lower()


def language_for_path(path: str, hint: Optional[str] = None) -> str:
    """
    Language tag for a file. The extension wins; the hint is only used for
    unknown extensions and only when it is itself a known tag.
    """
    language = EXTENSION_LANGUAGES.get(extension_of(path))
    if language:
        return language
    normalized_hint = normalize_language(hint)
    if normalized_hint in KNOWN_LANGUAGES:
        return normalized_hint
    return DEFAULT_LANGUAGE


def normalize_language(tag: Optional[str]) -> str:
    if not tag:
        return DEFAULT_LANGUAGE
    tag = tag.strip().lower()
    return FENCE_ALIASES.get(tag, tag)
