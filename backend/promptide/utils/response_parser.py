"""
Markdown Code Block Parser
Turns a classifier's markdown answer into a GenerationResult

Supported filename hints (first match wins):
- fence info string:   ```tsx:src/App.tsx   ```tsx title="src/App.tsx"   ```src/App.tsx
- line before fence:   **src/App.tsx**   `src/App.tsx`   File: src/App.tsx   ### src/App.tsx
- first line of block: // src/App.tsx   # main.py   <!-- index.html -->   /* style.css */

Blocks without any hint get a name derived from their language.
"""

import re
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Set, Tuple

from promptide.core.exceptions import ParseError
from promptide.core.logging_config import logger
from promptide.workspace.languages import DEFAULT_LANGUAGE, EXTENSION_LANGUAGES, extension_of, language_for_path, normalize_language
from promptide.workspace.models import ConversationOnly, GeneratedFile, GeneratedFiles, GenerationResult
from promptide.workspace.paths import is_valid_path, normalize_path

# Default file names for blocks that carry no filename hint
DEFAULT_FILENAMES: Dict[str, str] = {
    "html": "index.html",
    "css": "style.css",
    "javascript": "script.js",
    "typescript": "index.ts",
    "json": "package.json",
    "python": "main.py",
    "markdown": "README.md",
}
# Fence tags that deserve a more specific default than their language
DEFAULT_FILENAMES_BY_TAG: Dict[str, str] = {
    "tsx": "App.tsx",
    "jsx": "App.jsx",
}
# Extensions a prose line may name without a folder part
HINT_EXTENSIONS: Set[str] = set(EXTENSION_LANGUAGES) | {
    "txt", "yml", "yaml", "toml", "xml", "svg", "sh", "env", "ini", "cfg", "lock",
}

_FENCE_OPEN_RE = re.compile(r"^ {0,3}(?P<fence>`{3,}|~{3,})\s*(?P<info>[^`]*?)\s*$")
_PATH_RE = re.compile(r"^[\w@+\-./]*[\w\-]\.[A-Za-z0-9]+$|^[\w@+\-./]+/[\w@+\-.]+$")
_TITLE_RE = re.compile(r"""(?:title|file|filename|path)\s*=\s*["']?([^"'\s]+)["']?""", re.IGNORECASE)
_LABEL_RE = re.compile(r"^(?:file(?:name)?|path)\s*:\s*(.+)$", re.IGNORECASE)
_COMMENT_PATTERNS = (
    re.compile(r"^\s*(?://|#)\s*(?:file(?:name)?\s*:\s*)?(?P<path>\S+)\s*$", re.IGNORECASE),
    re.compile(r"^\s*<!--\s*(?:file(?:name)?\s*:\s*)?(?P<path>\S+)\s*-->\s*$", re.IGNORECASE),
    re.compile(r"^\s*/\*\s*(?:file(?:name)?\s*:\s*)?(?P<path>\S+)\s*\*/\s*$", re.IGNORECASE),
)


@dataclass
class CodeBlock:
    """Raw fenced block as found in the markdown"""
    info: str
    lines: List[str]
    preceding_line: str = ""
    terminated: bool = True
    language: str = DEFAULT_LANGUAGE
    tag: str = ""
    path_hint: Optional[str] = None
    content: str = field(default="", init=False)


def looks_like_path(text: str) -> bool:
    text = text.strip()
    return bool(text) and " " not in text and bool(_PATH_RE.match(text)) and is_valid_path(text)


def looks_like_named_file(text: str) -> bool:
    """Stricter check for names taken from prose: a folder part or a known extension"""
    text = text.strip()
    return looks_like_path(text) and ("/" in text or extension_of(text) in HINT_EXTENSIONS)


def _strip_decorations(line: str) -> str:
    line = line.strip()
    line = line.lstrip("#>").strip()
    line = line.strip("*_").strip()
    label = _LABEL_RE.match(line)
    if label:
        line = label.group(1).strip()
    line = line.strip("*_`'\"").strip()
    return line.rstrip(":").strip()


class CodeBlockParser:
    """Parse fenced code blocks out of markdown text"""

    @staticmethod
    def find_blocks(markdown: str) -> List[CodeBlock]:
        """
        Line based fence scanner. A block closes on a fence of the same
        character that is at least as long as the opener. An opener with no
        closer yields an unterminated block.
        """
        blocks: List[CodeBlock] = []
        lines = markdown.splitlines()
        previous_text = ""
        i = 0

        while i < len(lines):
            match = _FENCE_OPEN_RE.match(lines[i])
            if not match:
                if lines[i].strip():
                    previous_text = lines[i]
                i += 1
                continue

            fence = match.group("fence")
            info = match.group("info") or ""
            body: List[str] = []
            i += 1
            terminated = False
            while i < len(lines):
                stripped = lines[i].strip()
                if stripped and stripped[0] == fence[0] and set(stripped) == {fence[0]} and len(stripped) >= len(fence):
                    terminated = True
                    i += 1
                    break
                body.append(lines[i])
                i += 1

            blocks.append(CodeBlock(
                info=info,
                lines=body,
                preceding_line=previous_text,
                terminated=terminated,
            ))
            previous_text = ""

        return blocks

    @staticmethod
    def parse_info(info: str) -> Tuple[str, Optional[str]]:
        """
        Split a fence info string into (tag, path hint).

        'tsx:src/App.tsx' -> ('tsx', 'src/App.tsx')
        'html title="index.html"' -> ('html', 'index.html')
        'src/App.tsx' -> ('', 'src/App.tsx')
        """
        info = info.strip()
        if not info:
            return "", None

        title = _TITLE_RE.search(info)
        tokens = info.split()
        first = tokens[0]

        if title and looks_like_path(title.group(1)):
            tag = first if "=" not in first else ""
            return tag, title.group(1)

        if ":" in first:
            tag, _, candidate = first.partition(":")
            if looks_like_path(candidate):
                return tag, candidate

        if looks_like_path(first) and ("/" in first or "." in first):
            return "", first

        for token in tokens[1:]:
            if looks_like_path(token):
                return first, token

        return first, None

    @staticmethod
    def hint_from_first_line(lines: List[str]) -> Optional[str]:
        if not lines:
            return None
        first = lines[0]
        for pattern in _COMMENT_PATTERNS:
            match = pattern.match(first)
            if match and looks_like_path(match.group("path")):
                return match.group("path")
        return None

    @staticmethod
    def hint_from_preceding_line(line: str) -> Optional[str]:
        if not line:
            return None
        candidate = _strip_decorations(line)
        if looks_like_named_file(candidate):
            return candidate
        # "Create `src/App.tsx`:" style sentences
        inline = re.findall(r"`([^`\s]+)`", line)
        if len(inline) == 1 and line.rstrip().endswith(":") and looks_like_named_file(inline[0]):
            return inline[0]
        return None

    @classmethod
    def resolve(cls, block: CodeBlock) -> CodeBlock:
        """Fill tag, path hint, language and content of a raw block"""
        tag, hint = cls.parse_info(block.info)
        lines = list(block.lines)

        if hint is None:
            hint = cls.hint_from_preceding_line(block.preceding_line)
        if hint is None:
            first_line_hint = cls.hint_from_first_line(lines)
            if first_line_hint is not None:
                hint = first_line_hint
                lines = lines[1:]

        block.tag = tag.lower()
        block.path_hint = hint
        if hint is not None:
            block.language = language_for_path(hint, normalize_language(tag))
        else:
            block.language = normalize_language(tag) if tag else DEFAULT_LANGUAGE
        block.content = "\n".join(lines)
        return block

    @staticmethod
    def default_filename(block: CodeBlock, taken: Set[str], position: int) -> str:
        """
        Name for a block without a hint, never one of the paths in `taken`.
        The chosen name is added to `taken`.
        """
        base = DEFAULT_FILENAMES_BY_TAG.get(block.tag) or DEFAULT_FILENAMES.get(block.language)
        if base is None:
            base = f"file-{position}.txt"

        stem, dot, ext = base.rpartition(".")
        candidate = base
        count = 1
        while candidate in taken:
            count += 1
            candidate = f"{stem}-{count}.{ext}" if dot else f"{base}-{count}"
        taken.add(candidate)
        return candidate


def strip_code_blocks(markdown: str) -> str:
    """Prose part of the answer with every fenced block removed"""
    kept: List[str] = []
    lines = markdown.splitlines()
    i = 0
    while i < len(lines):
        match = _FENCE_OPEN_RE.match(lines[i])
        if not match:
            kept.append(lines[i])
            i += 1
            continue
        fence = match.group("fence")
        i += 1
        while i < len(lines):
            stripped = lines[i].strip()
            i += 1
            if stripped and set(stripped) == {fence[0]} and len(stripped) >= len(fence):
                break
    text = "\n".join(kept)
    return re.sub(r"\n{3,}", "\n\n", text).strip()


def parse_generation(markdown: str) -> GenerationResult:
    """
    Parse a classifier answer.

    - no fences at all -> ConversationOnly(markdown)
    - usable blocks -> GeneratedFiles
    - fences present but every block empty or unterminated -> ParseError
    """
    markdown = markdown or ""
    raw_blocks = CodeBlockParser.find_blocks(markdown)
    if not raw_blocks:
        return ConversationOnly(text=markdown.strip())

    usable: List[CodeBlock] = []
    for block in raw_blocks:
        if not block.terminated:
            logger.warning("[ResponseParser] Skipping unterminated code block")
            continue
        CodeBlockParser.resolve(block)
        if not block.content.strip():
            logger.debug("[ResponseParser] Skipping empty code block")
            continue
        usable.append(block)

    # Hinted names are claimed first so a defaulted block never lands on one
    taken = {normalize_path(b.path_hint) for b in usable if b.path_hint is not None}
    files: List[GeneratedFile] = []
    for position, block in enumerate(usable, start=1):
        if block.path_hint is not None:
            path = normalize_path(block.path_hint)
        else:
            path = CodeBlockParser.default_filename(block, taken, position)
        files.append(GeneratedFile(path=path, content=block.content, language=block.language))

    if not files:
        raise ParseError(blocks_seen=len(raw_blocks))

    logger.debug(f"[ResponseParser] Parsed {len(files)} files from {len(raw_blocks)} blocks")
    return GeneratedFiles(files=tuple(files), text=strip_code_blocks(markdown))
