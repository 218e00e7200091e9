"""Utility functions for seqvault."""

import hashlib
import re
from pathlib import Path
from urllib.parse import unquote

# Anything outside ASCII word characters, '-' and Latin-1 accented letters
_ANCHOR_JUNK_RE = re.compile(r"[^A-Za-z0-9_\-À-ÖØ-öø-ÿ]+")


def leading_width(line: str) -> int:
    """Number of leading whitespace characters in ``line``."""
    return len(line) - len(line.lstrip())


def trim_start_up_to(n: int, s: str) -> str:
    """
    Strip at most ``n`` leading whitespace characters from ``s``.

    Never trims into content.

    Examples:
        >>> trim_start_up_to(2, "   a")
        ' a'
        >>> trim_start_up_to(3, "  a")
        'a'
    """
    return s[min(n, leading_width(s)):]


def sanitize_anchor(text: str) -> str:
    """
    Turn heading text into an Obsidian heading anchor.

    Every run of characters Obsidian does not keep in a heading link
    collapses into a single space; the result is trimmed.

    Examples:
        >>> sanitize_anchor("Hello, World! 2024")
        'Hello World 2024'
        >>> sanitize_anchor("Größe  (cm)")
        'Größe cm'
    """
    return _ANCHOR_JUNK_RE.sub(" ", text).strip()


def content_hash(text: str, nbytes: int = 6) -> str:
    """Stable hex digest of ``text``, ``nbytes`` bytes long."""
    return hashlib.sha256(text.encode("utf-8")).hexdigest()[: nbytes * 2]


def title_from_path(path: Path) -> str:
    """
    Derive a page title from a Logseq page filename.

    Logseq stores namespaced pages as ``a___b.md`` (newer graphs) or
    ``a%2Fb.md`` (older graphs); both become ``a/b``.
    """
    return unquote(path.stem.replace("___", "/")).strip()
