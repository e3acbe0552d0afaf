"""
Markdown to plain-text normalization for card previews.

Only lightweight markup is handled. Anything that does not match a rule
passes through untouched; nothing here can fail.
"""
import re

FRONTMATTER_RE = re.compile(r"\A---\n.*?\n---\n?", re.DOTALL)

# Applied in order; images must run before links.
_MARKUP_RULES: list[tuple[re.Pattern, object]] = [
    (re.compile(r"^#{1,6}\s+", re.MULTILINE), ""),
    (re.compile(r"\*\*([^*]+)\*\*"), r"\1"),
    (re.compile(r"\*([^*]+)\*"), r"\1"),
    (re.compile(r"__([^_]+)__"), r"\1"),
    (re.compile(r"_([^_]+)_"), r"\1"),
    (re.compile(r"~~([^~]+)~~"), r"\1"),
    (re.compile(r"`([^`]+)`"), r"\1"),
    (re.compile(r"!\[([^\]]*)\]\([^)]+\)"), ""),
    (re.compile(r"\[([^\]]+)\]\([^)]+\)"), r"\1"),
    (re.compile(r"\[\[([^\]|]+)\|?([^\]]*)\]\]"), lambda m: m.group(2) or m.group(1)),
    (re.compile(r"^>\s?", re.MULTILINE), ""),
    (re.compile(r"^[-*+]\s+", re.MULTILINE), ""),
    (re.compile(r"^\d+\.\s+", re.MULTILINE), ""),
    (re.compile(r"^(\s*[-*_]){3,}\s*$", re.MULTILINE), ""),
    (re.compile(r"\n{3,}"), "\n\n"),
]


def strip_frontmatter(text: str) -> str:
    """Remove a leading ``---`` delimited block, if any."""
    return FRONTMATTER_RE.sub("", text, count=1)


def strip_markup(text: str) -> str:
    """
    Reduce lightweight markdown to plain text.

    Headings, emphasis, inline code, links, wikilinks, quotes and list
    markers keep their text; images and horizontal rules disappear; runs
    of blank lines collapse to one.
    """
    for pattern, replacement in _MARKUP_RULES:
        text = pattern.sub(replacement, text)
    return text


def normalize(raw: str, strip_front: bool = True) -> str:
    """
    Full normalization: optional frontmatter removal, then markup stripping.

    Args:
        raw: File content
        strip_front: Whether to drop a leading frontmatter block

    Returns:
        Plain text
    """
    if strip_front:
        raw = strip_frontmatter(raw)
    return strip_markup(raw)
