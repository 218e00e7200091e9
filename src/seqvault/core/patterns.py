"""Compiled patterns shared by the parser and the transform pipeline."""

import re

# Outline structure
PROP_RE = re.compile(r"^(?P<key>title|alias|id|collapsed)::\s*(?P<value>.*)$")
# Any Logseq page property in the preamble before the first bullet
PAGE_PROP_RE = re.compile(r"^[\w-]+::(?:\s|$)")
LIST_MARKER_RE = re.compile(r"^-(?: |$)")
NON_LIST_START_RE = re.compile(r"^(?:\*\*|#+ )")
FENCE_RE = re.compile(r"^\s*(?:```|~~~)")
HEADING_RE = re.compile(r"^(?:- )?#+ (?P<text>.+)$")
LEVEL2_HEADING_RE = re.compile(r"^(?:- )?## \S")
SELF_BORDER_RE = re.compile(r" ?#\.v-self-border")
WIKILINK_RE = re.compile(r"\[\[([^\]]+)\]\]")

# Whole-block shapes, matched against stripped text
MATH_BLOCK_RE = re.compile(r"^\$\$(?:(?!\$\$).)+\$\$$", re.DOTALL)
SOLE_IMAGE_RE = re.compile(r"^!\[[^\]]*\]\([^)]+\)(?:\{:[^}]*\})?$")

# Inline rewrites, applied in this order
IMAGE_RE = re.compile(
    r"!\[(?P<alt>[^\]]*)\]\((?P<path>[^)]+)\)(?P<opts>\{:[^}]*\})?"
)
FILE_LINK_RE = re.compile(r"(?<!!)\[(?P<title>[^\]]+)\]\(\[\[(?P<url>[^\]]+)\]\]\)")
EMBED_BLOCK_RE = re.compile(r"\{\{embed\s+\(\((?P<id>[A-Za-z0-9_-]+)\)\)\s*\}\}")
EMBED_PAGE_RE = re.compile(r"\{\{embed\s+\[\[(?P<page>[^\]]+)\]\]\s*\}\}")
LINKED_ID_RE = re.compile(r"\[(?P<title>[^\]]*)\]\(\(\((?P<id>[A-Za-z0-9_-]+)\)\)\)")
BLOCK_REF_RE = re.compile(r"\(\((?P<id>[A-Za-z0-9_-]+)\)\)")

REMOTE_PREFIXES = ("http://", "https://", "//", "data:")
