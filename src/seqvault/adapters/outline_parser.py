from pathlib import Path
from typing import Any

from ..core.model import Block, Identifier, Page
from ..core.patterns import (
    FENCE_RE,
    HEADING_RE,
    LIST_MARKER_RE,
    NON_LIST_START_RE,
    PAGE_PROP_RE,
    PROP_RE,
    SELF_BORDER_RE,
    WIKILINK_RE,
)
from ..core.ports import ConversionContext
from ..core.spans import group_spans
from ..core.utils import (
    content_hash,
    leading_width,
    sanitize_anchor,
    title_from_path,
    trim_start_up_to,
)
from .yaml_codec import YamlFrontmatter


def parse_prop(line: str) -> tuple[str, str] | None:
    """Match a ``key:: value`` property line; only known keys count."""
    m = PROP_RE.match(line.strip())
    if not m:
        return None
    return m.group("key"), m.group("value").strip()


def split_aliases(value: str) -> list[str]:
    # "alias:: A, [[B]]" -> ["A", "B"]
    aliases: list[str] = []
    for part in value.split(","):
        part = part.strip()
        m = WIKILINK_RE.fullmatch(part)
        if m:
            part = m.group(1).strip()
        if part and part not in aliases:
            aliases.append(part)
    return aliases


def _meta_aliases(value: Any) -> list[str]:
    if isinstance(value, str):
        return split_aliases(value)
    if isinstance(value, list):
        return [a for v in value for a in split_aliases(str(v))]
    return []


class OutlineParser:
    """Parse Logseq pages into a tree of blocks, registering block ids."""

    def __init__(self, hash_bytes: int = 6, fm: YamlFrontmatter | None = None):
        self.hash_bytes = hash_bytes
        self.fm = fm or YamlFrontmatter()

    def parse_page(self, path: Path, text: str, ctx: ConversionContext) -> Page:
        # Logseq also accepts YAML front matter in place of page properties
        meta, text = self.fm.decode(text)
        lines = text.splitlines()
        first = next(
            (i for i, line in enumerate(lines) if line.startswith("-")), len(lines)
        )

        title = meta.get("title") if isinstance(meta.get("title"), str) else ""
        aliases: list[str] = []
        for key in ("alias", "aliases"):
            aliases.extend(a for a in _meta_aliases(meta.get(key)) if a not in aliases)
        leading: list[str] = []
        for line in lines[:first]:
            prop = parse_prop(line)
            if prop is None:
                # Other page properties (tags::, public::) have no place in the body
                if not PAGE_PROP_RE.match(line.strip()):
                    leading.append(line)
                continue
            key, value = prop
            if key == "title":
                title = value
            elif key == "alias":
                aliases.extend(a for a in split_aliases(value) if a not in aliases)

        if not title:
            title = title_from_path(Path(path))

        # Titles must be known before blocks register their ids
        ctx.set_page_title(title)

        spans = group_spans(leading + lines[first:], "-", discard_empty=True)
        blocks = [self.parse_block(span, ctx) for span in spans]
        return Page(title=title, aliases=aliases, blocks=blocks)

    def parse_block(self, span: str, ctx: ConversionContext) -> Block:
        lines = span.split("\n")

        # Split own body from the children region
        body: list[str] = []
        source_id = None
        boundary = len(lines)
        in_fence = False
        for i, line in enumerate(lines):
            stripped = line.strip()
            unmarked = stripped[2:] if i == 0 and LIST_MARKER_RE.match(stripped) else stripped
            if FENCE_RE.match(unmarked):
                in_fence = not in_fence
                body.append(line)
                continue
            if in_fence:
                body.append(line)
                continue

            prop = parse_prop(line)
            if prop is not None:
                key, value = prop
                if key == "id" and value:
                    source_id = value
                continue

            if i > 0 and stripped.startswith("-"):
                boundary = i
                break
            body.append(line)

        # List marker and continuation indent
        is_list_item = bool(body) and LIST_MARKER_RE.match(body[0]) is not None
        if is_list_item:
            body = [body[0][2:]] + [trim_start_up_to(2, line) for line in body[1:]]
        raw_list_item = is_list_item
        text = "\n".join(body).rstrip()
        if is_list_item and NON_LIST_START_RE.match(text):
            is_list_item = False

        self_border = SELF_BORDER_RE.search(text) is not None
        if self_border:
            text = SELF_BORDER_RE.sub("", text).rstrip()

        header = None
        m = HEADING_RE.match(text.split("\n", 1)[0])
        if m and sanitize_anchor(m.group("text").strip()):
            header = m.group("text").strip()

        identifier = None
        if source_id:
            if header:
                anchor = f"#{sanitize_anchor(header)}"
            else:
                anchor = f"^{content_hash(text, self.hash_bytes)}"
            identifier = Identifier(source_id=source_id, target_anchor=anchor)
            ctx.register_id(identifier)

        children: list[Block] = []
        if boundary < len(lines):
            region = lines[boundary:]
            width = leading_width(region[0])
            delim = region[0].lstrip()[0]
            region = [trim_start_up_to(width, line) for line in region]
            children = [
                self.parse_block(child, ctx)
                for child in group_spans(region, delim, discard_empty=True)
            ]

        return Block(
            text=text,
            id=identifier,
            header=header,
            children=children,
            is_list_item=is_list_item,
            self_border=self_border,
            raw_list_item=raw_list_item,
        )
