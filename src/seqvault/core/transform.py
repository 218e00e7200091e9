"""Rewrite a parsed Logseq block tree into Obsidian form, in place."""

import logging
import re
from collections.abc import Callable
from dataclasses import dataclass

from .model import Block, Page
from .patterns import (
    BLOCK_REF_RE,
    EMBED_BLOCK_RE,
    EMBED_PAGE_RE,
    FENCE_RE,
    FILE_LINK_RE,
    IMAGE_RE,
    LEVEL2_HEADING_RE,
    LINKED_ID_RE,
    MATH_BLOCK_RE,
    REMOTE_PREFIXES,
    SOLE_IMAGE_RE,
)
from .ports import ConversionContext

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SiblingSummary:
    """What a block may know about its previous, already transformed sibling."""

    is_list_item: bool


def transform_page(page: Page, ctx: ConversionContext) -> None:
    transform_blocks(page.blocks, None, ctx)


def transform_blocks(
    blocks: list[Block], parent_is_list: bool | None, ctx: ConversionContext
) -> None:
    """Transform ``blocks`` left to right; each sees its predecessor's final state."""
    prev: SiblingSummary | None = None
    for i in range(len(blocks)):
        transform_block(blocks[i], parent_is_list, prev, ctx)
        prev = SiblingSummary(is_list_item=blocks[i].is_list_item)


def transform_block(
    block: Block,
    parent_is_list: bool | None,
    prev: SiblingSummary | None,
    ctx: ConversionContext,
) -> None:
    """
    Apply the rewrite rules to one block after all of its children.

    ``parent_is_list`` is None for top-level blocks. Rule order matters:
    link rules see text already rewritten by the earlier ones.
    """
    transform_blocks(block.children, block.is_list_item, ctx)

    stripped = block.text.strip()

    # Display math never stays a list entry outside a list parent
    if block.is_list_item and not parent_is_list and MATH_BLOCK_RE.match(stripped):
        block.is_list_item = False

    # "- ## Heading" at top level is just "## Heading"
    if (
        parent_is_list is None
        and block.raw_list_item
        and LEVEL2_HEADING_RE.match(stripped)
    ):
        block.is_list_item = False
        if block.text.startswith("- "):
            block.text = block.text[2:]

    if (
        block.is_list_item
        and not parent_is_list
        and not (prev and prev.is_list_item)
        and SOLE_IMAGE_RE.match(stripped)
    ):
        block.is_list_item = False

    block.text = outside_fences(block.text, lambda text: rewrite_links(text, ctx))


def rewrite_links(text: str, ctx: ConversionContext) -> str:
    text = rewrite_assets(text, ctx)
    text = FILE_LINK_RE.sub(r"[[\g<url>|\g<title>]]", text)
    text = rewrite_embeds(text, ctx)
    text = rewrite_linked_ids(text, ctx)
    return rewrite_block_refs(text, ctx)


def outside_fences(text: str, rewrite: Callable[[str], str]) -> str:
    """Apply ``rewrite`` to each run of lines outside code fences."""
    out: list[str] = []
    run: list[str] = []
    in_fence = False
    for line in text.split("\n"):
        if in_fence or FENCE_RE.match(line):
            if run:
                out.append(rewrite("\n".join(run)))
                run = []
            out.append(line)
            if FENCE_RE.match(line):
                in_fence = not in_fence
            continue
        run.append(line)
    if run:
        out.append(rewrite("\n".join(run)))
    return "\n".join(out)


def rewrite_assets(text: str, ctx: ConversionContext) -> str:
    # Back to front so earlier offsets stay valid
    for m in reversed(list(IMAGE_RE.finditer(text))):
        path = m.group("path").strip()
        if path.startswith(REMOTE_PREFIXES):
            continue
        new_path = ctx.copy_asset(path)
        text = text[: m.start()] + f"![{m.group('alt')}]({new_path})" + text[m.end() :]
    return text


def _resolve(source_id: str, ctx: ConversionContext) -> str | None:
    ref = ctx.query_id(source_id)
    if ref is None:
        logger.debug("Unresolved block reference ((%s)) in '%s'", source_id, ctx.current_title())
        return None
    return ref.link_target(ctx.current_title())


def rewrite_embeds(text: str, ctx: ConversionContext) -> str:
    def block_embed(m: re.Match[str]) -> str:
        target = _resolve(m.group("id"), ctx)
        if target is None:
            return m.group(0)
        return f"![[{target}]]"

    text = EMBED_BLOCK_RE.sub(block_embed, text)
    return EMBED_PAGE_RE.sub(lambda m: f"![[{m.group('page').strip()}]]", text)


def rewrite_linked_ids(text: str, ctx: ConversionContext) -> str:
    def linked(m: re.Match[str]) -> str:
        target = _resolve(m.group("id"), ctx)
        if target is None:
            return m.group(0)
        return f"[[{target}|{m.group('title')}]]"

    return LINKED_ID_RE.sub(linked, text)


def rewrite_block_refs(text: str, ctx: ConversionContext) -> str:
    def standalone(m: re.Match[str]) -> str:
        target = _resolve(m.group("id"), ctx)
        if target is None:
            return m.group(0)
        return f"[[{target}]]"

    return BLOCK_REF_RE.sub(standalone, text)
