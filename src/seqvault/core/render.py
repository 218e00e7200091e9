"""Serialize a transformed block tree as Obsidian markdown."""

import re

from .model import Block

_BACKTICKS_RE = re.compile(r"`+")
# Lines an inline " ^id" suffix would break
_OWN_LINE_ANCHOR_PREFIXES = ("```", "~~~", "$$")


def indent(text: str, width: int) -> str:
    """Indent every non-blank line of ``text`` by ``width`` spaces."""
    if not width:
        return text
    pad = " " * width
    return "\n".join(pad + line if line.strip() else line for line in text.split("\n"))


def child_indent(parent: Block, child: Block) -> int:
    if parent.is_list_item:
        return 4 if child.is_list_item else 2
    return 0


def _inline_anchor(block: Block) -> str | None:
    if block.id is None or block.header:
        return None
    return block.id.target_anchor


def own_text(block: Block) -> str:
    """The block's own lines, with its list marker and inline anchor."""
    text = block.text
    anchor = _inline_anchor(block)
    if anchor and not block.self_border:
        last_line = text.rsplit("\n", 1)[-1].strip()
        if not text:
            text = anchor
        elif last_line.startswith(_OWN_LINE_ANCHOR_PREFIXES):
            text = f"{text}\n{anchor}"
        else:
            text = f"{text} {anchor}"

    if block.is_list_item:
        first, *rest = text.split("\n")
        lines = [f"- {first}".rstrip()]
        lines += [f"  {line}" if line.strip() else line for line in rest]
        text = "\n".join(lines)
    return text


def wrap_definition(content: str, anchor: str | None) -> str:
    """Fence ``content`` as an Admonition definition block."""
    longest = max((len(run) for run in _BACKTICKS_RE.findall(content)), default=0)
    fence = "`" * max(3, longest + 1)
    out = f"{fence}ad-definition\n{content}\n{fence}\n"
    if anchor:
        out += f"{anchor}\n"
    return out + "\n"


def render_block(block: Block, is_last: bool = False) -> str:
    """
    Render ``block`` and its descendants; every line ends with a newline.

    A blank line separates a block from its children, and the last leaf
    in a child list is followed by one.
    """
    out = own_text(block) + "\n"
    if block.children:
        out += "\n"
        last = len(block.children) - 1
        for i, child in enumerate(block.children):
            out += indent(render_block(child, i == last), child_indent(block, child))
    elif is_last:
        out += "\n"

    if block.self_border:
        out = wrap_definition(out.rstrip(), _inline_anchor(block))
    return out


def render_blocks(blocks: list[Block]) -> str:
    """Render top-level blocks separated by blank lines."""
    last = len(blocks) - 1
    parts = [render_block(b, i == last).rstrip() for i, b in enumerate(blocks)]
    parts = [p for p in parts if p]
    if not parts:
        return ""
    return "\n\n".join(parts) + "\n"
