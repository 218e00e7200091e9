from __future__ import annotations
from dataclasses import dataclass, field

SourceId = str


@dataclass(frozen=True)
class Identifier:
    source_id: SourceId  # Logseq block uuid
    target_anchor: str  # "#Heading text" or "^hex"


@dataclass(frozen=True)
class Ref:
    title: str  # owning Obsidian note
    anchor: str  # same form as Identifier.target_anchor

    def link_target(self, current_title: str) -> str:
        """Wiki-link target, shortened to the anchor inside the owning note."""
        anchor = self.anchor if self.anchor.startswith("#") else f"#{self.anchor}"
        if self.title == current_title:
            return anchor
        return f"{self.title}{anchor}"


@dataclass
class Block:
    text: str
    id: Identifier | None = None
    header: str | None = None
    children: list[Block] = field(default_factory=list)
    is_list_item: bool = False
    self_border: bool = False
    raw_list_item: bool = False  # source line carried a "- " marker


@dataclass
class Page:
    title: str
    aliases: list[str] = field(default_factory=list)
    blocks: list[Block] = field(default_factory=list)
