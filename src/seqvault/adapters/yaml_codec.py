import re, io
import yaml
from typing import Any
from ..core.model import Page
from ..core.render import render_blocks

_FM = re.compile(r"^\s*---\s*\n(.*?)\n---\s*\n?", re.DOTALL)


class YamlFrontmatter:
    def decode(self, text: str) -> tuple[dict[str, Any], str]:
        m = _FM.match(text)
        if not m:
            return {}, text
        try:
            fm = yaml.safe_load(io.StringIO(m.group(1))) or {}
        except yaml.YAMLError:
            # Not front matter after all; leave the text alone
            return {}, text
        if not isinstance(fm, dict):
            return {}, text
        body = text[m.end() :]
        return (fm, body)

    def encode(self, meta: dict[str, Any]) -> str:
        if not meta:
            return ""
        buf = io.StringIO()
        yaml.safe_dump(meta, buf, sort_keys=False, allow_unicode=True)
        return f"---\n{buf.getvalue()}---\n"


class ObsidianNoteCodec:
    """Compose front matter with the rendered block tree."""

    def __init__(self, fm: YamlFrontmatter):
        self.fm = fm

    def encode_page(self, page: Page) -> str:
        meta: dict[str, Any] = {}
        if page.aliases:
            meta["aliases"] = ", ".join(page.aliases)
        head = self.fm.encode(meta)
        body = render_blocks(page.blocks)
        if head and body:
            return f"{head}\n{body}"
        return head + body
