"""Conversion context backed by the filesystem and an in-memory registry."""

import logging
from dataclasses import dataclass
from pathlib import Path, PurePosixPath
from urllib.parse import unquote

from ..core.errors import AssetNotFoundError
from ..core.model import Identifier, Ref
from ..core.ports import ConversionContext
from ..core.registry import Registry

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AssetCopy:
    """A scheduled copy; ``dest`` is relative to the output note's directory."""

    src: Path
    dest: Path


class FsContext(ConversionContext):
    def __init__(
        self,
        registry: Registry,
        page_dir: Path = Path("."),
        out_vault: Path | None = None,
        strip_components: int = 1,
    ):
        self.registry = registry
        self.page_dir = page_dir
        self.out_vault = out_vault
        self.strip_components = strip_components
        self.copies: list[AssetCopy] = []
        self._title = ""

    @property
    def out_file(self) -> Path | None:
        """Where the current page's note goes; None until a title is known."""
        if self.out_vault is None or not self._title:
            return None
        return self.out_vault / f"{self._title}.md"

    def set_page_title(self, title: str) -> None:
        self._title = title.strip()

    def current_title(self) -> str:
        return self._title

    def copy_asset(self, relative_path: str) -> str:
        src = (self.page_dir / unquote(relative_path)).resolve()
        if not src.is_file():
            raise AssetNotFoundError(src, relative_path)

        # "../assets/a.png" -> "assets/a.png"
        posix = relative_path.replace("\\", "/")
        parts = PurePosixPath(posix).parts
        if posix.startswith("./"):
            parts = (".",) + parts
        dest = PurePosixPath(*(parts[self.strip_components :] or parts[-1:]))

        self.copies.append(AssetCopy(src=src, dest=Path(unquote(dest.as_posix()))))
        logger.debug("Scheduled copy of '%s' as '%s'", src, dest)
        return dest.as_posix()

    def register_id(self, id: Identifier) -> None:
        # Blocks on untitled pages cannot be linked to
        if not self._title:
            return
        self.registry[id.source_id] = Ref(title=self._title, anchor=id.target_anchor)

    def query_id(self, source_id: str) -> Ref | None:
        return self.registry.query(source_id)
