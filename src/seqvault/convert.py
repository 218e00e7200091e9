"""Extraction and conversion passes over Logseq pages."""

import logging
import shutil
from collections.abc import Iterable
from dataclasses import dataclass, field
from pathlib import Path

from .adapters.fs_context import AssetCopy, FsContext
from .core.errors import ConversionError
from .core.model import Page
from .core.transform import transform_page
from .runtime import Runtime

logger = logging.getLogger(__name__)


@dataclass
class ConversionResult:
    """Rendered note for one page plus the asset copies it needs."""

    src: Path
    page: Page
    out_file: Path
    text: str
    copies: list[AssetCopy] = field(default_factory=list)


def read_page(path: Path) -> str:
    try:
        return path.read_text(encoding="utf-8")
    except OSError as e:
        raise ConversionError("read page", path, str(e)) from e


def list_pages(pages_dir: Path) -> list[Path]:
    """Markdown pages directly inside ``pages_dir``, sorted by name."""
    if not pages_dir.is_dir():
        raise ConversionError("read directory", pages_dir, "not a directory")
    return sorted(p for p in pages_dir.glob("*.md") if p.is_file())


def extract_ids(pages_dirs: Iterable[Path], rt: Runtime) -> int:
    """
    Parse every page to register its block ids, then persist the registry.

    Returns the number of pages read.
    """
    ctx = FsContext(rt.registry)
    count = 0
    for pages_dir in pages_dirs:
        for path in list_pages(pages_dir):
            logger.info("Extracting ids from '%s'", path)
            ctx.page_dir = path.parent
            rt.parser.parse_page(path, read_page(path), ctx)
            count += 1

    rt.store.save(rt.registry)
    return count


def convert_page(path: Path, rt: Runtime, out_vault: Path | None = None) -> ConversionResult:
    """Parse, transform and render one page; nothing is written."""
    ctx = FsContext(
        rt.registry,
        page_dir=path.parent,
        out_vault=out_vault or rt.config.vault.root,
        strip_components=rt.config.assets.strip_components,
    )
    page = rt.parser.parse_page(path, read_page(path), ctx)
    transform_page(page, ctx)

    out_file = ctx.out_file
    if out_file is None:
        raise ConversionError("name the output note for", path, "page has no title")

    return ConversionResult(
        src=path,
        page=page,
        out_file=out_file,
        text=rt.codec.encode_page(page),
        copies=list(ctx.copies),
    )


def write_result(result: ConversionResult) -> None:
    """Write the rendered note, then copy its assets next to it."""
    out_dir = result.out_file.parent
    try:
        out_dir.mkdir(parents=True, exist_ok=True)
        result.out_file.write_text(result.text, encoding="utf-8")
    except OSError as e:
        raise ConversionError("write note", result.out_file, str(e)) from e
    logger.info("Wrote '%s'", result.out_file)

    for copy in result.copies:
        dest = out_dir / copy.dest
        try:
            dest.parent.mkdir(parents=True, exist_ok=True)
            shutil.copyfile(copy.src, dest)
        except OSError as e:
            raise ConversionError("copy asset", f"{copy.src} -> {dest}", str(e)) from e
        logger.info("Copied '%s' -> '%s'", copy.src, dest)
