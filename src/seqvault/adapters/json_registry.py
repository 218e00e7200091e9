"""Registry persistence as a JSON file (``ids.json`` by default)."""

import json
import logging
from pathlib import Path

from ..core.errors import ConversionError
from ..core.model import Ref
from ..core.ports import RegistryStore
from ..core.registry import Registry

logger = logging.getLogger(__name__)

REGISTRY_VERSION = 1


class JsonRegistryStore(RegistryStore):
    def __init__(self, path: Path):
        self.path = path

    def load(self) -> Registry:
        """Load the registry; a missing or corrupt file yields an empty one."""
        if not self.path.exists():
            logger.debug("No registry at '%s', starting empty", self.path)
            return Registry()
        try:
            with self.path.open("r", encoding="utf-8") as f:
                data = json.load(f)
            refs = {
                source_id: Ref(title=entry["title"], anchor=entry["anchor"])
                for source_id, entry in data.get("refs", {}).items()
            }
        except (OSError, ValueError, KeyError, TypeError, AttributeError) as e:
            logger.warning("Ignoring unreadable registry '%s': %s", self.path, e)
            return Registry()
        logger.debug("Loaded %d ids from '%s'", len(refs), self.path)
        return Registry(refs)

    def save(self, registry: Registry) -> None:
        """Overwrite the registry file (atomic via temp file)."""
        data = {
            "version": REGISTRY_VERSION,
            "refs": {
                source_id: {"title": ref.title, "anchor": ref.anchor}
                for source_id, ref in sorted(registry.items())
            },
        }
        tmp_path = self.path.with_suffix(self.path.suffix + ".tmp")
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            with tmp_path.open("w", encoding="utf-8") as f:
                json.dump(data, f, indent=2, ensure_ascii=False)
            tmp_path.replace(self.path)
        except OSError as e:
            raise ConversionError("write registry", self.path, str(e)) from e
        logger.info("Wrote %d ids to '%s'", len(registry), self.path)
