"""Runtime wiring helper for CLI applications."""

from dataclasses import dataclass
from pathlib import Path

from .adapters.json_registry import JsonRegistryStore
from .adapters.outline_parser import OutlineParser
from .adapters.yaml_codec import ObsidianNoteCodec, YamlFrontmatter
from .config import SeqvaultConfig, load_config
from .core.registry import Registry


@dataclass
class Runtime:
    """Container for all wired components."""
    store: JsonRegistryStore
    registry: Registry
    parser: OutlineParser
    codec: ObsidianNoteCodec
    config: SeqvaultConfig


def build_runtime(
    vault_path: Path | None = None,
    registry_path: Path | None = None,
    config_path: Path | None = None,
) -> Runtime:
    """Build and wire all components; the registry is loaded here."""
    config = load_config(config_path=config_path, vault_path=vault_path)

    # CLI args win over config values
    if vault_path is not None:
        config.vault.root = vault_path
    if registry_path is not None:
        config.registry.path = registry_path

    store = JsonRegistryStore(config.registry.path)
    fm = YamlFrontmatter()

    return Runtime(
        store=store,
        registry=store.load(),
        parser=OutlineParser(hash_bytes=config.anchors.hash_bytes, fm=fm),
        codec=ObsidianNoteCodec(fm),
        config=config,
    )
