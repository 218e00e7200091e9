"""Configuration loader for seqvault.toml."""

import tomllib
from dataclasses import dataclass
from pathlib import Path
from typing import Any

CONFIG_NAME = "seqvault.toml"


@dataclass
class RegistryConfig:
    """Where the block id registry is persisted."""
    path: Path = Path("ids.json")


@dataclass
class VaultConfig:
    """Output Obsidian vault."""
    root: Path = Path("./vault")


@dataclass
class AnchorConfig:
    """Block anchor generation."""
    hash_bytes: int = 6


@dataclass
class AssetConfig:
    """Asset copy configuration."""
    strip_components: int = 1


@dataclass
class LogConfig:
    level: str = "INFO"


@dataclass
class SeqvaultConfig:
    """Complete seqvault configuration."""
    registry: RegistryConfig
    vault: VaultConfig
    anchors: AnchorConfig
    assets: AssetConfig
    log: LogConfig


def load_config(config_path: Path | None = None, vault_path: Path | None = None) -> SeqvaultConfig:
    """
    Load configuration from seqvault.toml.

    Search order:
    1. config_path (if provided)
    2. cwd/seqvault.toml
    3. vault_path/seqvault.toml

    Args:
        config_path: Explicit path to config file
        vault_path: Output vault path for fallback search

    Returns:
        SeqvaultConfig with resolved settings
    """
    toml_data: dict[str, Any] = {}

    search_paths = []
    if config_path:
        search_paths.append(config_path)
    search_paths.append(Path.cwd() / CONFIG_NAME)
    if vault_path:
        search_paths.append(vault_path / CONFIG_NAME)

    for path in search_paths:
        if path.exists():
            with open(path, "rb") as f:
                toml_data = tomllib.load(f)
            break

    registry_data = toml_data.get("registry", {})
    vault_data = toml_data.get("vault", {})
    anchors_data = toml_data.get("anchors", {})
    assets_data = toml_data.get("assets", {})
    log_data = toml_data.get("log", {})

    return SeqvaultConfig(
        registry=RegistryConfig(path=Path(registry_data.get("path", "ids.json"))),
        vault=VaultConfig(root=Path(vault_data.get("root", vault_path or Path("./vault")))),
        anchors=AnchorConfig(hash_bytes=anchors_data.get("hash_bytes", 6)),
        assets=AssetConfig(strip_components=assets_data.get("strip_components", 1)),
        log=LogConfig(level=str(log_data.get("level", "INFO")).upper()),
    )
