from typing import Protocol

from .model import Identifier, Ref, SourceId
from .registry import Registry


class ConversionContext(Protocol):
    """
    Everything the parser and transform pipeline need from the outside
    world: the current output note, the id registry and asset copies.
    """

    def set_page_title(self, title: str) -> None:
        pass

    def copy_asset(self, relative_path: str) -> str:
        """Schedule a copy of ``relative_path``; return the rewritten path."""
        pass

    def register_id(self, id: Identifier) -> None:
        pass

    def query_id(self, source_id: SourceId) -> Ref | None:
        pass

    def current_title(self) -> str:
        pass


class RegistryStore(Protocol):
    """
    Durable storage for the registry; a missing or unreadable store loads
    as empty.
    """

    def load(self) -> Registry:
        pass

    def save(self, registry: Registry) -> None:
        pass
