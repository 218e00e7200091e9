"""Shared fixtures: a conversion context that records what it is asked."""

import pytest

from seqvault.core.model import Identifier, Ref
from seqvault.core.registry import Registry


class RecordingContext:
    def __init__(self, registry: Registry | None = None, title: str = ""):
        self.registry = registry if registry is not None else Registry()
        self.title = title
        self.assets: list[str] = []

    def set_page_title(self, title: str) -> None:
        self.title = title

    def copy_asset(self, relative_path: str) -> str:
        self.assets.append(relative_path)
        return f"copied/{relative_path.rsplit('/', 1)[-1]}"

    def register_id(self, id: Identifier) -> None:
        if not self.title:
            return
        self.registry[id.source_id] = Ref(title=self.title, anchor=id.target_anchor)

    def query_id(self, source_id: str) -> Ref | None:
        return self.registry.query(source_id)

    def current_title(self) -> str:
        return self.title


@pytest.fixture
def ctx():
    return RecordingContext(title="Current Page")
