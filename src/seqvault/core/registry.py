from typing import Iterator, MutableMapping

from .model import Ref, SourceId


class Registry(MutableMapping[SourceId, Ref]):
    """
    Source block id -> Obsidian reference.

    Filled while pages are parsed; read while blocks are transformed.
    Persistence lives in adapters.json_registry.
    """

    def __init__(self, initial: dict[SourceId, Ref] | None = None):
        self._refs = dict(initial or {})

    # MutableMapping interface
    def __getitem__(self, k: SourceId) -> Ref:
        return self._refs[k]

    def __setitem__(self, k: SourceId, v: Ref) -> None:
        self._refs[k] = v

    def __delitem__(self, k: SourceId) -> None:
        del self._refs[k]

    def __iter__(self) -> Iterator[SourceId]:
        return iter(self._refs)

    def __len__(self) -> int:
        return len(self._refs)

    # Convenience
    def query(self, source_id: SourceId) -> Ref | None:
        return self._refs.get(source_id)
