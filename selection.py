class SelectionStore:
    """Fingerprint -> selected record, kept across page loads of one search."""

    def __init__(self):
        self._selected: dict[str, dict] = {}

    def clear(self) -> None:
        self._selected.clear()

    def upsert(self, key: str, record: dict) -> None:
        self._selected[key] = record

    def remove(self, key: str) -> None:
        self._selected.pop(key, None)

    def has(self, key: str) -> bool:
        return key in self._selected

    def get(self, key: str):
        return self._selected.get(key)

    def keys(self) -> list[str]:
        return list(self._selected)

    def values(self) -> list[dict]:
        return list(self._selected.values())

    @property
    def size(self) -> int:
        return len(self._selected)

    def __contains__(self, key) -> bool:
        return self.has(key)

    def __len__(self) -> int:
        return self.size

    def __repr__(self) -> str:
        return f"SelectionStore(size={self.size})"
