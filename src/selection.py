"""Named selection sets shared between the checklist screens and the installers."""
from __future__ import annotations

from typing import Dict, Iterable, Iterator, List, Optional


class SelectionSet:
    """Set of selected item names, changed only through ``toggle``."""

    def __init__(self, names: Optional[Iterable[str]] = None) -> None:
        self._names = set(names or ())

    def toggle(self, name: str) -> bool:
        """Flip membership of ``name``; return True when it is now selected."""
        if name in self._names:
            self._names.remove(name)
            return False
        self._names.add(name)
        return True

    def sorted(self) -> List[str]:
        return sorted(self._names)

    def __contains__(self, name: object) -> bool:
        return name in self._names

    def __iter__(self) -> Iterator[str]:
        # deterministic order for command lines and display
        return iter(self.sorted())

    def __len__(self) -> int:
        return len(self._names)

    def __eq__(self, other: object) -> bool:
        if isinstance(other, SelectionSet):
            return self._names == other._names
        if isinstance(other, (set, frozenset)):
            return self._names == other
        return NotImplemented

    def __repr__(self) -> str:
        return f'SelectionSet({self.sorted()!r})'


class SelectionStore:
    def __init__(self) -> None:
        self._sets: Dict[str, SelectionSet] = {}

    def create(self, category: str, names: Optional[Iterable[str]] = None) -> SelectionSet:
        if category in self._sets:
            raise KeyError(f'selection {category!r} already exists')
        selection = SelectionSet(names)
        self._sets[category] = selection
        return selection

    def __getitem__(self, category: str) -> SelectionSet:
        return self._sets[category]

    def __contains__(self, category: object) -> bool:
        return category in self._sets
