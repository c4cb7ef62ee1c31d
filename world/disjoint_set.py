"""
world/disjoint_set.py
=====================
Union-find over hashable values, used by the maze generator to track which
cells are already connected.
"""

from __future__ import annotations

from typing import Generic, Hashable, TypeVar

T = TypeVar("T", bound=Hashable)


class DisjointSet(Generic[T]):
    """Disjoint-set forest with path compression and union by rank.

    Usage
    -----
        ds = DisjointSet()
        ds.add((0, 0))
        ds.add((0, 1))
        ds.union((0, 0), (0, 1))
        ds.connected((0, 0), (0, 1))   # True
    """

    def __init__(self) -> None:
        self._parent: dict[T, T]   = {}
        self._rank:   dict[T, int] = {}

    def add(self, value: T) -> None:
        """Add *value* as a singleton set.  No-op if already present."""
        if value not in self._parent:
            self._parent[value] = value
            self._rank[value]   = 0

    def find(self, value: T) -> T:
        """Return the representative of the set holding *value*.

        Raises
        ------
        KeyError
            If *value* was never added.
        """
        root = value
        while self._parent[root] != root:
            root = self._parent[root]
        # Path compression
        while self._parent[value] != root:
            self._parent[value], value = root, self._parent[value]
        return root

    def union(self, a: T, b: T) -> bool:
        """Merge the sets holding *a* and *b*.

        Returns
        -------
        bool
            ``True`` if two distinct sets were merged, ``False`` if *a* and
            *b* were already connected.
        """
        root_a = self.find(a)
        root_b = self.find(b)
        if root_a == root_b:
            return False
        if self._rank[root_a] < self._rank[root_b]:
            root_a, root_b = root_b, root_a
        self._parent[root_b] = root_a
        if self._rank[root_a] == self._rank[root_b]:
            self._rank[root_a] += 1
        return True

    def connected(self, a: T, b: T) -> bool:
        return self.find(a) == self.find(b)

    def __contains__(self, value: object) -> bool:
        return value in self._parent

    def __len__(self) -> int:
        return len(self._parent)
