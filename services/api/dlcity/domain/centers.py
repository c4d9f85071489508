from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Iterator, Mapping

# Practical driving exam centers known to the booking API.
DEFAULT_CENTERS: Mapping[int, str] = {
    2: "Kutaisi",
    3: "Batumi",
    4: "Telavi",
    5: "Akhaltsikhe",
    6: "Zugdidi",
    7: "Gori",
    8: "Poti",
    9: "Ozurgeti",
    10: "Sachkhere",
    15: "Rustavi",
}


@dataclass(frozen=True)
class CenterEntry:
    center_id: int
    name: str


class CenterRegistry:
    """Read-only table of exam centers.

    Ids and display names must both be unique; the aggregate is keyed by
    name, so a duplicate name would silently drop a center's result.
    """

    def __init__(self, entries: Iterable[CenterEntry]):
        by_id: dict[int, CenterEntry] = {}
        names: set[str] = set()
        for entry in entries:
            if not entry.name:
                raise ValueError(f"center {entry.center_id} has an empty name")
            if entry.center_id in by_id:
                raise ValueError(f"duplicate center id: {entry.center_id}")
            if entry.name in names:
                raise ValueError(f"duplicate center name: {entry.name!r}")
            by_id[entry.center_id] = entry
            names.add(entry.name)
        self._by_id = by_id
        self._entries = tuple(by_id.values())

    @classmethod
    def from_mapping(cls, centers: Mapping[int, str]) -> "CenterRegistry":
        return cls(CenterEntry(center_id=int(cid), name=name) for cid, name in centers.items())

    def get(self, center_id: int) -> CenterEntry | None:
        return self._by_id.get(center_id)

    def __contains__(self, center_id: object) -> bool:
        return center_id in self._by_id

    def __iter__(self) -> Iterator[CenterEntry]:
        return iter(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def __repr__(self) -> str:
        return f"CenterRegistry({len(self)} centers)"


def default_registry() -> CenterRegistry:
    return CenterRegistry.from_mapping(DEFAULT_CENTERS)
