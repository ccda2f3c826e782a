from typing import Collection, Iterable, Iterator, Optional

from .schemas import Count
from .utils import parse_quantity


class UnknownItemError(KeyError):
    """Raised when a count refers to an item the catalog doesn't have."""


class CountStore:
    """
    In-memory collection of counts, keyed by (item_id, location_id, round).
    Re-entering a key overwrites its quantity.
    """

    def __init__(self, item_ids: Optional[Iterable[str]] = None):
        self._known_ids = set(item_ids) if item_ids is not None else None
        self._counts: list[Count] = []

    @classmethod
    def from_counts(cls, counts: Iterable[Count]) -> "CountStore":
        """Wraps already recorded counts so they can be queried."""
        store = cls()
        store._counts = list(counts)
        return store

    def __len__(self) -> int:
        return len(self._counts)

    def __iter__(self) -> Iterator[Count]:
        return iter(list(self._counts))

    @property
    def counts(self) -> list[Count]:
        return list(self._counts)

    def _index_of(self, item_id: str, location_id: str, round: int) -> int | None:
        for index, count in enumerate(self._counts):
            if count.key == (item_id, location_id, round):
                return index
        return None

    def get(self, item_id: str, location_id: str, round: int) -> Count | None:
        index = self._index_of(item_id, location_id, round)
        return self._counts[index] if index is not None else None

    def upsert(
        self, item_id: str, location_id: str, round: int, quantity: int | float | str | None
    ) -> Count:
        if self._known_ids is not None and item_id not in self._known_ids:
            raise UnknownItemError(item_id)

        count = Count(
            item_id=item_id,
            location_id=location_id,
            round=round,
            quantity=parse_quantity(quantity),
        )
        index = self._index_of(item_id, location_id, round)
        if index is None:
            self._counts.append(count)
        else:
            self._counts[index] = count
        return count

    def reset_all(self) -> None:
        self._counts.clear()

    def query(
        self,
        location_id: Optional[str] = None,
        round: Optional[int] = None,
        item_ids: Optional[Collection[str]] = None,
    ) -> Iterator[Count]:
        """Lazily yields the counts matching every given criterion."""
        for count in list(self._counts):
            if location_id is not None and count.location_id != location_id:
                continue
            if round is not None and count.round != round:
                continue
            if item_ids is not None and count.item_id not in item_ids:
                continue
            yield count
