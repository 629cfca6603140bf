import logging
from collections.abc import Iterable, Iterator

from feast.models import EnrichedCandidate, EnrichmentStatus, Media


logger = logging.getLogger(__name__)


class EntryNotFound(KeyError):
    pass


class RecipeCollection:
    """The recipes of one query and how far each one's image has got.

    A collection belongs to exactly one query, identified by `generation`. It
    is filled once with every entry, then each entry may move out of
    `pending` once. Nothing else changes it.
    """

    def __init__(self, *, generation: int, query: str) -> None:
        self.generation = generation
        self.query = query
        self._entries: dict[str, EnrichedCandidate] = {}
        self._populated = False

    def __repr__(self) -> str:
        return (
            f"<RecipeCollection(generation={self.generation}, "
            f"entries={len(self._entries)}, settled={self.settled})>"
        )

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[EnrichedCandidate]:
        return iter(self.snapshot())

    def __contains__(self, id: object) -> bool:
        return id in self._entries

    def populate(self, entries: Iterable[EnrichedCandidate]) -> None:
        if self._populated:
            raise RuntimeError(f"Collection {self.generation} is already populated.")

        staged: dict[str, EnrichedCandidate] = {}
        for entry in entries:
            if entry.id in staged:
                raise ValueError(f"Duplicate id: {entry.id}")
            if entry.status is not EnrichmentStatus.pending:
                raise ValueError(f"New entry {entry.id} is {entry.status.value}.")
            staged[entry.id] = entry

        self._entries = staged
        self._populated = True

    @property
    def populated(self) -> bool:
        return self._populated

    def get(self, id: str) -> EnrichedCandidate:
        try:
            return self._entries[id]
        except KeyError:
            raise EntryNotFound(id) from None

    def snapshot(self) -> tuple[EnrichedCandidate, ...]:
        return tuple(self._entries.values())

    @property
    def ids(self) -> tuple[str, ...]:
        return tuple(self._entries)

    def mark_ready(self, id: str, media: Media) -> EnrichedCandidate | None:
        """Returns the updated entry, or `None` if it was already settled."""
        entry = self.get(id)
        if entry.status.terminal:
            logger.debug("Discarding media for settled entry %s", id)
            return None
        updated = self._entries[id] = entry.ready(media)
        return updated

    def mark_failed(self, id: str) -> EnrichedCandidate | None:
        """Returns the updated entry, or `None` if it was already settled."""
        entry = self.get(id)
        if entry.status.terminal:
            logger.debug("Discarding failure for settled entry %s", id)
            return None
        updated = self._entries[id] = entry.failed()
        return updated

    def count(self, status: EnrichmentStatus) -> int:
        return sum(1 for e in self._entries.values() if e.status is status)

    @property
    def settled(self) -> bool:
        return all(e.status.terminal for e in self._entries.values())
