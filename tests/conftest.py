import asyncio
from collections import defaultdict
from collections.abc import Callable, Sequence

import pytest

from feast.config import Settings
from feast.models import Candidate, EnrichedCandidate, EnrichmentStatus, Media


def media_for(title: str) -> Media:
    return Media(image_data_uri=f"data:image/png;base64,{title.encode().hex()}")


async def eventually(predicate: Callable[[], bool], timeout: float = 1.0) -> None:
    """Yield to the loop until `predicate` holds."""
    async with asyncio.timeout(timeout):
        while not predicate():
            await asyncio.sleep(0)


class FakeClient:
    """Generation client whose image calls finish when a test says so.

    Suggestions are looked up by query. Each image call parks on a future
    keyed by title; `succeed` and `fail` resolve the oldest one for a title.
    """

    def __init__(
        self,
        suggestions: dict[str, Sequence[Candidate] | Exception] | None = None,
    ) -> None:
        self.suggestions = {} if suggestions is None else suggestions
        self.suggest_calls: list[str] = []
        self.enrich_calls: list[Candidate] = []
        self._parked: dict[str, list[asyncio.Future[Media]]] = defaultdict(list)

    async def suggest_candidates(self, query: str) -> Sequence[Candidate]:
        self.suggest_calls.append(query)
        result = self.suggestions[query]
        if isinstance(result, Exception):
            raise result
        return result

    async def enrich_candidate(self, candidate: Candidate) -> Media:
        self.enrich_calls.append(candidate)
        fut: asyncio.Future[Media] = asyncio.get_running_loop().create_future()
        self._parked[candidate.title].append(fut)
        return await fut

    def waiting(self, title: str) -> int:
        return sum(1 for f in self._parked[title] if not f.done())

    def _next(self, title: str) -> asyncio.Future[Media]:
        for fut in self._parked[title]:
            if not fut.done():
                return fut
        raise AssertionError(f"No image call waiting for {title!r}")

    def succeed(self, title: str, media: Media | None = None) -> None:
        self._next(title).set_result(media_for(title) if media is None else media)

    def fail(self, title: str, exc: Exception | None = None) -> None:
        self._next(title).set_exception(exc or RuntimeError(f"No image for {title}"))


class RecordingConsumer:
    def __init__(self) -> None:
        self.events: list[tuple] = []

    def on_base_list_ready(self, entries: Sequence[EnrichedCandidate]) -> None:
        self.events.append(("base_list_ready", tuple(entries)))

    def on_entry_updated(
        self, id: str, status: EnrichmentStatus, media: Media | None
    ) -> None:
        self.events.append(("entry_updated", id, status, media))

    def on_primary_failed(self, reason: str) -> None:
        self.events.append(("primary_failed", reason))

    def on_no_results(self) -> None:
        self.events.append(("no_results",))

    @property
    def kinds(self) -> list[str]:
        return [e[0] for e in self.events]

    @property
    def updates(self) -> list[tuple[str, EnrichmentStatus]]:
        return [(e[1], e[2]) for e in self.events if e[0] == "entry_updated"]


@pytest.fixture
def consumer() -> RecordingConsumer:
    return RecordingConsumer()


@pytest.fixture
def settings() -> Settings:
    return Settings(
        enrichment_timeout=None,
        suggestion_timeout=None,
        max_concurrent_enrichments=None,
        enrichment_attempts=1,
    )


def recipes(*titles: str) -> list[Candidate]:
    return [
        Candidate(title=t, description=f"A lovely {t.lower()}.", steps=("Cook.",))
        for t in titles
    ]
