"""Fan a query out into recipes and their images, and fan the images back in.

One `start()` makes one `RecipeCollection`. Suggestions are awaited first,
then every recipe gets its own image task. The tasks report into a queue and
a single loop applies what they report, so the collection only ever has one
writer. Every apply checks that its collection is still the current one;
results for a superseded query are dropped.
"""

import asyncio
from collections.abc import Callable, Sequence
import contextlib
from enum import Enum
import itertools
import logging
from typing import Any, NamedTuple, Protocol

from feast import identity
from feast.config import Settings
from feast.consumer import Consumer
from feast.errors import EnrichmentError, InvalidQuery, PrimaryGenerationFailed
from feast.models import Candidate, EnrichedCandidate, Media
from feast.store import RecipeCollection


logger = logging.getLogger(__name__)


class GenerationClient(Protocol):
    async def suggest_candidates(self, query: str) -> Sequence[Candidate]:
        ...

    async def enrich_candidate(self, candidate: Candidate) -> Media:
        ...


class QueryOutcome(Enum):
    enriching = "enriching"
    no_results = "no_results"
    superseded = "superseded"


class Completion(NamedTuple):
    id: str
    media: Media | None


def validate_query(
    query: object,
    *,
    min_length: int = 3,
    max_length: int = 500,
) -> str:
    if not isinstance(query, str):
        raise InvalidQuery(f"Query must be text, not {type(query).__name__}.")
    query = query.strip()
    if len(query) < min_length:
        raise InvalidQuery('Please list at least one ingredient (e.g., "eggs").')
    if len(query) > max_length:
        raise InvalidQuery(
            f"Ingredient list is too long. Please keep it under {max_length} characters."
        )
    return query


class QueryRun:
    """Handle on one `start()`.

    Returned as soon as the base list is visible. The images keep arriving in
    the background; `wait()` returns once every entry has settled.
    """

    def __init__(
        self,
        collection: RecipeCollection,
        outcome: QueryOutcome,
        task: asyncio.Task[None] | None = None,
    ) -> None:
        self.collection = collection
        self.outcome = outcome
        self._task = task

    def __repr__(self) -> str:
        return (
            f"<QueryRun(generation={self.generation}, outcome={self.outcome.value})>"
        )

    @property
    def generation(self) -> int:
        return self.collection.generation

    @property
    def settled(self) -> bool:
        return self.collection.settled

    @property
    def done(self) -> bool:
        return self._task is None or self._task.done()

    def cancel(self) -> None:
        if self._task is not None:
            self._task.cancel()

    async def wait(self) -> RecipeCollection:
        if self._task is not None:
            await asyncio.wait({self._task})
        return self.collection


class Orchestrator:
    def __init__(
        self,
        client: GenerationClient,
        consumer: Consumer,
        *,
        settings: Settings | None = None,
    ) -> None:
        self.client = client
        self.consumer = consumer
        self.settings = Settings() if settings is None else settings
        self._generations = itertools.count(1)
        self._current = RecipeCollection(generation=0, query="")
        self._current_run: QueryRun | None = None
        self._tasks: set[asyncio.Task[None]] = set()
        limit = self.settings.max_concurrent_enrichments
        self._slots = asyncio.Semaphore(limit) if limit else None

    @property
    def current(self) -> RecipeCollection:
        return self._current

    def snapshot(self) -> tuple[EnrichedCandidate, ...]:
        return self._current.snapshot()

    def is_current(self, collection: RecipeCollection) -> bool:
        return collection is self._current

    async def start(self, query: str) -> QueryRun:
        query = validate_query(
            query,
            min_length=self.settings.min_query_length,
            max_length=self.settings.max_query_length,
        )
        collection = self._supersede(query)
        logger.info("Query %d: %r", collection.generation, query)

        try:
            async with asyncio.timeout(self.settings.suggestion_timeout):
                candidates = list(await self.client.suggest_candidates(query))
        except Exception as e:
            if not self.is_current(collection):
                logger.info("Dropping failure of superseded query %d", collection.generation)
                return QueryRun(collection, QueryOutcome.superseded)
            reason = f"{type(e).__name__}: {e}" if str(e) else type(e).__name__
            logger.error("Suggestions failed for query %d: %s", collection.generation, reason)
            self._notify(self.consumer.on_primary_failed, reason)
            raise PrimaryGenerationFailed(reason) from e

        if not self.is_current(collection):
            logger.info("Dropping suggestions of superseded query %d", collection.generation)
            return QueryRun(collection, QueryOutcome.superseded)

        if not candidates:
            logger.info("No recipes for query %d", collection.generation)
            self._notify(self.consumer.on_no_results)
            return QueryRun(collection, QueryOutcome.no_results)

        ids = identity.assign_all(candidates)
        collection.populate(
            EnrichedCandidate.from_candidate(candidate, id=id)
            for id, candidate in zip(ids, candidates)
        )
        self._notify(self.consumer.on_base_list_ready, collection.snapshot())

        task = asyncio.create_task(
            self._fan_out(collection, list(zip(ids, candidates))),
            name=f"feast-enrich-{collection.generation}",
        )
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)

        run = self._current_run = QueryRun(collection, QueryOutcome.enriching, task)
        return run

    async def close(self) -> None:
        """Cancel every outstanding image call and wait for them to stop."""
        tasks = set(self._tasks)
        for task in tasks:
            task.cancel()
        if tasks:
            await asyncio.wait(tasks)

    def _supersede(self, query: str) -> RecipeCollection:
        previous = self._current_run
        if previous is not None and self.settings.cancel_superseded:
            previous.cancel()
        self._current = RecipeCollection(generation=next(self._generations), query=query)
        self._current_run = None
        return self._current

    async def _fan_out(
        self,
        collection: RecipeCollection,
        jobs: list[tuple[str, Candidate]],
    ) -> None:
        completions: asyncio.Queue[Completion] = asyncio.Queue()
        async with asyncio.TaskGroup() as tg:
            for id, candidate in jobs:
                tg.create_task(self._enrich(id, candidate, completions), name=id)
            for _ in jobs:
                self._apply(collection, await completions.get())
        state = "current" if self.is_current(collection) else "superseded"
        logger.info("Query %d settled (%s)", collection.generation, state)

    async def _enrich(
        self,
        id: str,
        candidate: Candidate,
        completions: asyncio.Queue[Completion],
    ) -> None:
        attempts = self.settings.enrichment_attempts
        media: Media | None = None
        for attempt in range(1, attempts + 1):
            try:
                async with self._slot():
                    async with asyncio.timeout(self.settings.enrichment_timeout):
                        result = await self.client.enrich_candidate(candidate)
                if not isinstance(result, Media):
                    raise EnrichmentError(f"Expected Media, got {type(result).__name__}")
            except Exception as e:
                logger.warning(
                    "Image for %s failed (attempt %d/%d): %r", id, attempt, attempts, e
                )
            else:
                media = result
                break
        completions.put_nowait(Completion(id, media))

    def _slot(self) -> contextlib.AbstractAsyncContextManager[Any]:
        return contextlib.nullcontext() if self._slots is None else self._slots

    def _apply(self, collection: RecipeCollection, completion: Completion) -> None:
        if not self.is_current(collection):
            logger.debug(
                "Dropping %s for superseded query %d", completion.id, collection.generation
            )
            return

        if completion.media is None:
            updated = collection.mark_failed(completion.id)
        else:
            updated = collection.mark_ready(completion.id, completion.media)
        if updated is None:
            return

        self._notify(
            self.consumer.on_entry_updated, updated.id, updated.status, updated.media
        )

    def _notify(self, callback: Callable[..., None], *args: Any) -> None:
        try:
            callback(*args)
        except Exception:
            logger.exception("Consumer failed in %s", getattr(callback, "__name__", callback))
