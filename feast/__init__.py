"""Fridge Feast. Recipes from whatever is in the fridge.

A query becomes a list of recipe candidates in one call, then every candidate
is illustrated by its own image generation call. The interesting part is the
second step:

- The image calls are slow, independent, and fail on their own.
- They finish in any order.
- A new query can start while the old one's images are still cooking.

The `Orchestrator` owns that. It writes into a `RecipeCollection` tagged with
the query's generation and tells a `Consumer` about every change. Everything
that talks to a model hides behind `GenerationClient`, so it can be faked.
"""

from feast.errors import (
    EnrichmentError,
    FeastError,
    GenerationError,
    InvalidQuery,
    PrimaryGenerationFailed,
)
from feast.models import (
    Candidate,
    EnrichedCandidate,
    EnrichmentStatus,
    IngredientSwap,
    Media,
)
from feast.orchestrator import Orchestrator, QueryOutcome, QueryRun
from feast.store import RecipeCollection


__all__ = [
    "Candidate",
    "EnrichedCandidate",
    "EnrichmentError",
    "EnrichmentStatus",
    "FeastError",
    "GenerationError",
    "IngredientSwap",
    "InvalidQuery",
    "Media",
    "Orchestrator",
    "PrimaryGenerationFailed",
    "QueryOutcome",
    "QueryRun",
    "RecipeCollection",
]
