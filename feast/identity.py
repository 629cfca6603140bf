"""Stable ids for the candidates of one query.

An id is the slug of the title followed by an ordinal, ``pancakes-0``. The
ordinal is always the last ``-`` separated segment and a slug never ends with
``-``, so two different (slug, ordinal) pairs never give the same id.
"""

from collections import Counter
from collections.abc import Iterable
import re
import unicodedata

from feast.models import Candidate


FALLBACK_SLUG = "recipe"

_NOT_WORD = re.compile(r"[\W_]+")


def slugify(title: str) -> str:
    text = unicodedata.normalize("NFKC", title).casefold()
    slug = _NOT_WORD.sub("-", text).strip("-")
    return slug or FALLBACK_SLUG


def assign(candidate: Candidate, ordinal: int) -> str:
    if ordinal < 0:
        raise ValueError(f"Ordinal must not be negative: {ordinal}")
    return f"{slugify(candidate.title)}-{ordinal}"


def assign_all(candidates: Iterable[Candidate]) -> list[str]:
    """Ids for a batch, in order.

    Each candidate's ordinal counts the earlier candidates sharing its slug,
    so repeated titles become ``pancakes-0``, ``pancakes-1``.
    """
    seen: Counter[str] = Counter()
    ids: list[str] = []
    for candidate in candidates:
        slug = slugify(candidate.title)
        ids.append(assign(candidate, seen[slug]))
        seen[slug] += 1
    return ids
