from enum import Enum
from typing import Self

from pydantic import BaseModel, ConfigDict, Field, model_validator


class EnrichmentStatus(Enum):
    pending = "pending"
    ready = "ready"
    failed = "failed"

    @property
    def terminal(self) -> bool:
        return self is not EnrichmentStatus.pending


class Candidate(BaseModel):
    """A recipe suggestion, before it has an image."""

    model_config = ConfigDict(frozen=True)

    title: str = Field(..., min_length=1, description="The title of the recipe.")
    description: str = Field("", description="A brief description of the recipe.")
    steps: tuple[str, ...] = Field((), description="The preparation steps.")
    link: str | None = Field(None, description="A link to the full recipe.")


class SuggestedRecipes(BaseModel):
    recipes: list[Candidate] = Field(default_factory=list)


class Media(BaseModel):
    model_config = ConfigDict(frozen=True)

    image_data_uri: str = Field(
        ...,
        min_length=1,
        description="Data URI of the image, e.g. 'data:image/png;base64,<data>'.",
    )


class EnrichedCandidate(BaseModel):
    """A candidate as held by a `RecipeCollection`.

    `media` is set if and only if the status is `ready`. Updates never mutate
    an entry, they replace it with a copy in its new state.
    """

    model_config = ConfigDict(frozen=True)

    id: str = Field(..., min_length=1)
    title: str = Field(..., min_length=1)
    description: str = ""
    steps: tuple[str, ...] = ()
    link: str | None = None
    status: EnrichmentStatus = EnrichmentStatus.pending
    media: Media | None = None

    @model_validator(mode="after")
    def _media_only_when_ready(self) -> Self:
        if (self.status is EnrichmentStatus.ready) != (self.media is not None):
            raise ValueError(f"{self.status.value} entry cannot have media={self.media!r}")
        return self

    @classmethod
    def from_candidate(cls, candidate: Candidate, *, id: str) -> Self:
        return cls(id=id, **candidate.model_dump())

    @property
    def candidate(self) -> Candidate:
        return Candidate(
            title=self.title,
            description=self.description,
            steps=self.steps,
            link=self.link,
        )

    def ready(self, media: Media) -> Self:
        return self.model_validate(
            {**self.model_dump(), "status": EnrichmentStatus.ready, "media": media}
        )

    def failed(self) -> Self:
        return self.model_validate(
            {**self.model_dump(), "status": EnrichmentStatus.failed, "media": None}
        )


class IngredientSwap(BaseModel):
    original_ingredient: str = Field(
        ..., description="The ingredient that was asked to be replaced."
    )
    suggested_alternative: str = Field(
        ...,
        description="The alternative, with a quantity where relevant, e.g. '1/2 tsp paprika'.",
    )
    notes: str | None = Field(
        None, description="Impact on flavour or preparation, or why not to swap."
    )
