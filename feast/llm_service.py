"""The generation client the orchestrator talks to, backed by OpenAI."""

import logging

import openai
from pydantic import ValidationError

from feast.aopenai import generate_image, openai_client_factory, quick_chat
from feast.config import Settings
from feast.errors import GenerationError, InvalidQuery
from feast.models import Candidate, IngredientSwap, Media, SuggestedRecipes
from feast.prompts import (
    SYSTEM_PROMPT,
    AlternateIngredientPrompt,
    RecipeDescriptionPrompt,
    RecipeImagePrompt,
    SuggestRecipesPrompt,
)


logger = logging.getLogger(__name__)


class LLMService:
    def __init__(
        self,
        openai_client: openai.AsyncClient | None = None,
        *,
        settings: Settings | None = None,
    ) -> None:
        self.settings = Settings() if settings is None else settings
        self.openai_client = (
            openai_client_factory(timeout=self.settings.request_timeout)
            if openai_client is None
            else openai_client
        )

    async def qa(self, q: str, *, json: bool = False) -> str:
        return await quick_chat(
            q,
            openai_client=self.openai_client,
            model=self.settings.core_model,
            system=SYSTEM_PROMPT,
            json=json,
        )

    async def suggest_candidates(self, query: str) -> list[Candidate]:
        ans = await self.qa(str(SuggestRecipesPrompt(query)), json=True)
        try:
            suggested = SuggestedRecipes.model_validate_json(ans)
        except ValidationError as e:
            raise GenerationError(f"Unusable recipe suggestions: {e}") from e
        logger.debug("%d recipes for %r", len(suggested.recipes), query)
        return suggested.recipes

    async def enrich_candidate(self, candidate: Candidate) -> Media:
        prompt = RecipeImagePrompt(candidate.title, candidate.description)
        data_uri = await generate_image(
            str(prompt),
            openai_client=self.openai_client,
            model=self.settings.image_model,
            size=self.settings.image_size,
        )
        return Media(image_data_uri=data_uri)

    async def recipe_description(self, title: str, ingredients: str) -> str:
        return await self.qa(str(RecipeDescriptionPrompt(title, ingredients)))

    async def suggest_alternate_ingredient(
        self,
        recipe: Candidate,
        ingredient: str,
    ) -> IngredientSwap:
        ingredient = ingredient.strip()
        if not ingredient:
            raise InvalidQuery("Please enter an ingredient to find a swap for.")

        prompt = AlternateIngredientPrompt(
            title=recipe.title,
            description=recipe.description,
            steps=recipe.steps,
            ingredient=ingredient,
        )
        ans = await self.qa(str(prompt), json=True)
        try:
            return IngredientSwap.model_validate_json(ans)
        except ValidationError as e:
            raise GenerationError(f"Unusable ingredient swap: {e}") from e

    async def close(self) -> None:
        await self.openai_client.close()
