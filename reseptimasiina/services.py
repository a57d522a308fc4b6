"""Functionality behind the routes."""

import asyncio
import base64
import logging

from reseptimasiina.db import RecipeRepository
from reseptimasiina.formatting import format_recipe
from reseptimasiina.llm import LLMClient
from reseptimasiina.models import Recipe
from reseptimasiina.parsing import RecipeParseError, parse_recipe


logger = logging.getLogger(__name__)


NO_REPLY = "Error getting reply."
NO_INGREDIENTS = "Please add at least one ingredient"


async def store_recipe(recipe: Recipe, *, repository: RecipeRepository) -> None:
    try:
        id = await repository.insert(recipe)
    except Exception:
        logger.exception("Error saving recipe to DB: %s", recipe.title)
    else:
        logger.info("Recipe saved to DB: %s (%s)", recipe.title, id)


class RecipeMachine:
    def __init__(self, *, repository: RecipeRepository, llm: LLMClient) -> None:
        self.repository = repository
        self.llm = llm
        self._saves: set[asyncio.Task[None]] = set()

    def process_response(self, response: str | None) -> str:
        """Parse a model reply, save it in the background and render it.

        Must be called from a running event loop. The returned text never
        depends on whether the save worked.
        """
        if response is None:
            return NO_REPLY

        try:
            parsed = parse_recipe(response)
        except RecipeParseError as e:
            logger.error("JSON parsing error: %s", e)
            return f"JSON parsing error: {e}"

        task = asyncio.create_task(
            store_recipe(parsed.to_recipe(), repository=self.repository)
        )
        self._saves.add(task)
        task.add_done_callback(self._saves.discard)

        return format_recipe(
            parsed.title,
            parsed.description,
            parsed.ingredients,
            parsed.instructions,
        )

    async def recipe_from_ingredients(self, ingredients: list[str]) -> str:
        ingredients = [i.strip() for i in ingredients if i.strip()]
        if not ingredients:
            return NO_INGREDIENTS
        response = await self.llm.recipe_from_ingredients(ingredients)
        return self.process_response(response)

    async def recipe_from_image(self, image: bytes, prompt: str = "") -> str:
        encoded = base64.b64encode(image).decode("utf-8")
        response = await self.llm.recipe_from_image(encoded, prompt.strip())
        return self.process_response(response)

    async def drain(self) -> None:
        """Wait for every pending save."""
        if self._saves:
            await asyncio.gather(*self._saves)
