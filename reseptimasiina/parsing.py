"""Turn a model reply into recipe fields.

Models like to wrap JSON in a markdown fence, so the first ```json block wins
and the whole reply is tried otherwise.
"""

import json
import re
from typing import Any

from reseptimasiina.models import Recipe


FENCED_JSON = re.compile(r"```json\s*(\{.*?\})\s*```", re.DOTALL)

NO_TITLE = "No title"


class RecipeParseError(ValueError):
    pass


class ParsedRecipe:
    def __init__(
        self,
        *,
        title: str,
        description: str,
        ingredients: list[str],
        instructions: list[str],
    ) -> None:
        self.title = title
        self.description = description
        self.ingredients = ingredients
        self.instructions = instructions

    def to_recipe(self) -> Recipe:
        return Recipe(
            id=0,
            title=self.title,
            description=self.description,
            ingredients="\n".join(self.ingredients),
            instructions="\n".join(self.instructions),
        )


def extract_json_text(text: str) -> str:
    match = FENCED_JSON.search(text)
    return match.group(1) if match else text


def _string_list(data: dict[str, Any], key: str) -> list[str]:
    value = data.get(key)
    if value is None:
        return []
    # Present but not a list is malformed, unlike a missing key.
    if not isinstance(value, list):
        raise RecipeParseError(f"{key} is not a list.")
    for i, item in enumerate(value):
        if not isinstance(item, str):
            raise RecipeParseError(f"{key}[{i}] is not a string.")
    return value


def parse_recipe(text: str) -> ParsedRecipe:
    try:
        data = json.loads(extract_json_text(text))
    except (json.JSONDecodeError, RecursionError) as e:
        raise RecipeParseError(str(e)) from e

    if not isinstance(data, dict):
        raise RecipeParseError(f"Expected a json object, got {type(data).__name__}.")

    title = data.get("Title")
    description = data.get("Description")
    return ParsedRecipe(
        title=title if isinstance(title, str) else NO_TITLE,
        description=description if isinstance(description, str) else "",
        ingredients=_string_list(data, "Ingredients"),
        instructions=_string_list(data, "Instructions"),
    )
