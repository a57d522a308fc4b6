from typing import Any


def split_lines(text: str) -> list[str]:
    return text.split("\n") if text else []


class Recipe:
    def __init__(
        self,
        *,
        id: int = 0,
        title: str,
        description: str,
        ingredients: str,
        instructions: str,
    ) -> None:
        self.id = id
        self.title = title
        self.description = description
        self.ingredients = ingredients
        self.instructions = instructions

    @classmethod
    def from_record(cls, record: Any) -> "Recipe":
        return cls(
            id=record["id"],
            title=record["title"],
            description=record["description"],
            ingredients=record["ingredients"],
            instructions=record["instructions"],
        )

    @property
    def ingredient_list(self) -> list[str]:
        return split_lines(self.ingredients)

    @property
    def instruction_list(self) -> list[str]:
        return split_lines(self.instructions)

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "title": self.title,
            "description": self.description,
            "ingredients": self.ingredients,
            "instructions": self.instructions,
        }

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Recipe):
            return NotImplemented
        return self.to_dict() == other.to_dict()

    def __repr__(self) -> str:
        return f"<Recipe(id={self.id}, title={self.title})>"

    def __str__(self) -> str:
        return self.title
