import asyncio
import logging

from databases import Database

from reseptimasiina.models import Recipe


logger = logging.getLogger(__name__)


CREATE_RECIPES_TABLE = """
CREATE TABLE IF NOT EXISTS recipes (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    title TEXT NOT NULL,
    description TEXT NOT NULL,
    ingredients TEXT NOT NULL,
    instructions TEXT NOT NULL
)
"""


CREATE_RECIPE = """
INSERT INTO recipes(title, description, ingredients, instructions)
VALUES (:title, :description, :ingredients, :instructions)
"""


REPLACE_RECIPE = """
INSERT OR REPLACE INTO recipes(id, title, description, ingredients, instructions)
VALUES (:id, :title, :description, :ingredients, :instructions)
"""


GET_RECIPE = "SELECT * FROM recipes WHERE id = :id"


LIST_RECIPES = "SELECT * FROM recipes ORDER BY id"


COUNT_RECIPE = "SELECT COUNT(*) FROM recipes WHERE id = :id"


COUNT_RECIPES = "SELECT COUNT(*) FROM recipes"


DELETE_RECIPE = "DELETE FROM recipes WHERE id = :id"


DELETE_RECIPES = "DELETE FROM recipes"


class RecipeRepository:
    """Recipes repository.

    Owns the connection to a single `recipes` table. Connecting happens at most
    once, either explicitly from the app lifespan or on first use.
    """

    def __init__(self, db: Database) -> None:
        self.db = db
        self._lock = asyncio.Lock()
        self._ready = False

    async def connect(self) -> None:
        if self._ready:
            return
        async with self._lock:
            if self._ready:
                return
            if not self.db.is_connected:
                await self.db.connect()
            await self.db.execute(  # pyright: ignore[reportUnknownMemberType]
                query=CREATE_RECIPES_TABLE
            )
            self._ready = True
            logger.info("Connected to %s", self.db.url)

    async def disconnect(self) -> None:
        async with self._lock:
            if self.db.is_connected:
                await self.db.disconnect()
            self._ready = False

    async def insert(self, recipe: Recipe) -> int:
        """Insert a recipe, replacing any row with the same non-zero id."""
        await self.connect()
        values = {
            "title": recipe.title,
            "description": recipe.description,
            "ingredients": recipe.ingredients,
            "instructions": recipe.instructions,
        }
        if recipe.id:
            await self.db.execute(  # pyright: ignore[reportUnknownMemberType]
                REPLACE_RECIPE, values={"id": recipe.id, **values}
            )
            return recipe.id
        id = await self.db.execute(  # pyright: ignore[reportUnknownMemberType]
            CREATE_RECIPE, values=values
        )
        return int(id)

    async def get(self, id: int) -> Recipe | None:
        await self.connect()
        result = await self.db.fetch_one(  # pyright: ignore[reportUnknownMemberType]
            GET_RECIPE, values={"id": id}
        )
        if result is None:
            return None
        return Recipe.from_record(result)

    async def list(self) -> tuple[Recipe, ...]:
        await self.connect()
        result = await self.db.fetch_all(  # pyright: ignore[reportUnknownMemberType]
            LIST_RECIPES
        )
        return tuple(Recipe.from_record(r) for r in result)

    async def delete(self, id: int) -> int:
        await self.connect()
        async with self.db.transaction():
            n = await self.db.fetch_val(  # pyright: ignore[reportUnknownMemberType]
                COUNT_RECIPE, values={"id": id}
            )
            await self.db.execute(  # pyright: ignore[reportUnknownMemberType]
                DELETE_RECIPE, values={"id": id}
            )
        return int(n)

    async def delete_all(self) -> int:
        await self.connect()
        async with self.db.transaction():
            n = await self.db.fetch_val(  # pyright: ignore[reportUnknownMemberType]
                COUNT_RECIPES
            )
            await self.db.execute(  # pyright: ignore[reportUnknownMemberType]
                DELETE_RECIPES
            )
        return int(n)
