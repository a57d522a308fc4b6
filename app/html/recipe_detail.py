from jinja2 import Environment
from markupsafe import Markup

from reseptimasiina.formatting import format_recipe
from reseptimasiina.models import Recipe


class RecipeDetail:
    def __init__(
        self,
        recipe: Recipe,
        *,
        environment: Environment,
        template_name: str = "recipe-detail.html",
    ) -> None:
        self.recipe = recipe
        self.env = environment
        self.name = template_name

    @property
    def id(self) -> int:
        return self.recipe.id

    @property
    def title(self) -> str:
        return self.recipe.title

    @property
    def content(self) -> Markup:
        return format_recipe(
            self.recipe.title,
            self.recipe.description,
            self.recipe.ingredient_list,
            self.recipe.instruction_list,
        )

    def render(self) -> str:
        return self.env.get_template(self.name).render(recipe=self)
