from jinja2 import Environment
from markupsafe import Markup


RECIPE_TEMPLATE = (
    "🍽️ <b>{{ title }}</b><br><br>"
    "{% if description %}📝 {{ description }}<br><br>{% endif %}"
    "<b>🧂 Ingredients:</b><br>"
    "{% for ingredient in ingredients %}- {{ ingredient }}<br>{% endfor %}"
    "<br><b>👩‍🍳 Instructions:</b><br>"
    "{% for instruction in instructions %}• {{ instruction }}<br><br>{% endfor %}"
)


ENV = Environment(autoescape=True)

TEMPLATE = ENV.from_string(RECIPE_TEMPLATE)


def format_recipe(
    title: str,
    description: str,
    ingredients: list[str],
    instructions: list[str],
) -> Markup:
    """Render a recipe as an HTML fragment. Field contents are escaped."""
    return Markup(
        TEMPLATE.render(
            title=title,
            description=description,
            ingredients=ingredients,
            instructions=instructions,
        )
    )
