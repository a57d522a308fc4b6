JSON_FORMAT = """
Return the answer in json format with the keys Title, Description, Ingredients and Instructions.
Title and Description are strings. Ingredients and Instructions are lists of strings.
For example:

```json
{
    "Title": "Tomato soup",
    "Description": "A warming soup for a cold day.",
    "Ingredients": ["Tomatoes (500 grams)", "Onion (1)", "Salt"],
    "Instructions": ["Chop the onion.", "Simmer everything for 20 minutes.", "Blend."]
}
```"""

INGREDIENTS_PROMPT = """Suggest a recipe from the following ingredients: {ingredients}.
{format}"""

IMAGE_SYSTEM_PROMPT = """You are an AI that generates a recipe based on an image description.
{format}"""

IMAGE_USER_PROMPT = """Analyze this image: data:image/jpeg;base64,{image}
Additional prompt: {prompt}"""


class IngredientsPrompt:
    def __init__(
        self,
        ingredients: list[str],
        format: str | None = None,
    ) -> None:
        self.ingredients = ingredients
        self.format = JSON_FORMAT if format is None else format

    def __str__(self) -> str:
        return INGREDIENTS_PROMPT.format(
            ingredients=", ".join(self.ingredients),
            format=self.format,
        )


class ImageSystemPrompt:
    def __init__(self, format: str | None = None) -> None:
        self.format = JSON_FORMAT if format is None else format

    def __str__(self) -> str:
        return IMAGE_SYSTEM_PROMPT.format(format=self.format)


class ImageUserPrompt:
    def __init__(self, image: str, prompt: str = "") -> None:
        self.image = image
        self.prompt = prompt

    def __str__(self) -> str:
        return IMAGE_USER_PROMPT.format(image=self.image, prompt=self.prompt)
