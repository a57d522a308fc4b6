import logging
from typing import Any

import httpx

from reseptimasiina.config import Config
from reseptimasiina.prompts import ImageSystemPrompt, ImageUserPrompt, IngredientsPrompt


logger = logging.getLogger(__name__)


def openrouter_client(config: Config) -> httpx.AsyncClient:
    if config.openrouter_api_key is None:
        logger.warning("No OPENROUTER_API_KEY configured, requests will be refused.")
        token = ""
    else:
        token = config.openrouter_api_key.get_secret_value()
    headers = {
        "Authorization": f"Bearer {token}",
        "Content-Type": "application/json",
    }
    if config.app_referer:
        headers["HTTP-Referer"] = config.app_referer
    if config.app_title:
        headers["X-Title"] = config.app_title
    return httpx.AsyncClient(
        base_url=config.api_base_url,
        headers=headers,
        timeout=config.timeout,
    )


class ChatMsg:
    def __init__(self, *, role: str, content: str) -> None:
        self.role = role
        self.content = content

    def to_dict(self) -> dict[str, Any]:
        return {"role": self.role, "content": self.content}


def text_messages(ingredients: list[str]) -> list[ChatMsg]:
    return [ChatMsg(role="user", content=str(IngredientsPrompt(ingredients)))]


def image_messages(image: str, prompt: str = "") -> list[ChatMsg]:
    """System message fixing the answer format and the image as a data uri."""
    return [
        ChatMsg(role="system", content=str(ImageSystemPrompt())),
        ChatMsg(role="user", content=str(ImageUserPrompt(image, prompt))),
    ]


def completion_content(data: Any) -> str | None:
    """Pull `choices[0].message.content` out of a completion envelope."""
    try:
        content = data["choices"][0]["message"]["content"]
    except (KeyError, IndexError, TypeError):
        return None
    return content if isinstance(content, str) else None


class LLMClient:
    def __init__(
        self,
        config: Config | None = None,
        *,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        self.config = Config() if config is None else config
        self._client = openrouter_client(self.config) if client is None else client

    async def complete(self, messages: list[ChatMsg], *, model: str) -> str | None:
        """Send one chat completion request.

        Returns the assistant message text, or None when the request failed for
        any reason. Nothing is raised to the caller.
        """
        data = {"model": model, "messages": [m.to_dict() for m in messages]}
        try:
            resp = await self._client.post("chat/completions", json=data)
        except httpx.HTTPError as e:
            logger.error("Completion request failed: %r", e)
            return None

        logger.debug("Response %s: %s", resp.status_code, resp.text)

        if not resp.is_success:
            logger.error(
                "Problem creating completion. %s %s", resp.status_code, resp.text
            )
            return None

        try:
            body = resp.json()
        except ValueError as e:
            logger.error("Completion response is not json: %r", e)
            return None

        content = completion_content(body)
        if content is None:
            logger.error("Completion response has no message content. %s", body)
        return content

    async def recipe_from_ingredients(self, ingredients: list[str]) -> str | None:
        return await self.complete(
            text_messages(ingredients), model=self.config.text_model
        )

    async def recipe_from_image(self, image: str, prompt: str = "") -> str | None:
        return await self.complete(
            image_messages(image, prompt), model=self.config.image_model
        )

    async def aclose(self) -> None:
        await self._client.aclose()
