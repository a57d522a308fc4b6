import json
from pathlib import Path
from typing import Any, AsyncIterator

import httpx
from databases import Database
import pytest
import pytest_asyncio

from reseptimasiina.config import Config, Env
from reseptimasiina.db import RecipeRepository
from reseptimasiina.llm import LLMClient


BASE_URL = "https://openrouter.test/api/v1/"


SOUP = json.dumps(
    {
        "Title": "Soup",
        "Description": "",
        "Ingredients": ["Water", "Salt"],
        "Instructions": ["Boil", "Add salt"],
    }
)


def completion(content: str | None) -> dict[str, Any]:
    return {"choices": [{"message": {"role": "assistant", "content": content}}]}


class FakeProvider:
    """Stands in for the completion endpoint and remembers what it was sent."""

    def __init__(self, content: str | None = SOUP, status_code: int = 200) -> None:
        self.content = content
        self.status_code = status_code
        self.requests: list[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.status_code != 200:
            return httpx.Response(self.status_code, json={"error": "nope"})
        return httpx.Response(200, json=completion(self.content))

    @property
    def payloads(self) -> list[dict[str, Any]]:
        return [json.loads(r.content) for r in self.requests]


@pytest.fixture
def config(tmp_path: Path) -> Config:
    return Config(
        env=Env.dev,
        db_url=f"sqlite+aiosqlite:///{tmp_path / 'recipes.db'}",
        api_base_url=BASE_URL,
        openrouter_api_key="test-key",
        text_model="text-model",
        image_model="image-model",
    )


@pytest.fixture
def provider() -> FakeProvider:
    return FakeProvider()


@pytest.fixture
def llm(config: Config, provider: FakeProvider) -> LLMClient:
    client = httpx.AsyncClient(
        base_url=config.api_base_url,
        transport=httpx.MockTransport(provider),
    )
    return LLMClient(config, client=client)


@pytest_asyncio.fixture
async def repo(config: Config) -> AsyncIterator[RecipeRepository]:
    repo = RecipeRepository(Database(config.db_url))
    yield repo
    await repo.disconnect()
