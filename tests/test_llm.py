import httpx
import pytest

from reseptimasiina.config import Config
from reseptimasiina.llm import (
    ChatMsg,
    LLMClient,
    completion_content,
    image_messages,
    openrouter_client,
    text_messages,
)

from tests.conftest import BASE_URL, SOUP, FakeProvider, completion


def test_text_messages() -> None:
    messages = text_messages(["Water", "Salt"])
    assert len(messages) == 1
    assert messages[0].role == "user"
    assert "Water, Salt" in messages[0].content
    for key in ("Title", "Description", "Ingredients", "Instructions"):
        assert key in messages[0].content


def test_image_messages() -> None:
    messages = image_messages("aGVsbG8=", "vegan please")
    assert [m.role for m in messages] == ["system", "user"]
    assert "Instructions" in messages[0].content
    assert messages[1].content == (
        "Analyze this image: data:image/jpeg;base64,aGVsbG8=\n"
        "Additional prompt: vegan please"
    )


def test_chat_msg_to_dict() -> None:
    assert ChatMsg(role="user", content="Hi").to_dict() == {
        "role": "user",
        "content": "Hi",
    }


def test_openrouter_client_headers(config: Config) -> None:
    client = openrouter_client(config)
    assert client.headers["Authorization"] == "Bearer test-key"
    assert client.headers["Content-Type"] == "application/json"
    assert client.headers["X-Title"] == "Reseptimasiina"
    assert "HTTP-Referer" not in client.headers
    assert str(client.base_url) == BASE_URL


def test_openrouter_client_referer(config: Config) -> None:
    config.app_referer = "https://reseptimasiina.example"
    client = openrouter_client(config)
    assert client.headers["HTTP-Referer"] == "https://reseptimasiina.example"


@pytest.mark.parametrize(
    "body,expected",
    (
        (completion("hello"), "hello"),
        (completion(None), None),
        ({"choices": []}, None),
        ({"error": {"message": "rate limited"}}, None),
        ([], None),
    ),
)
def test_completion_content(body: object, expected: str | None) -> None:
    assert completion_content(body) == expected


@pytest.mark.asyncio
async def test_recipe_from_ingredients(llm: LLMClient, provider: FakeProvider) -> None:
    got = await llm.recipe_from_ingredients(["Water", "Salt"])
    assert got == SOUP

    (request,) = provider.requests
    assert request.method == "POST"
    assert str(request.url) == f"{BASE_URL}chat/completions"
    (payload,) = provider.payloads
    assert payload["model"] == "text-model"
    assert payload["messages"] == [m.to_dict() for m in text_messages(["Water", "Salt"])]


@pytest.mark.asyncio
async def test_recipe_from_image(llm: LLMClient, provider: FakeProvider) -> None:
    got = await llm.recipe_from_image("aGVsbG8=", "")
    assert got == SOUP

    (payload,) = provider.payloads
    assert payload["model"] == "image-model"
    assert [m["role"] for m in payload["messages"]] == ["system", "user"]
    assert "data:image/jpeg;base64,aGVsbG8=" in payload["messages"][1]["content"]


@pytest.mark.asyncio
async def test_content_is_passed_on_untouched(
    llm: LLMClient, provider: FakeProvider
) -> None:
    provider.content = "  ```json\n{}\n```  \n"
    assert await llm.recipe_from_ingredients(["Water"]) == "  ```json\n{}\n```  \n"


@pytest.mark.asyncio
@pytest.mark.parametrize("status_code", (400, 401, 429, 500, 503))
async def test_http_error_status(
    llm: LLMClient, provider: FakeProvider, status_code: int
) -> None:
    provider.status_code = status_code
    assert await llm.recipe_from_ingredients(["Water"]) is None


@pytest.mark.asyncio
async def test_transport_error(config: Config) -> None:
    def refuse(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("no network", request=request)

    client = httpx.AsyncClient(base_url=BASE_URL, transport=httpx.MockTransport(refuse))
    llm = LLMClient(config, client=client)
    assert await llm.recipe_from_ingredients(["Water"]) is None
    await llm.aclose()


@pytest.mark.asyncio
async def test_body_is_not_json(config: Config) -> None:
    def garbage(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, text="<html>oops</html>")

    client = httpx.AsyncClient(base_url=BASE_URL, transport=httpx.MockTransport(garbage))
    llm = LLMClient(config, client=client)
    assert await llm.recipe_from_ingredients(["Water"]) is None


@pytest.mark.asyncio
async def test_no_choices(config: Config) -> None:
    def empty(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, json={"choices": []})

    client = httpx.AsyncClient(base_url=BASE_URL, transport=httpx.MockTransport(empty))
    llm = LLMClient(config, client=client)
    assert await llm.recipe_from_ingredients(["Water"]) is None
