import contextlib
import functools
import logging
from typing import Any, AsyncIterator, Awaitable, Callable

from databases import Database
from jinja2 import Environment, FileSystemLoader, select_autoescape
from starlette.applications import Starlette
from starlette.datastructures import UploadFile
from starlette.exceptions import HTTPException
from starlette.requests import Request
from starlette.responses import HTMLResponse, RedirectResponse, Response
from starlette.routing import Route

from app.html.recipe_detail import RecipeDetail
from reseptimasiina import config
from reseptimasiina.db import RecipeRepository
from reseptimasiina.llm import LLMClient
from reseptimasiina.logs import setup_logging
from reseptimasiina.services import RecipeMachine


logger = logging.getLogger(__name__)


NO_IMAGE = "Choose an image first"


def aHTMLResponse(route: Callable[..., Awaitable[str | tuple[str, int]]]):
    @functools.wraps(route)
    async def wrapper(*args: Any, **kwargs: Any) -> HTMLResponse:
        resp = await route(*args, **kwargs)
        if not isinstance(resp, tuple):
            html, code = resp, 200
        else:
            html, code = resp
        return HTMLResponse(html, status_code=code)

    return wrapper


def templates(request: Request) -> Environment:
    return request.app.state.templates


@aHTMLResponse
async def homepage(request: Request) -> str:
    return templates(request).get_template("index.html").render()


async def ingredients(request: Request) -> Response:
    template = templates(request).get_template("ingredients.html")
    match request.method.lower():
        case "get":
            return HTMLResponse(template.render(ingredients=[], recipe=None))
        case "post":
            async with request.form() as form:
                given = [str(i) for i in form.getlist("ingredient")]
            machine: RecipeMachine = request.app.state.machine
            recipe = await machine.recipe_from_ingredients(given)
            if await request.is_disconnected():
                logger.info("Client left before the recipe was ready.")
                return Response(status_code=204)
            return HTMLResponse(
                template.render(
                    ingredients=[i for i in given if i.strip()],
                    recipe=recipe,
                )
            )
        case _:
            raise ValueError("Unsupported method.")


async def image(request: Request) -> Response:
    template = templates(request).get_template("image.html")
    match request.method.lower():
        case "get":
            return HTMLResponse(template.render(prompt="", recipe=None))
        case "post":
            async with request.form() as form:
                prompt = str(form.get("prompt", ""))
                upload = form.get("image")
                data = b""
                if isinstance(upload, UploadFile) and upload.size:
                    # Read inside the form context, the file is closed after.
                    data = await upload.read()
            if not data:
                return HTMLResponse(template.render(prompt=prompt, recipe=NO_IMAGE))
            machine: RecipeMachine = request.app.state.machine
            recipe = await machine.recipe_from_image(data, prompt)
            if await request.is_disconnected():
                logger.info("Client left before the recipe was ready.")
                return Response(status_code=204)
            return HTMLResponse(template.render(prompt=prompt, recipe=recipe))
        case _:
            raise ValueError("Unsupported method.")


@aHTMLResponse
async def recipe_list(request: Request) -> str:
    repo: RecipeRepository = request.app.state.repo
    recipes = await repo.list()
    return templates(request).get_template("recipe-list.html").render(recipes=recipes)


@aHTMLResponse
async def recipe_detail(request: Request) -> str:
    id = request.path_params["id"]
    repo: RecipeRepository = request.app.state.repo
    recipe = await repo.get(id)
    if recipe is None:
        raise HTTPException(status_code=404, detail=f"No recipe {id}")
    return RecipeDetail(recipe, environment=templates(request)).render()


async def delete_recipe(request: Request) -> RedirectResponse:
    id = request.path_params["id"]
    repo: RecipeRepository = request.app.state.repo
    n = await repo.delete(id)
    logger.info("Deleted %s recipe(s) with id %s", n, id)
    return RedirectResponse("/recipes/", status_code=303)


async def delete_recipes(request: Request) -> RedirectResponse:
    repo: RecipeRepository = request.app.state.repo
    n = await repo.delete_all()
    logger.info("Deleted %s recipe(s)", n)
    return RedirectResponse("/recipes/", status_code=303)


@contextlib.asynccontextmanager
async def lifespan(app: Starlette) -> AsyncIterator[None]:
    await app.state.repo.connect()
    yield
    await app.state.machine.drain()
    await app.state.repo.disconnect()
    if app.state.owns_llm:
        await app.state.llm.aclose()


def create_app(
    conf: config.Config | None = None,
    *,
    llm: LLMClient | None = None,
) -> Starlette:
    conf = config.Config() if conf is None else conf
    setup_logging(conf)

    app = Starlette(
        debug=True if conf.env == config.Env.local else False,
        routes=[
            Route("/", homepage),
            Route("/ingredients", ingredients, methods=["GET", "POST"]),
            Route("/image", image, methods=["GET", "POST"]),
            Route("/recipes/", recipe_list),
            Route("/recipes/delete", delete_recipes, methods=["POST"]),
            Route("/recipes/{id:int}", recipe_detail),
            Route("/recipes/{id:int}/delete", delete_recipe, methods=["POST"]),
        ],
        lifespan=lifespan,
    )

    app.state.config = conf
    app.state.templates = Environment(
        loader=FileSystemLoader(conf.templates_dir),
        autoescape=select_autoescape(),
    )
    app.state.repo = RecipeRepository(Database(conf.db_url))
    app.state.owns_llm = llm is None
    app.state.llm = LLMClient(conf) if llm is None else llm
    app.state.machine = RecipeMachine(repository=app.state.repo, llm=app.state.llm)
    return app
