import os
from typing import Optional

from fastapi import APIRouter, FastAPI, Request
from fastapi.staticfiles import StaticFiles
from fastapi.templating import Jinja2Templates

from wiki.core.routing import Render, respond
from wiki.repositories.memory import ArticleNotFoundError, Stores, build_stores
from wiki.routers import build_route_table
from wiki.services.session_service import current_user_id

BASE = os.path.dirname(__file__)
TEMPLATES_DIR = os.path.join(BASE, "templates")
STATIC_DIR = os.path.join(BASE, "static")


def create_app(stores: Optional[Stores] = None) -> FastAPI:
    """Factory compatible with uvicorn (``uvicorn wiki.app:create_app --factory``)."""
    app = FastAPI(title="Wiki", docs_url=None, redoc_url=None, openapi_url=None)
    app.mount("/static", StaticFiles(directory=STATIC_DIR), name="static")
    app.state.templates = Jinja2Templates(directory=TEMPLATES_DIR)
    app.state.stores = stores if stores is not None else build_stores()

    router = APIRouter(tags=["wiki"])
    build_route_table().mount(router)
    app.include_router(router)

    @app.exception_handler(ArticleNotFoundError)
    async def article_not_found(request: Request, exc: ArticleNotFoundError):
        outcome = Render("not_found.html", {"article_id": exc.article_id}, status_code=404)
        return respond(request, outcome, session_user_id=current_user_id(request))

    return app


app = create_app()
