from __future__ import annotations

from urllib.parse import quote

from wiki.core.routing import Redirect, Render, RouteTable, WikiRequest
from wiki.domain.articles import InvalidArticleTitleError
from wiki.repositories.memory import Stores

routes = RouteTable()


def _article_path(article_id: str) -> str:
    return f"/articles/{quote(article_id, safe='')}"


@routes.get("/")
def index(request: WikiRequest, stores: Stores):
    return Render("index.html", {"articles": stores.articles.list()})


# Precisa vir antes de /articles/:id, senao "new" seria lido como id.
@routes.get("/articles/new")
def new_article(request: WikiRequest, stores: Stores):
    return Render("new.html", {"error": False, "title": "", "content": ""})


@routes.get("/articles/:id")
def show_article(request: WikiRequest, stores: Stores):
    article = stores.articles.require(request.path_params["id"])
    return Render("show.html", {"article": article})


@routes.get("/articles/:id/edit")
def edit_article(request: WikiRequest, stores: Stores):
    article = stores.articles.require(request.path_params["id"])
    return Render("edit.html", {"article": article})


@routes.post("/articles")
def create_article(request: WikiRequest, stores: Stores):
    title = request.form.get("title", "")
    content = request.form.get("content", "")
    try:
        article_id = stores.articles.create(title, content)
    except InvalidArticleTitleError:
        return Render("new.html", {"error": True, "title": title, "content": content}, status_code=400)
    return Redirect(_article_path(article_id))


@routes.post("/articles/:id")
def update_article(request: WikiRequest, stores: Stores):
    article_id = request.path_params["id"]
    stores.articles.update(article_id, request.form.get("title", ""), request.form.get("content", ""))
    return Redirect(_article_path(article_id))


@routes.post("/articles/:id/delete")
def delete_article(request: WikiRequest, stores: Stores):
    stores.articles.delete(request.path_params["id"])
    return Redirect("/")
