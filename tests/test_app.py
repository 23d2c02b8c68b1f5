"""
End-to-end checks through FastAPI's TestClient.
"""
from __future__ import annotations

import sys
from pathlib import Path

import pytest
from fastapi.testclient import TestClient

# Garante que o pacote wiki seja importável durante os testes locais
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from wiki.app import create_app  # noqa: E402
from wiki.core import config as core_config  # noqa: E402
from wiki.repositories.memory import build_stores  # noqa: E402


@pytest.fixture()
def stores():
    return build_stores()


@pytest.fixture()
def client(stores, monkeypatch):
    monkeypatch.delenv("SESSION_SECRET_KEYS", raising=False)
    monkeypatch.delenv("APP_ENV", raising=False)
    core_config.get_settings.cache_clear()
    with TestClient(create_app(stores)) as test_client:
        yield test_client
    core_config.get_settings.cache_clear()


def _login(client, username="hora", password="123"):
    return client.post("/login", data={"username": username, "password": password}, follow_redirects=False)


def test_index_lists_seed_articles(client):
    resp = client.get("/")
    assert resp.status_code == 200
    assert "How to use a wiki" in resp.text
    assert 'href="/articles/instructions"' in resp.text
    assert "Log in" in resp.text


def test_new_form_is_not_captured_by_article_wildcard(client):
    resp = client.get("/articles/new")
    assert resp.status_code == 200
    assert 'action="/articles"' in resp.text


def test_show_and_edit_existing_article(client):
    resp = client.get("/articles/instructions")
    assert resp.status_code == 200
    assert "To use this wiki" in resp.text

    edit = client.get("/articles/instructions/edit")
    assert edit.status_code == 200
    assert 'value="How to use a wiki"' in edit.text


def test_missing_article_is_404(client):
    resp = client.get("/articles/missing")
    assert resp.status_code == 404
    assert "Article not found" in resp.text
    assert client.get("/articles/missing/edit").status_code == 404


def test_create_update_delete_flow(client, stores):
    resp = client.post("/articles", data={"title": "Test Article", "content": "body"}, follow_redirects=False)
    assert resp.status_code == 303
    assert resp.headers["location"] == "/articles/Test"
    assert "Test Article" in client.get("/articles/Test").text

    resp = client.post("/articles/Test", data={"title": "Other Title", "content": "new body"}, follow_redirects=False)
    assert resp.status_code == 303
    assert resp.headers["location"] == "/articles/Test"
    assert "Other Title" in client.get("/articles/Test").text
    assert client.get("/articles/Other").status_code == 404

    resp = client.post("/articles/Test/delete", follow_redirects=False)
    assert resp.status_code == 303
    assert resp.headers["location"] == "/"
    assert client.get("/articles/Test").status_code == 404
    assert client.post("/articles/Test/delete", follow_redirects=False).status_code == 303
    assert "Test" not in stores.articles


def test_create_with_empty_title_is_rejected(client, stores):
    resp = client.post("/articles", data={"title": "", "content": "body"}, follow_redirects=False)
    assert resp.status_code == 400
    assert len(stores.articles) == 2


def test_create_with_slash_in_derived_id_is_rejected(client, stores):
    resp = client.post("/articles", data={"title": "a/b notes", "content": "body"}, follow_redirects=False)
    assert resp.status_code == 400
    assert "must start with a word" in resp.text
    assert "a/b" not in stores.articles
    assert len(stores.articles) == 2


def test_login_sets_signed_session_cookie(client):
    resp = _login(client)
    assert resp.status_code == 303
    assert resp.headers["location"] == "/"
    cookie = resp.headers["set-cookie"]
    assert cookie.startswith("session=")
    assert "Max-Age=86400" in cookie
    assert "HttpOnly" in cookie

    page = client.get("/")
    assert "Logged in as <b>hora</b>" in page.text


def test_failed_login_shows_error_and_sets_no_cookie(client):
    resp = _login(client, password="wrong")
    assert resp.status_code == 200
    assert "Invalid username or password" in resp.text
    assert "set-cookie" not in resp.headers
    assert "Logged in as" not in client.get("/").text


def test_logout_twice_ends_anonymous(client):
    _login(client)
    for _ in range(2):
        resp = client.get("/logout", follow_redirects=False)
        assert resp.status_code == 302
        assert resp.headers["location"] == "/"
    page = client.get("/")
    assert "Logged in as" not in page.text
    assert "Log in" in page.text


def test_register_logs_in_and_rejects_duplicate(client, stores):
    resp = client.post("/register", data={"username": "kai", "password": "pw"}, follow_redirects=False)
    assert resp.status_code == 303
    assert resp.headers["location"] == "/"
    assert "Logged in as <b>kai</b>" in client.get("/").text

    dup = client.post("/register", data={"username": "kai", "password": "pw"}, follow_redirects=False)
    assert dup.status_code == 200
    assert "already taken" in dup.text
    assert len(stores.users) == 3


def test_tampered_cookie_is_anonymous(client):
    client.cookies.set("session", "forged.value.sig")
    resp = client.get("/")
    assert resp.status_code == 200
    assert "Logged in as" not in resp.text


def test_session_for_unknown_user_is_anonymous(client, stores):
    client.post("/register", data={"username": "kai", "password": "pw"}, follow_redirects=False)
    # Simula reinicio do processo: stores novos, cookie antigo continua valido.
    client.app.state.stores = build_stores()
    assert "Logged in as" not in client.get("/").text


def test_legacy_users_route_answers_501(client):
    resp = client.post("/users", data={"username": "x", "password": "y"})
    assert resp.status_code == 501


def test_stylesheet_is_served(client):
    resp = client.get("/static/wiki.css")
    assert resp.status_code == 200
