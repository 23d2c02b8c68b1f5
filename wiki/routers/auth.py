from __future__ import annotations

from wiki.core.routing import Redirect, Render, RouteTable, SessionChange, WikiRequest
from wiki.repositories.memory import Stores
from wiki.services.auth_service import AuthService, DuplicateUsernameError, InvalidCredentialsError

routes = RouteTable()

DUPLICATE_USERNAME_MESSAGE = "That username is already taken."


@routes.get("/login")
def login_form(request: WikiRequest, stores: Stores):
    return Render("login.html", {"error": False, "username": ""})


@routes.post("/login")
def login(request: WikiRequest, stores: Stores):
    service = AuthService(stores.users)
    username = request.form.get("username", "")
    try:
        result = service.login(username, request.form.get("password", ""))
    except InvalidCredentialsError:
        return Render("login.html", {"error": True, "username": username})
    return Redirect("/", session=SessionChange(result.state.user_id))


@routes.get("/logout")
def logout(request: WikiRequest, stores: Stores):
    service = AuthService(stores.users)
    state = service.logout(service.state_for(request.session_user_id))
    return Redirect("/", session=SessionChange(state.user_id))


@routes.get("/register")
def register_form(request: WikiRequest, stores: Stores):
    return Render("register.html", {"error": False, "username": ""})


@routes.post("/register")
def register(request: WikiRequest, stores: Stores):
    service = AuthService(stores.users)
    username = request.form.get("username", "")
    try:
        result = service.register(username, request.form.get("password", ""))
    except DuplicateUsernameError:
        return Render("register.html", {"error": DUPLICATE_USERNAME_MESSAGE, "username": username})
    return Redirect("/", session=SessionChange(result.state.user_id))


# Endpoint de cadastro da primeira versao, substituido por POST /register.
@routes.post("/users")
def create_user(request: WikiRequest, stores: Stores):
    return Render("not_implemented.html", {"path": request.path}, status_code=501)
