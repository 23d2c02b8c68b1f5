"""
Ordered route table shared by the wiki routers.

Handlers are plain functions ``(WikiRequest, Stores) -> Outcome``: they never
touch FastAPI objects or cookies. The table is an ordered list and the first
matching (method, pattern) wins, so a literal path such as ``/articles/new``
has to be registered before ``/articles/:id``.

``RouteTable.mount`` registers the same patterns on a FastAPI router, in the
same order, so Starlette only answers for paths the table knows. Every mounted
endpoint then hands the request back to ``RouteTable.dispatch``: the handler
and its path params always come from this table, matched against the decoded
request path.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Iterator, List, Optional, Tuple, Union

from fastapi import APIRouter, Request
from fastapi.responses import HTMLResponse, RedirectResponse, Response

from wiki.repositories.memory import Stores
from wiki.services.session_service import (
    clear_session_cookie,
    current_user_id,
    issue_session,
    set_session_cookie,
)

_PARAM = re.compile(r"^:([A-Za-z_][A-Za-z0-9_]*)$")


@dataclass
class WikiRequest:
    method: str
    path: str
    path_params: Dict[str, str] = field(default_factory=dict)
    form: Dict[str, str] = field(default_factory=dict)
    session_user_id: Optional[str] = None


@dataclass(frozen=True)
class SessionChange:
    """New session payload; ``user_id=None`` clears the session."""

    user_id: Optional[str]


@dataclass
class Render:
    view: str
    context: Dict[str, Any] = field(default_factory=dict)
    status_code: int = 200
    session: Optional[SessionChange] = None


@dataclass
class Redirect:
    location: str
    session: Optional[SessionChange] = None


Outcome = Union[Render, Redirect]
Handler = Callable[[WikiRequest, Stores], Outcome]


class RouteNotFoundError(LookupError):
    def __init__(self, method: str, path: str):
        super().__init__(f"No route for {method} {path}")
        self.method = method
        self.path = path


def _compile(pattern: str) -> Tuple["re.Pattern[str]", str]:
    """Build the matcher regex and the FastAPI path (``:id`` -> ``{id}``)."""
    if pattern == "/":
        return re.compile(r"^/$"), "/"
    regex_parts: List[str] = []
    path_parts: List[str] = []
    for segment in pattern.strip("/").split("/"):
        param = _PARAM.match(segment)
        if param:
            name = param.group(1)
            regex_parts.append(f"(?P<{name}>[^/]+)")
            path_parts.append("{" + name + "}")
        else:
            regex_parts.append(re.escape(segment))
            path_parts.append(segment)
    return re.compile("^/" + "/".join(regex_parts) + "$"), "/" + "/".join(path_parts)


@dataclass(frozen=True)
class Route:
    method: str
    pattern: str
    handler: Handler
    regex: "re.Pattern[str]"
    path: str

    @classmethod
    def build(cls, method: str, pattern: str, handler: Handler) -> "Route":
        regex, path = _compile(pattern)
        return cls(method=method.upper(), pattern=pattern, handler=handler, regex=regex, path=path)

    @property
    def name(self) -> str:
        return getattr(self.handler, "__name__", self.pattern)

    def match(self, method: str, path: str) -> Optional[Dict[str, str]]:
        if method.upper() != self.method:
            return None
        found = self.regex.match(path)
        if not found:
            return None
        return found.groupdict()


class RouteTable:
    """Ordered list of routes; first match wins."""

    def __init__(self) -> None:
        self._routes: List[Route] = []

    def __iter__(self) -> Iterator[Route]:
        return iter(self._routes)

    def __len__(self) -> int:
        return len(self._routes)

    def add(self, method: str, pattern: str, handler: Handler) -> Handler:
        self._routes.append(Route.build(method, pattern, handler))
        return handler

    def get(self, pattern: str) -> Callable[[Handler], Handler]:
        return lambda handler: self.add("GET", pattern, handler)

    def post(self, pattern: str) -> Callable[[Handler], Handler]:
        return lambda handler: self.add("POST", pattern, handler)

    def extend(self, other: "RouteTable") -> "RouteTable":
        self._routes.extend(other)
        return self

    def match(self, method: str, path: str) -> Optional[Tuple[Route, Dict[str, str]]]:
        for route in self._routes:
            params = route.match(method, path)
            if params is not None:
                return route, params
        return None

    def dispatch(self, request: WikiRequest, stores: Stores) -> Outcome:
        found = self.match(request.method, request.path)
        if found is None:
            raise RouteNotFoundError(request.method, request.path)
        route, params = found
        request.path_params = params
        return route.handler(request, stores)

    def mount(self, router: APIRouter) -> APIRouter:
        for route in self._routes:
            router.add_api_route(
                route.path,
                _endpoint_for(self, route.name),
                methods=[route.method],
                name=route.name,
                response_class=HTMLResponse,
                include_in_schema=False,
            )
        return router


async def _read_form(request: Request) -> Dict[str, str]:
    if request.method != "POST":
        return {}
    data = await request.form()
    return {key: value for key, value in data.items() if isinstance(value, str)}


def _endpoint_for(table: RouteTable, name: str):
    async def endpoint(request: Request) -> Response:
        wiki_request = WikiRequest(
            method=request.method,
            path=request.scope["path"],
            form=await _read_form(request),
            session_user_id=current_user_id(request),
        )
        outcome = table.dispatch(wiki_request, request.app.state.stores)
        return respond(request, outcome, session_user_id=wiki_request.session_user_id)

    endpoint.__name__ = name
    return endpoint


def respond(request: Request, outcome: Outcome, *, session_user_id: Optional[str] = None) -> Response:
    """Turn a handler outcome into a FastAPI response, writing the session cookie if it changed."""
    change = outcome.session
    if change is not None:
        session_user_id = change.user_id

    if isinstance(outcome, Redirect):
        status = 303 if request.method == "POST" else 302
        response: Response = RedirectResponse(outcome.location, status_code=status)
    else:
        stores: Stores = request.app.state.stores
        context = dict(outcome.context)
        context.setdefault("current_user", stores.users.get_by_id(session_user_id))
        templates = request.app.state.templates
        response = templates.TemplateResponse(request, outcome.view, context, status_code=outcome.status_code)

    if change is not None:
        if change.user_id is None:
            clear_session_cookie(response)
        else:
            set_session_cookie(response, issue_session(change.user_id))
    return response
