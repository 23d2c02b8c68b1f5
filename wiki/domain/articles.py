"""Article record and identifier rules."""
from __future__ import annotations

import re
from dataclasses import dataclass

_WHITESPACE = re.compile(r"\s")


class InvalidArticleTitleError(ValueError):
    """Raised when a title does not yield a usable identifier."""


@dataclass
class Article:
    id: str
    title: str
    content: str


def derive_article_id(title: str | None) -> str:
    """Return the part of ``title`` before its first whitespace character.

    "Test Article" -> "Test". The id is a single URL path segment, so a title
    that would produce an empty id (empty, or starting with whitespace) or an id
    containing "/" is rejected.
    """
    value = title or ""
    article_id = _WHITESPACE.split(value, 1)[0]
    if not article_id or "/" in article_id:
        raise InvalidArticleTitleError("Title does not yield a valid identifier")
    return article_id
