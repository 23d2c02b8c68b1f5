"""
In-memory stores for articles and users.

Nothing here survives a restart. Access is single-threaded (one request at a
time on the event loop), so the dicts are mutated in place without locks.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Dict, Iterable, Optional

from wiki.domain.articles import Article, derive_article_id
from wiki.domain.users import DuplicateUsernameError, User

logger = logging.getLogger(__name__)

SEED_ARTICLES = (
    Article(
        id="wiki",
        title="The meaning of the word 'wiki'",
        content="'Wiki' means 'quick' in Olelo Hawai'i.",
    ),
    Article(
        id="instructions",
        title="How to use a wiki",
        content="To use this wiki, add a new article from the home page, or click into any article to read, edit or delete it.",
    ),
)

SEED_USERS = (
    ("hora", "123"),
    ("lani", "456"),
)


class ArticleNotFoundError(LookupError):
    def __init__(self, article_id: str):
        super().__init__(f"Article {article_id!r} not found")
        self.article_id = article_id


class ArticleStore:
    """Mapping of article id -> Article."""

    def __init__(self, articles: Iterable[Article] = ()) -> None:
        self._articles: Dict[str, Article] = {}
        for article in articles:
            self._articles[article.id] = Article(article.id, article.title, article.content)

    def __len__(self) -> int:
        return len(self._articles)

    def __contains__(self, article_id: object) -> bool:
        return article_id in self._articles

    def list(self) -> Dict[str, Article]:
        return dict(self._articles)

    def get(self, article_id: str) -> Optional[Article]:
        return self._articles.get(article_id)

    def require(self, article_id: str) -> Article:
        article = self.get(article_id)
        if article is None:
            raise ArticleNotFoundError(article_id)
        return article

    def create(self, title: str, content: str) -> str:
        """Store a new article under the id derived from its title; an existing id is overwritten."""
        article_id = derive_article_id(title)
        self._articles[article_id] = Article(id=article_id, title=title, content=content)
        logger.debug("article created id=%s", article_id)
        return article_id

    def update(self, article_id: str, title: str, content: str) -> Article:
        # id fica fixo: nao e derivado novamente do titulo
        article = Article(id=article_id, title=title, content=content)
        self._articles[article_id] = article
        logger.debug("article updated id=%s", article_id)
        return article

    def delete(self, article_id: str) -> None:
        if self._articles.pop(article_id, None) is not None:
            logger.debug("article deleted id=%s", article_id)


class UserStore:
    """Mapping of user id -> User plus a monotonic id counter."""

    def __init__(self, users: Iterable[tuple[str, str]] = ()) -> None:
        self._users: Dict[str, User] = {}
        self._next_id = 1
        for username, password in users:
            self.register(username, password)

    def __len__(self) -> int:
        return len(self._users)

    @property
    def next_id(self) -> int:
        return self._next_id

    def get_by_id(self, user_id: Optional[str]) -> Optional[User]:
        if not user_id:
            return None
        return self._users.get(user_id)

    def find_by_credentials(self, username: str, password: str) -> Optional[User]:
        for user in self._users.values():
            if user.username == username and user.password == password:
                return user
        return None

    def find_by_username(self, username: str) -> Optional[User]:
        for user in self._users.values():
            if user.username == username:
                return user
        return None

    def register(self, username: str, password: str) -> User:
        """Create a user with the next id; usernames are unique (case-sensitive)."""
        if self.find_by_username(username) is not None:
            raise DuplicateUsernameError(username)
        user_id = str(self._next_id)
        self._next_id += 1
        user = User(id=user_id, username=username, password=password)
        self._users[user_id] = user
        return user


@dataclass
class Stores:
    articles: ArticleStore = field(default_factory=ArticleStore)
    users: UserStore = field(default_factory=UserStore)


def build_stores(seed: bool = True) -> Stores:
    """Fresh stores for one process (or one test)."""
    if not seed:
        return Stores()
    return Stores(articles=ArticleStore(SEED_ARTICLES), users=UserStore(SEED_USERS))
