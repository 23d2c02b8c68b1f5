"""
Persistence adapters.

Today everything lives in process memory; handlers receive the stores through
an explicit ``Stores`` bundle instead of importing module globals.
"""

from .memory import ArticleNotFoundError, ArticleStore, Stores, UserStore, build_stores

__all__ = ["ArticleNotFoundError", "ArticleStore", "Stores", "UserStore", "build_stores"]
