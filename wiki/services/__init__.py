"""
High-level use cases for the wiki.

Handlers call these services instead of manipulating cookies or the user
store directly.
"""
