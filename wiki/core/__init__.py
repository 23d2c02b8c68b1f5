"""
Core utilities shared across the wiki app.

This package hosts configuration, logging setup and the route table that the
routers register their handlers on.
"""
