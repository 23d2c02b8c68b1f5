"""
Small article wiki served with FastAPI.

The ASGI app lives in ``wiki.app`` (``uvicorn wiki.app:app``); importing the
package itself builds nothing.
"""
