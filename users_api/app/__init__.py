"""
Application package initializer.

This package contains the main entrypoint for the API and its
submodules.  The service layer (``services``) owns the in‑memory user
collection, the schemas (``schemas``) describe request and response
bodies, and the versioned routers under ``api`` translate HTTP
requests into service calls.
"""

from .main import app  # noqa: F401
