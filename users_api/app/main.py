"""
Main entrypoint for the Users API.

This module assembles the FastAPI application, sets up logging and
includes versioned routers.  The ``create_app`` function builds and
configures the app, which is then instantiated at module import time
as ``app``.  Run it with uvicorn or another ASGI server, e.g.::

    uvicorn users_api.app.main:app --reload

The in-memory ``UserStore`` is created here, once per application,
and stored on ``app.state`` where the ``get_user_store`` dependency
picks it up.
"""

import logging
from typing import Optional

from fastapi import FastAPI

from .core.config import Settings, settings
from .core.logging_config import setup_logging
from .api.v1.router import router as v1_router
from .services.user_store import UserStore


def create_app(store: Optional[UserStore] = None, app_settings: Optional[Settings] = None) -> FastAPI:
    """Create and configure a FastAPI application.

    Parameters
    ----------
    store : Optional[UserStore]
        Store backing the ``/users`` routes.  A new, empty store is
        created when omitted.
    app_settings : Optional[Settings]
        Settings to use instead of the module-level ``settings``.

    Returns
    -------
    FastAPI
        A configured FastAPI application instance.
    """
    cfg = app_settings or settings
    # Initialise logging before anything else so that the modules below
    # can safely log messages.
    setup_logging(cfg.log_level, cfg.log_file or None)

    app = FastAPI(title=cfg.project_name, version=cfg.api_version, debug=cfg.debug)
    app.state.settings = cfg
    app.state.user_store = store if store is not None else UserStore()

    app.include_router(v1_router, prefix=cfg.api_prefix)

    logging.getLogger(__name__).debug("Routes mounted under %r", cfg.api_prefix or "/")
    return app


# Create the application instance at import time so that tools such as
# uvicorn can discover it without calling create_app manually.
app = create_app()
