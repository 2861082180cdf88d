from __future__ import annotations

import logging

from fastapi import FastAPI

from .config import get_log_level
from .middleware import SessionMiddleware
from .routes import tree, viewport

logging.basicConfig(
    level=get_log_level(),
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    datefmt="%Y-%m-%d %H:%M:%S",
)

app = FastAPI(title="Family Tree API", version="0.0.1")
app.add_middleware(SessionMiddleware)

app.include_router(tree.router)
app.include_router(viewport.router)


@app.get("/health")
def health() -> dict[str, str]:
    return {"status": "ok"}
