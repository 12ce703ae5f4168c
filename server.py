"""FastAPI entry point for the Cardex catalogue API and browser pages."""

from __future__ import annotations

import contextlib
import logging
from pathlib import Path

from dotenv import load_dotenv
from fastapi import FastAPI, Request
from fastapi.staticfiles import StaticFiles
from starlette.middleware.base import BaseHTTPMiddleware

load_dotenv(Path(__file__).resolve().with_name(".env"))

from cardex_web import config
from cardex_web.database import dispose_engine, init_db
from cardex_web.errors import register_error_handlers
from cardex_web.routes import artists, cards, pages

logger = logging.getLogger(__name__)


@contextlib.asynccontextmanager
async def lifespan(app: FastAPI):
    config.configure_logging()
    init_db()
    logger.info("Cardex API started")
    try:
        yield
    finally:
        dispose_engine()
        logger.info("Cardex API stopped")


class SecurityHeadersMiddleware(BaseHTTPMiddleware):
    """Inject strict security headers for every HTTP response."""

    async def dispatch(self, request: Request, call_next):  # type: ignore[override]
        response = await call_next(request)
        response.headers.setdefault("X-Content-Type-Options", "nosniff")
        response.headers.setdefault("X-Frame-Options", "DENY")
        response.headers.setdefault("Referrer-Policy", "strict-origin-when-cross-origin")
        response.headers.setdefault("Cross-Origin-Opener-Policy", "same-origin")
        response.headers.setdefault(
            "Content-Security-Policy",
            "default-src 'self'; "
            "script-src 'self'; "
            "style-src 'self' 'unsafe-inline'; "
            "img-src 'self' data:; "
            "connect-src 'self'; "
            "frame-ancestors 'none';",
        )
        return response


app = FastAPI(title="Cardex", version="1.0.0", lifespan=lifespan)
app.add_middleware(SecurityHeadersMiddleware)
register_error_handlers(app)
app.include_router(artists.router)
app.include_router(cards.router)
app.include_router(pages.router)

app.mount("/static", StaticFiles(directory=str(pages.STATIC_DIR)), name="static")


@app.get("/health")
def health() -> dict[str, str]:
    return {"status": "ok"}


def run() -> None:
    """Helper to run the development server."""

    import uvicorn

    uvicorn.run("server:app", host="0.0.0.0", port=8000, reload=False)


if __name__ == "__main__":
    run()
