import os
from pathlib import Path

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import FileResponse, JSONResponse
from fastapi.staticfiles import StaticFiles

from backend.routes import router
from oneshot_forge.bestiary import BestiaryClient
from oneshot_forge.config import Settings, load_settings
from oneshot_forge.endpoint import MISSING_FIELDS_MESSAGE
from oneshot_forge.errors import GenerationFailed, InvalidRequest
from oneshot_forge.loot import LootClient

STATIC_DIR = Path(__file__).parent / "static"


def create_app(settings: Settings | None = None) -> FastAPI:
    settings = settings or load_settings()

    app = FastAPI(title="One-Shot Forge")
    app.state.settings = settings
    app.state.bestiary = BestiaryClient(settings.bestiary_url, timeout=settings.http_timeout)
    app.state.loot = LootClient(
        settings.loot_url,
        page_size=settings.loot_page_size,
        timeout=settings.http_timeout,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.exception_handler(InvalidRequest)
    async def invalid_request(request: Request, exc: InvalidRequest):
        return JSONResponse({"error": str(exc)}, status_code=400)

    # Undecodable bodies never reach the endpoint; answer them like a missing field.
    @app.exception_handler(RequestValidationError)
    async def unreadable_request(request: Request, exc: RequestValidationError):
        return JSONResponse({"error": MISSING_FIELDS_MESSAGE}, status_code=400)

    @app.exception_handler(GenerationFailed)
    async def generation_failed(request: Request, exc: GenerationFailed):
        return JSONResponse({"error": str(exc)}, status_code=500)

    app.include_router(router, prefix="/api")

    if STATIC_DIR.exists() and not os.getenv("VITE_DEV", ""):
        # Serve static assets (JS, CSS, etc.)
        app.mount("/assets", StaticFiles(directory=STATIC_DIR / "assets"), name="assets")

        # SPA fallback: all non-API routes serve index.html
        @app.get("/{path:path}")
        async def spa_fallback(path: str):
            return FileResponse(STATIC_DIR / "index.html")

    return app


# Default app instance for uvicorn (settings from env / .env)
app = create_app()
