import os
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import PlainTextResponse

from core import errors, log
from core.db import Database
from words.router import router as words_router

DEFAULT_PORT = 3001


def cors_allow_origins() -> list[str]:
    raw = os.environ.get("CORS_ALLOW_ORIGINS", "*")
    origins = [o.strip() for o in raw.split(",") if o.strip()]
    return origins or ["*"]


@asynccontextmanager
async def lifespan(app: FastAPI):
    # One pool per process, released on shutdown.
    database = Database.from_env()
    await database.connect()
    app.state.db = database
    try:
        yield
    finally:
        await database.close()


def create_app() -> FastAPI:
    log.configure_logging()

    app = FastAPI(title="Dictionary API", lifespan=lifespan)

    errors.register_exception_handlers(app)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=cors_allow_origins(),
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(words_router, tags=["words"])

    @app.get("/health")
    def health() -> dict:
        return {"status": "ok"}

    @app.get("/", response_class=PlainTextResponse)
    def root() -> str:
        return "Dictionary API Running"

    return app


app = create_app()


def run() -> None:
    host = os.environ.get("APP_HOST", "").strip() or "0.0.0.0"
    try:
        port = int(os.environ.get("APP_PORT", "").strip() or DEFAULT_PORT)
    except ValueError:
        port = DEFAULT_PORT
    uvicorn.run(app, host=host, port=port)


if __name__ == "__main__":
    run()
