"""Pokedex API — FastAPI application entry point.

Invariants:
    - Routes registered explicitly (no auto-discovery)
    - Global error handlers map PokedexError → structured JSON responses
    - CORS configured from settings (not hardcoded)
    - Dataset store and ability cache created in the lifespan; the dataset
      itself loads lazily on the first request that needs it
    - The upstream HTTP client is closed on shutdown

Design Decisions:
    - Lifespan over @app.on_event: FastAPI recommended pattern, cleaner cleanup
"""

import logging
from contextlib import asynccontextmanager

import httpx
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from pokedex.api.error_handlers import register_error_handlers
from pokedex.api.routes import abilities, generations, health, pokemon
from pokedex.config import get_settings
from pokedex.infrastructure.ability_client import init_ability_cache
from pokedex.infrastructure.dataset_store import init_store
from pokedex.infrastructure.observability import setup_logging

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup/shutdown lifecycle."""
    settings = get_settings()
    setup_logging(settings.log_level, settings.log_format)
    init_store(settings.data_path)
    timeout = settings.ability_fetch_timeout_seconds
    async with httpx.AsyncClient(
        timeout=timeout, follow_redirects=True,
    ) as client:
        init_ability_cache(client, timeout)
        logger.info("Pokedex API started")
        yield
    logger.info("Pokedex API shutting down")


app = FastAPI(
    title="Pokedex API", version="1.0.0", lifespan=lifespan,
)

settings = get_settings()
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(health.router)
app.include_router(pokemon.router)
app.include_router(generations.router)
app.include_router(abilities.router)

register_error_handlers(app)
