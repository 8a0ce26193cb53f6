from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from contextlib import asynccontextmanager

import logging

from online_library.core.config import settings
from online_library.database.db import engine, init_models
from online_library.routers.api import api_books, api_favorites

# ✅ Logging setup
logging.basicConfig(
    level=logging.INFO if not settings.DEBUG else logging.DEBUG,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)

tags_metadata = [
    {"name": "default", "description": "Service health"},
    {"name": "Books", "description": "Catalog; writes and export need the admin role"},
    {"name": "Favorites", "description": "Per-user bookmarks, any authenticated user"},
]


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifecycle"""
    # Startup
    logger.info(f"🚀 {settings.APP_NAME} starting up...")
    logger.info(f"📊 Debug mode: {settings.DEBUG}")
    logger.info(f"🔐 CORS origins: {settings.ALLOWED_ORIGINS}")
    await init_models(engine)

    yield

    # Shutdown
    logger.info(f"🛑 {settings.APP_NAME} shutting down...")
    await engine.dispose()


app = FastAPI(
    title=settings.APP_NAME,
    description="Online library: books, authors, genres and favorites",
    version="1.0.0",
    openapi_tags=tags_metadata,
    debug=settings.DEBUG,
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.ALLOWED_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# ✅ Health check endpoint
@app.get("/health", tags=["default"])
async def health_check():
    """API health"""
    return {"status": "healthy", "app": settings.APP_NAME, "version": app.version}


app.include_router(api_books.router)
app.include_router(api_favorites.router)


# uvicorn online_library.main:app --reload
# python -m online_library set-role user@example.com admin
