import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from .core.config import settings
from .core.database import close_pool, get_pool
from .routers import contact, orders, quotations

logging.basicConfig(
    level=settings.log_level.upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)


@asynccontextmanager
async def lifespan(app: FastAPI):
    await get_pool()  # Warm pool on startup
    yield
    await close_pool()


app = FastAPI(
    title="Portfolio Intake Backend",
    version="1.0.0",
    lifespan=lifespan,
)

DEFAULT_CORS_ORIGINS = [
    "http://localhost:3000",
    "http://127.0.0.1:3000",
]

configured_origins = settings.cors_origins or []
if "*" in configured_origins:
    allowed_origins = ["*"]
else:
    allowed_origins = list(dict.fromkeys(configured_origins + DEFAULT_CORS_ORIGINS))

app.add_middleware(
    CORSMiddleware,
    allow_origins=allowed_origins,
    allow_credentials="*" not in allowed_origins,
    allow_methods=["GET", "POST", "OPTIONS"],
    allow_headers=["*"],
)


app.include_router(quotations.router, prefix=settings.api_prefix, tags=["quotations"])
app.include_router(contact.router, prefix=settings.api_prefix, tags=["contact"])
app.include_router(orders.router, prefix=settings.api_prefix, tags=["orders"])


@app.get("/health")
async def health():
    return {"status": "ok"}
