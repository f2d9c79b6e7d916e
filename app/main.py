import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware

from app.api.responses import problem
from app.config import get_settings
from app.database import AsyncSessionLocal, engine
from app.seed import seed_data

settings = get_settings()

logging.basicConfig(
    level=settings.log_level.upper(),
    format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Startup
    if settings.seed_on_startup:
        async with AsyncSessionLocal() as session:
            await seed_data(session, settings.seed_tournament_count)
    yield
    # Shutdown
    await engine.dispose()


app = FastAPI(
    title="Tournaments API",
    description="Tournament and game scheduling API",
    version="1.0.0",
    lifespan=lifespan,
)

# CORS
_origins = (
    settings.allowed_origins.split(",")
    if settings.allowed_origins != "*"
    else ["*"]
)
app.add_middleware(
    CORSMiddleware,
    allow_origins=_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
    expose_headers=["X-Pagination", "Location"],
)


@app.exception_handler(Exception)
async def unhandled_exception_handler(request: Request, exc: Exception):
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    detail = str(exc) if settings.debug else "An unexpected error occurred."
    return problem(500, "Internal Server Error", detail, request.url.path)


# Import and include routers after app is created
from app.api.router import api_router
app.include_router(api_router, prefix="/api")
