import logging

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from freshtrack.config import get_settings
from freshtrack.errors import GenerationFailed, InsufficientInput, InvalidInput, NotFound
from freshtrack.routers import dashboard, items, receipts, recipes

settings = get_settings()

logging.basicConfig(
    level=settings.LOG_LEVEL.upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)

app = FastAPI(
    title="FreshTrack API",
    version="1.0.0",
    docs_url="/docs",
    redoc_url="/redoc",
)

# Build allowed origins list (supports comma-separated FRONTEND_URL for multiple domains)
_origins = ["http://localhost:3000"]
for origin in settings.FRONTEND_URL.split(","):
    origin = origin.strip()
    if origin and origin not in _origins:
        _origins.append(origin)

app.add_middleware(
    CORSMiddleware,
    allow_origins=_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(items.router, prefix="/api/v1/items", tags=["Items"])
app.include_router(receipts.router, prefix="/api/v1/receipts", tags=["Receipts"])
app.include_router(recipes.router, prefix="/api/v1/recipes", tags=["Recipes"])
app.include_router(dashboard.router, prefix="/api/v1", tags=["Inventory"])


@app.exception_handler(InvalidInput)
async def invalid_input_handler(request: Request, exc: InvalidInput):
    logger.warning("Invalid input on %s: %s", request.url.path, exc)
    return JSONResponse(status_code=422, content={"detail": str(exc), "error": "invalid_input"})


@app.exception_handler(InsufficientInput)
async def insufficient_input_handler(request: Request, exc: InsufficientInput):
    logger.warning("Insufficient input on %s: %s", request.url.path, exc)
    return JSONResponse(status_code=422, content={"detail": str(exc), "error": "insufficient_input"})


@app.exception_handler(NotFound)
async def not_found_handler(request: Request, exc: NotFound):
    return JSONResponse(status_code=404, content={"detail": str(exc)})


@app.exception_handler(GenerationFailed)
async def generation_failed_handler(request: Request, exc: GenerationFailed):
    logger.error("Recipe generation failed: %s", exc)
    return JSONResponse(status_code=502, content={"detail": str(exc), "error": "generation_failed"})


@app.get("/health")
def health():
    return {"status": "ok"}
