import logging
from contextlib import asynccontextmanager

from fastapi import Depends, FastAPI, HTTPException, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, RedirectResponse

from aladin_service import AladinApiError, AladinClient
from config import settings
from dataBase import create_client, ensure_indexes, get_database, get_db
from errors import ConflictError, DomainError, ForbiddenError, NotFoundError, PersistenceError
from routes import books_routes, files_routes, user_books_routes, users_routes
from storage_service import ProfileImageStorage

logging.basicConfig(
    level=settings.log_level.upper(),
    format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    client = create_client(settings)
    db = get_database(client, settings)
    await ensure_indexes(db)
    app.state.db = db
    app.state.aladin = AladinClient(settings)
    app.state.storage = ProfileImageStorage.from_database(db, settings)
    logger.info("%s %s started", settings.app_name, settings.app_version)
    try:
        yield
    finally:
        await app.state.aladin.close()
        client.close()


app = FastAPI(title=settings.app_name, version=settings.app_version, lifespan=lifespan)

# Configure CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(users_routes)
app.include_router(books_routes)
app.include_router(user_books_routes)
app.include_router(files_routes)


@app.exception_handler(ConflictError)
async def conflict_handler(request: Request, exc: ConflictError):
    content = {"detail": exc.message}
    if exc.code:
        content["code"] = exc.code
    return JSONResponse(status_code=409, content=content)


@app.exception_handler(NotFoundError)
async def not_found_handler(request: Request, exc: NotFoundError):
    return JSONResponse(status_code=404, content={"detail": exc.message})


@app.exception_handler(ForbiddenError)
async def forbidden_handler(request: Request, exc: ForbiddenError):
    return JSONResponse(status_code=403, content={"detail": exc.message})


@app.exception_handler(DomainError)
async def domain_error_handler(request: Request, exc: DomainError):
    return JSONResponse(status_code=400, content={"detail": exc.message})


@app.exception_handler(PersistenceError)
async def persistence_error_handler(request: Request, exc: PersistenceError):
    return JSONResponse(status_code=500, content={"detail": str(exc)})


@app.exception_handler(AladinApiError)
async def aladin_error_handler(request: Request, exc: AladinApiError):
    return JSONResponse(status_code=exc.status_code or 500, content={"detail": exc.message})


@app.get("/")
def root():
    return RedirectResponse(url="/docs")


@app.get("/health")
async def health(db=Depends(get_db)):
    try:
        await db.command("ping")
    except Exception:
        logger.exception("Database ping failed")
        raise HTTPException(status_code=503, detail="Database unavailable")
    return {"status": "ok"}


if __name__ == "__main__":
    import os

    import uvicorn

    port = int(os.getenv("PORT", "8000"))
    uvicorn.run(app, host="0.0.0.0", port=port)
