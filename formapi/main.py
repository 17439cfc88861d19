import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from formapi.config import config
from formapi.database import database
from formapi.errors import PersistenceError, SchemaValidationError
from formapi.logging_conf import configure_logging
from formapi.objectstore import ensure_bucket
from formapi.routers.form import router as form_router
from formapi.routers.records import router as records_router
from formapi.routers.uploads import router as uploads_router
from formapi.routers.validate import router as validate_router

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    configure_logging()
    ensure_bucket()
    # connect database
    await database.connect()
    yield
    # disconnect database
    await database.disconnect()

app = FastAPI(
    title="Dynamic Form API",
    description="Validates and stores submissions of configuration-driven forms",
    lifespan=lifespan
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=config.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(SchemaValidationError)
async def schema_validation_handler(request: Request, exc: SchemaValidationError):
    return JSONResponse(status_code=400, content={"errors": exc.errors})


@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError):
    return JSONResponse(status_code=400, content={"errors": jsonable_encoder(exc.errors())})


@app.exception_handler(PersistenceError)
async def persistence_handler(request: Request, exc: PersistenceError):
    logger.error(f"Error saving data: {exc}")
    return JSONResponse(status_code=500, content={"error": "Failed to save data"})


app.include_router(form_router, prefix="/api/form", tags=["Form"])
app.include_router(validate_router, prefix="/api/validate", tags=["Validate"])
app.include_router(records_router, prefix="/api/records", tags=["Records"])
app.include_router(uploads_router, prefix="/api/upload", tags=["Uploads"])
