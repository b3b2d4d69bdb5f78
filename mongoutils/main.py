import logging

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from mongoutils.config.database import get_connection
from mongoutils.config.settings import settings
from mongoutils.routes import document_controller, health_controller
from mongoutils.utils.errors import (
    DatabaseConnectionError,
    InvalidObjectIdError,
    MongoUtilsError,
    NoResultsError,
)

logging.basicConfig(
    level=settings.log_level,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)

app = FastAPI(
    title=settings.app_name,
    description="""
    Browse MongoDB collections.

    ## Query parameters
    * **limit**: number of documents to return, 5 by default.
      `none`, `all` or `0` return every document.
    * **sort**: comma separated field names without whitespace, e.g.
      `birthday,-username`. A leading `-` sorts that field descending.

    ## IDs
    Document IDs are 24 character hexadecimal strings.
    """,
    version=settings.app_version,
    debug=settings.debug_mode,
    openapi_tags=[
        {
            "name": "documents",
            "description": "Read and delete documents of any collection."
        },
        {
            "name": "health",
            "description": "Database connectivity check."
        }
    ]
)

# Configure CORS middleware with centralized settings
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins if isinstance(settings.cors_origins, list) else [settings.cors_origins],
    allow_credentials=True,
    allow_methods=["GET", "DELETE", "OPTIONS"],
    allow_headers=["*"],
)

# Include routers
app.include_router(
    document_controller,
    prefix="/api",
    tags=["documents"],
    responses={400: {"description": "Invalid ID"}, 404: {"description": "Not found"}}
)

app.include_router(health_controller, prefix="/api")

ERROR_STATUS_CODES = {
    InvalidObjectIdError: 400,
    NoResultsError: 404,
    DatabaseConnectionError: 503,
}


@app.exception_handler(MongoUtilsError)
async def mongoutils_error_handler(request: Request, exc: MongoUtilsError):
    """
    Translate package errors into JSON responses carrying the error kind.
    """
    status_code = next(
        (code for error_type, code in ERROR_STATUS_CODES.items() if isinstance(exc, error_type)),
        500,
    )
    return JSONResponse(
        status_code=status_code,
        content={"detail": exc.detail, "error": exc.kind.value},
    )


@app.get("/", tags=["root"])
async def root():
    """
    Root endpoint that returns a welcome message.
    """
    return {
        "message": f"Welcome to {settings.app_name}",
        "docs_url": "/docs",
        "openapi_url": "/openapi.json"
    }


@app.on_event("startup")
def startup_event():
    """
    Connect to MongoDB when the application starts.
    """
    get_connection().connect()


@app.on_event("shutdown")
def shutdown_event():
    """
    Close the MongoDB connection when the application stops.
    """
    get_connection().close()
