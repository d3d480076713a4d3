from fastapi import FastAPI, HTTPException, Request, status
from contextlib import asynccontextmanager
import logging

from fastapi.responses import JSONResponse
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware

from customers_api.config import Config
from customers_api.db.main import init_db
from customers_api.customers.routes import customer_router, reject_malformed_request
from customers_api.messages.catalog import get_message_catalog
from customers_api.utils.log_config import setup_logging


logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    setup_logging(Config.LOG_LEVEL, Config.LOG_FILE)
    logger.info("Server starting")

    # Fail at startup rather than on the first request if templates are missing
    catalog = get_message_catalog()
    logger.info("Loaded '%s' message catalog", catalog.locale)

    if Config.CUSTOMER_STORE == "sql":
        await init_db()

    yield

    logger.info("Server stopped")

app = FastAPI(
    title="Customers API",
    description="CRUD API over customer records",
    lifespan=lifespan
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=Config.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

@app.get("/")
def health_check():
    return {
        "status": "Success",
        "message": "Server Working"
    }

@app.exception_handler(HTTPException)
async def custom_http_exception_handler(request: Request, exc: HTTPException):
    # The body is the resolved message itself
    return JSONResponse(
        status_code=exc.status_code,
        content=exc.detail,
        headers=getattr(exc, "headers", None)
    )

def format_validation_errors(errors):
    formatted = []
    for err in errors:
        # Skip the first element if it's "body", "query", etc.
        loc = err["loc"]
        field = ".".join(str(l) for l in loc[1:]) if len(loc) > 1 else str(loc[0])
        formatted.append({
            "field": field,
            "message": err["msg"]
        })
    return formatted

@app.exception_handler(RequestValidationError)
async def custom_validation_exception_handler(request: Request, exc: RequestValidationError):
    # Customer routes report bad input with their own 400/404 messages
    rejection = reject_malformed_request(request, exc)
    if rejection is not None:
        return await custom_http_exception_handler(request, rejection)

    return JSONResponse(
        status_code=status.HTTP_422_UNPROCESSABLE_CONTENT,
        content={
            "success": False,
            "message": "Validation error",
            "errors": format_validation_errors(exc.errors()),
            "data": None
        }
    )

app.include_router(customer_router, prefix="/api/customers", tags=["Customers"])
