from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
import logging

logger = logging.getLogger(__name__)

class MailError(Exception):
    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

class ValidationError(MailError):
    """Missing or malformed request fields."""
    status_code = 400

class NotFoundError(MailError):
    """Address was never generated or has already been swept."""
    status_code = 404

async def mail_error_handler(request: Request, exc: MailError):
    logger.info(f"{request.method} {request.url.path} rejected ({exc.status_code}): {exc.message}")
    return JSONResponse(status_code=exc.status_code, content={"error": exc.message})

async def request_validation_handler(request: Request, exc: RequestValidationError):
    # Malformed bodies are a client error like any other missing field
    logger.info(f"{request.method} {request.url.path} rejected (400): {exc.errors()}")
    return JSONResponse(status_code=400, content={"error": "Malformed request"})

def register_exception_handlers(app: FastAPI):
    app.add_exception_handler(MailError, mail_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
