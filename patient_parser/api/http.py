"""HTTP front for the parser: POST a JSON ``{"message": "..."}``, get a patient record."""
import json
from typing import Optional

from fastapi import APIRouter, FastAPI, Request, status
from fastapi.responses import JSONResponse
from loguru import logger
from pydantic import ValidationError as SchemaError

from patient_parser.services.records_service import RecordsService
from patient_parser.validation.errors import ValidationError
from patient_parser.validation.validators import describe_schema_error, validate_request_or_raise

GENERIC_ERROR = "An error occurred while processing the message."


def _bad_request(message: str) -> JSONResponse:
    return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content={"error": message})


def build_router(service: RecordsService) -> APIRouter:
    router = APIRouter(tags=["Messages"])

    @router.post("/parse-message")
    async def parse_message(request: Request):
        try:
            body = await request.json()
        except (json.JSONDecodeError, UnicodeDecodeError):
            return _bad_request("Request body must be valid JSON")

        try:
            req = validate_request_or_raise(body)
        except SchemaError as ex:
            return _bad_request(describe_schema_error(ex))

        try:
            record = service.process(req.message)
        except ValidationError as ve:
            logger.warning(f"Mensaje rechazado ({ve.rule}): {ve}")
            return _bad_request(str(ve))
        return record.to_dict()

    return router


def create_app(service: Optional[RecordsService] = None, prefix: str = "/api") -> FastAPI:
    app = FastAPI(title="Patient Message Parser")
    app.state.records = service or RecordsService()
    app.include_router(build_router(app.state.records), prefix=prefix)

    @app.get("/health")
    async def health():
        return {"status": "ok"}

    @app.exception_handler(Exception)
    async def unhandled(request: Request, exc: Exception):
        logger.exception(f"Error inesperado en {request.url.path}: {exc}")
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, content={"error": GENERIC_ERROR}
        )

    return app
