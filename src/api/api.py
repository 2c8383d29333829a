import logging
from contextlib import asynccontextmanager
from datetime import datetime, timezone
from time import perf_counter
from typing import Annotated, Any, AsyncGenerator, Awaitable, Callable

from fastapi import APIRouter, Depends, FastAPI, Request, Response
from fastapi.responses import JSONResponse

from api.dependencies import ApiKeyRejected, get_facade, get_settings, require_api_key
from config import AppSettings
from services.quote_facade import InvalidQuoteTypeError, QuoteFacade, build_default_facade

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(fastapi_app: FastAPI) -> AsyncGenerator[None, None]:
    if getattr(fastapi_app.state, "facade", None) is None:
        fastapi_app.state.facade = build_default_facade()
    yield


app = FastAPI(lifespan=lifespan)


@app.middleware("http")
async def log_process_time(request: Request, call_next: Callable[[Request], Awaitable[Response]]) -> Response:
    start_time = perf_counter()
    response = await call_next(request)
    process_time = perf_counter() - start_time
    logger.info("Request time: %s %s: %.4fs", request.method, request.url, process_time)
    return response


def _error(message: str, error: str, status_code: int = 422) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"success": False, "message": message, "error": error})


@app.exception_handler(ApiKeyRejected)
async def handle_api_key_rejected(request: Request, exc: ApiKeyRejected) -> JSONResponse:
    return _error(exc.message, exc.error)


@app.exception_handler(InvalidQuoteTypeError)
async def handle_invalid_quote_type(request: Request, exc: InvalidQuoteTypeError) -> JSONResponse:
    return _error("Tipo de cotización no válido", str(exc))


@app.exception_handler(Exception)
async def handle_unexpected(request: Request, exc: Exception) -> JSONResponse:
    logger.error("Unhandled error on %s %s", request.method, request.url, exc_info=exc)
    return _error("Error interno del servidor", str(exc))


router = APIRouter(prefix="/api", dependencies=[Depends(require_api_key)])

FacadeDep = Annotated[QuoteFacade, Depends(get_facade)]


@router.get("/dolar")
def get_quotations(facade: FacadeDep) -> dict[str, Any]:
    return {"success": True, "data": facade.get_quotations().model_dump(mode="json")}


@router.get("/dolar/fresh")
def get_fresh_quotations(facade: FacadeDep) -> dict[str, Any]:
    return {"success": True, "data": facade.get_fresh_quotations().model_dump(mode="json")}


@router.get("/dolar/{tipo}")
def get_quotation(tipo: str, facade: FacadeDep) -> dict[str, Any]:
    quote = facade.get_quotations_by_type(tipo)
    snapshot = facade.get_quotations()
    return {
        "success": True,
        "data": {
            "tipo": tipo,
            "cotizacion": quote.model_dump(mode="json"),
            "fuente": snapshot.source,
            "timestamp": snapshot.timestamp.isoformat(),
        },
    }


@router.get("/noticias")
def get_news(facade: FacadeDep) -> dict[str, Any]:
    return {"success": True, "data": facade.get_news().model_dump(mode="json")}


@router.get("/health")
def health(settings: Annotated[AppSettings, Depends(get_settings)]) -> dict[str, Any]:
    return {
        "success": True,
        "data": {
            "status": "healthy",
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "version": settings.app_version,
            "description": "API de cotizaciones del dólar argentino",
        },
    }


@app.get("/api/test")
def smoke_test() -> dict[str, Any]:
    return {
        "success": True,
        "message": "API funcionando correctamente",
        "timestamp": datetime.now(timezone.utc).isoformat(),
    }


app.include_router(router)
