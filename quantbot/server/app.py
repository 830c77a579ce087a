from __future__ import annotations

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from .. import __version__
from ..config.defaults import AppConfig, get_default_config
from ..engine import ConversationEngine
from ..errors import MalformedRequestError
from ..logging.config import get_logger
from ..persistence.session_store import SessionStore
from ..pricing.coingecko import CoinGeckoPriceGateway
from .schemas import HealthResponse, StartCallResponse, WebhookRequest, WebhookResponse

logger = get_logger(__name__)

INVALID_PAYLOAD = {"response": "Invalid payload"}


def build_engine(config: AppConfig) -> ConversationEngine:
    return ConversationEngine(
        store=SessionStore(),
        price_gateway=CoinGeckoPriceGateway(config.price_gateway),
        exchanges=config.exchanges.names,
    )


def create_app(config: AppConfig | None = None, engine: ConversationEngine | None = None) -> FastAPI:
    config = config or get_default_config()
    engine = engine or build_engine(config)

    app = FastAPI(title="QuantBot", version=__version__)
    app.state.config = config
    app.state.engine = engine

    @app.exception_handler(RequestValidationError)
    async def invalid_payload(request: Request, exc: RequestValidationError) -> JSONResponse:
        logger.warning("Rejected malformed payload", path=request.url.path, errors=len(exc.errors()))
        return JSONResponse(status_code=400, content=INVALID_PAYLOAD)

    @app.exception_handler(MalformedRequestError)
    async def malformed_request(request: Request, exc: MalformedRequestError) -> JSONResponse:
        logger.warning("Rejected malformed request", path=request.url.path, field=exc.field, error=str(exc))
        return JSONResponse(status_code=400, content=INVALID_PAYLOAD)

    @app.get("/health", response_model=HealthResponse)
    def health() -> HealthResponse:
        return HealthResponse(status="ok", version=__version__, sessions=len(engine.store))

    @app.post("/start-call", response_model=StartCallResponse)
    def start_call() -> StartCallResponse:
        call_id, message = engine.create_session()
        return StartCallResponse(call_id=call_id, message=message)

    def webhook(payload: WebhookRequest) -> WebhookResponse:
        return WebhookResponse(response=engine.handle(payload.call_id, payload.utterance))

    app.add_api_route("/bland/webhook", webhook, methods=["POST"], response_model=WebhookResponse)
    app.add_api_route("/bland", webhook, methods=["POST"], response_model=WebhookResponse)

    return app
