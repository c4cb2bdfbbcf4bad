import logging
import os

import sentry_sdk
import uvicorn
from dotenv import load_dotenv
from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from rewards.config import get_cors_origins, get_log_level, get_parse_policy
from rewards.deps import IdFactory, generate_receipt_id
from rewards.logging_config import setup_logging
from rewards.middleware import RequestLoggingMiddleware
from rewards.routes import receipts
from rewards.scoring import ParsePolicy, ReceiptParseError
from rewards.store import ScoreStore

load_dotenv()

logger = logging.getLogger("rewards")

# Sentry
sentry_dsn = os.getenv("SENTRY_DSN")
if sentry_dsn:
    sentry_sdk.init(
        dsn=sentry_dsn,
        traces_sample_rate=0.1,
        send_default_pii=False,
    )


async def invalid_receipt_handler(request: Request, exc: RequestValidationError):
    logger.warning(
        "Invalid receipt",
        extra={"extra_data": {"path": request.url.path, "errors": len(exc.errors())}},
    )
    return JSONResponse(
        status_code=400,
        content={"detail": "Invalid receipt", "errors": jsonable_encoder(exc.errors())},
    )


async def receipt_parse_error_handler(request: Request, exc: ReceiptParseError):
    logger.warning(
        "Receipt rejected",
        extra={"extra_data": {"path": request.url.path, "field": exc.field, "value": exc.value}},
    )
    return JSONResponse(
        status_code=400,
        content={
            "detail": "Invalid receipt",
            "errors": [{"loc": [exc.field], "msg": exc.message, "input": exc.value}],
        },
    )


def create_app(
    store: ScoreStore | None = None,
    id_factory: IdFactory | None = None,
    parse_policy: ParsePolicy | None = None,
) -> FastAPI:
    """Build the API; each app owns exactly one ScoreStore for its lifetime."""
    setup_logging(get_log_level())

    app = FastAPI(title="Receipt Rewards API", version="0.1.0")
    app.state.store = store if store is not None else ScoreStore()
    app.state.id_factory = id_factory or generate_receipt_id
    app.state.parse_policy = parse_policy or get_parse_policy()

    app.add_exception_handler(RequestValidationError, invalid_receipt_handler)
    app.add_exception_handler(ReceiptParseError, receipt_parse_error_handler)

    # CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=get_cors_origins(),
        allow_credentials=True,
        allow_methods=["GET", "POST"],
        allow_headers=["Content-Type"],
    )
    app.add_middleware(RequestLoggingMiddleware)

    # Routes
    app.include_router(receipts.router)

    @app.get("/health")
    def health():
        return {"status": "ok", "receipts": len(app.state.store)}

    logger.info(
        "App created",
        extra={"extra_data": {"parse_policy": app.state.parse_policy.value}},
    )
    return app


app = create_app()


if __name__ == "__main__":
    uvicorn.run(
        app,
        host=os.getenv("HOST", "localhost"),
        port=int(os.getenv("PORT", "8080")),
    )
