"""
Quickstart: billing API calls with Chipp credits

A FastAPI app that resolves the caller from an X-User-Id header, exposes
the balance/payment routes for its frontend and charges 5 credits per
generation.

Run:
    export CHIPP_API_KEY=...
    python -m examples.quickstart_app
"""

import logging
from contextlib import asynccontextmanager
from typing import Optional

import uvicorn
from fastapi import Depends, FastAPI, Request
from pydantic import BaseModel, Field

from chipp import ChippClient, CreditGate, create_chipp_client
from chipp.auth_dependencies import ChippIdentity
from chipp.config import get_settings
from chipp.logger import setup_logger
from chipp.routes import create_chipp_router, register_exception_handlers

logger = logging.getLogger("chipp.quickstart")

GENERATION_COST = 5

chipp_client: Optional[ChippClient] = None


def get_chipp_client() -> ChippClient:
    if chipp_client is None:
        raise RuntimeError("Chipp client not initialized")
    return chipp_client


def get_user_id(request: Request) -> str:
    """Identity resolver; replace with your session or JWT lookup"""
    return request.headers.get("X-User-Id", "")


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifecycle management"""
    global chipp_client
    chipp_client = create_chipp_client()
    logger.info("✅ Chipp client ready")
    try:
        yield
    finally:
        await chipp_client.close()
        chipp_client = None
        logger.info("Chipp client closed")


class GenerateRequest(BaseModel):
    prompt: str = Field(..., min_length=1, max_length=2000)


def create_app(use_lifespan: bool = True) -> FastAPI:
    settings = get_settings()
    app = FastAPI(
        title="Chipp Quickstart",
        version="0.1.0",
        lifespan=lifespan if use_lifespan else None,
    )
    app.include_router(
        create_chipp_router(
            get_chipp_client,
            get_user_id,
            default_return_url=settings.default_return_url,
        )
    )
    register_exception_handlers(app)

    identity = ChippIdentity(get_user_id)

    @app.post("/api/generate")
    async def generate(body: GenerateRequest, user_id: str = Depends(identity)):
        """Billable action, charged once the request body has validated"""
        gate = CreditGate(get_chipp_client(), default_return_url=settings.default_return_url)
        charge = await gate.require(user_id, GENERATION_COST)

        return {
            "result": body.prompt[::-1],
            "credits_used": charge.amount,
            "credits_remaining": charge.balance,
        }

    return app


app = create_app()


if __name__ == "__main__":
    setup_logger("chipp")
    uvicorn.run(
        "examples.quickstart_app:app",
        host="0.0.0.0",
        port=8000,
        log_level=get_settings().logging.log_level.lower(),
    )
