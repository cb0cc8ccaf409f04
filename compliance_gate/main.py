"""
Compliance Gate FastAPI Application.

  POST /evaluate → gate precomputed rule results, return decision + digest
  GET  /health   → {"status": "ok", ...}
"""

from __future__ import annotations

import logging

from dotenv import load_dotenv
load_dotenv()

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from compliance_gate.api.routes.evaluate import router as evaluate_router
from compliance_gate.api.routes.health import router as health_router
from compliance_gate.config import settings

logging.basicConfig(
    level=settings.log_level.upper(),
    format="%(asctime)s [%(name)s] %(levelname)s: %(message)s",
    datefmt="%Y-%m-%d %H:%M:%S",
)
logger = logging.getLogger("compliance_gate")

app = FastAPI(
    title="Compliance Gate",
    description="Severity-threshold gate and failure digest for compliance rule results",
    version="1.0.0",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(health_router)
app.include_router(evaluate_router)


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    raw = (await request.body()).decode("utf-8", errors="replace")
    messages = [err["msg"] for err in exc.errors()]
    logger.warning(f"Rejected {request.url.path}: {messages} | body: {raw[:500]}")
    return JSONResponse(status_code=422, content={"detail": messages, "body": raw[:100]})
