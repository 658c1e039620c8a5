"""HTTP entry point: POST a ``{"data": [row, ...]}`` envelope, get the winners back."""
from __future__ import annotations

import logging
import time

from fastapi import FastAPI, HTTPException, Request
from fastapi.concurrency import run_in_threadpool
from fastapi.responses import JSONResponse

from .config import get_settings
from .pipeline import run_pipeline
from .sources import SourceUnavailable, outcome_to_payload, rows_from_payload

logger = logging.getLogger(__name__)

settings = get_settings()
logging.basicConfig(level=settings.log_level.upper())

app = FastAPI(title="Race Winner")


@app.get("/health")
def health():
    return {"status": "ok"}


@app.post("/api/find-winner")
async def find_winner(request: Request):
    logger.info("find-winner request received")
    started = time.perf_counter()

    body = await request.body()
    try:
        rows = rows_from_payload(body)
    except SourceUnavailable as e:
        logger.critical(str(e))
        raise HTTPException(status_code=400, detail=str(e))

    scheme = settings.scheme()
    outcome = await run_in_threadpool(run_pipeline, rows, scheme)

    elapsed_ms = (time.perf_counter() - started) * 1000
    logger.info(f"Execution Time: {elapsed_ms:.0f} ms")
    return JSONResponse(content=outcome_to_payload(outcome, scheme))
