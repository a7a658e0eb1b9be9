from __future__ import annotations
import asyncio
import logging
import os
import threading
from pathlib import Path
from typing import Any, Callable, Dict, List, Optional
import dotenv
dotenv.load_dotenv()

from fastapi import FastAPI, Query, Request
from fastapi.concurrency import run_in_threadpool
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from street_sweep.config import load_config
from street_sweep.errors import LookupFailure, UpstreamFailure
from street_sweep.pipeline import StreetCleaningPipeline

ROOT = Path(__file__).resolve().parent
DATA_DIR = ROOT / "data"

# 客户端断开检测的轮询间隔（秒）
DISCONNECT_POLL_SECONDS = 0.25

logger = logging.getLogger(__name__)

cfg = load_config(os.getenv("SWEEP_CONFIG", str(DATA_DIR / "config.default.json")))
pipeline = StreetCleaningPipeline(cfg)

app = FastAPI(title="Street Cleaning Lookup Service")


class ScheduleResponse(BaseModel):
    address: str
    schedules: List[Dict[str, Any]]
    addrCoords: List[float]


class ErrorResponse(BaseModel):
    error: str


async def run_until_disconnect(request: Request, fn: Callable[[threading.Event], Any],
                               cancel_event: threading.Event) -> Any:
    """在线程池中执行 fn，同时轮询客户端是否断开；断开后置位 cancel_event，让查询停止继续发起外部请求。"""
    task = asyncio.ensure_future(run_in_threadpool(fn, cancel_event))
    while not task.done():
        done, _ = await asyncio.wait({task}, timeout=DISCONNECT_POLL_SECONDS)
        if done or cancel_event.is_set():
            continue
        if await request.is_disconnected():
            logger.info("Client disconnected, cancelling lookup")
            cancel_event.set()
    return task.result()


@app.get(
    "/api/street-cleaning",
    response_model=ScheduleResponse,
    responses={400: {"model": ErrorResponse}, 404: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
)
async def street_cleaning(request: Request, address: Optional[str] = Query(default=None)):
    cancel_event = threading.Event()
    try:
        return await run_until_disconnect(
            request, lambda ev: pipeline.lookup_json(address, ev), cancel_event
        )
    except LookupFailure as exc:
        if exc.status_code >= 500:
            logger.error("Lookup failed for %r: %s", address, exc.message)
        return JSONResponse({"error": exc.message}, status_code=exc.status_code)
    except Exception:
        logger.exception("Unexpected failure looking up %r", address)
        failure = UpstreamFailure()
        return JSONResponse({"error": failure.message}, status_code=failure.status_code)


@app.get("/healthz")
def healthz():
    return {"status": "ok"}


if __name__ == "__main__":
    import uvicorn

    logging.basicConfig(level=os.getenv("LOG_LEVEL", "INFO"))
    host = os.getenv("APP_HOST", "0.0.0.0")
    port = int(os.getenv("APP_PORT", "8008"))
    uvicorn.run(app, host=host, port=port)
