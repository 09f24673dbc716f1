"""
ersatz FastAPI service

RESTful interface to the substitution engine
"""

import os
import time
import logging
import uuid
from typing import List, Optional
from contextlib import asynccontextmanager

from fastapi import FastAPI, HTTPException, Request
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel, Field

from ersatz.engine import GermanEngine, create_engine, get_api_logger

logger = get_api_logger()


# ===== Request / response models =====

class SubstituteRequest(BaseModel):
    """Substitution request"""
    text: str = Field(..., description="Text with ASCII digraphs")


class WordItem(BaseModel):
    """Decision for one word"""
    original: str
    text: str
    changed: bool


class SubstituteResponse(BaseModel):
    """Substitution response"""
    text: str
    words: List[WordItem]
    metadata: Optional[dict] = None


class CheckResponse(BaseModel):
    """Word validity"""
    word: str
    valid: bool
    parts: Optional[List[str]] = None


class HealthResponse(BaseModel):
    """Health check"""
    status: str
    version: str


# ===== Engine instance =====
engine: Optional[GermanEngine] = None


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Create the engine on startup, drop it on shutdown"""
    global engine

    logger.info("ersatz API starting, initializing engine...")
    if engine is None:
        engine = create_engine()
    logger.info("Engine ready")

    yield

    logger.info("ersatz API stopped")
    engine = None


# ===== FastAPI app =====
app = FastAPI(
    title="ersatz API",
    description="German umlaut and ß restoration",
    version="0.1.0",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# ===== Request logging middleware =====

@app.middleware("http")
async def log_requests(request: Request, call_next):
    """Log every request with an id and its latency"""
    request_id = str(uuid.uuid4())[:8]
    context = {'request_id': request_id, 'method': request.method, 'path': request.url.path}
    start_time = time.perf_counter()

    client_ip = request.client.host if request.client else "unknown"
    logger.info(f"--> {request.method} {request.url.path} | IP: {client_ip}", extra=context)

    try:
        response = await call_next(request)
    except Exception as e:
        elapsed_ms = (time.perf_counter() - start_time) * 1000
        logger.error(
            f"<-- ERROR | {elapsed_ms:.2f}ms | {type(e).__name__}: {e}",
            extra={**context, 'duration_ms': round(elapsed_ms, 2)},
        )
        raise

    elapsed_ms = (time.perf_counter() - start_time) * 1000
    status_code = response.status_code
    if status_code < 400:
        level = logging.INFO
    elif status_code < 500:
        level = logging.WARNING
    else:
        level = logging.ERROR
    logger.log(
        level,
        f"<-- {status_code} | {elapsed_ms:.2f}ms",
        extra={**context, 'status_code': status_code, 'duration_ms': round(elapsed_ms, 2)},
    )

    response.headers["X-Request-ID"] = request_id
    response.headers["X-Response-Time"] = f"{elapsed_ms:.2f}ms"
    return response


def _require_engine() -> GermanEngine:
    if engine is None:
        logger.error("Engine not ready, rejecting request")
        raise HTTPException(status_code=503, detail="Engine not ready")
    return engine


# ===== Routes =====

@app.get("/health", response_model=HealthResponse)
async def health_check():
    """Health check"""
    from ersatz import __version__
    return HealthResponse(
        status="healthy" if engine else "not_ready",
        version=__version__,
    )


@app.post("/substitute", response_model=SubstituteResponse)
async def substitute(request: SubstituteRequest):
    """Restore umlauts and ß in a text"""
    current = _require_engine()

    if not request.text:
        logger.warning("Invalid request: empty text")
        raise HTTPException(status_code=400, detail="Text must not be empty")

    result = current.process(request.text)
    changed = [w for w in result.words if w.changed]
    logger.debug(f"Substituted {len(changed)}/{len(result.words)} words | {result.metadata['elapsed_ms']}ms")

    return SubstituteResponse(
        text=result.text,
        words=[WordItem(original=w.original, text=w.text, changed=w.changed) for w in result.words],
        metadata=result.metadata,
    )


@app.get("/substitute/simple")
async def simple_substitute(text: str):
    """Plain text in, plain text out"""
    current = _require_engine()
    return {"input": text, "output": current.substitute(text)}


@app.get("/check", response_model=CheckResponse)
async def check_word(word: str):
    """Validity of a single word, with its compound parts if any"""
    current = _require_engine()
    return CheckResponse(
        word=word,
        valid=current.is_valid(word),
        parts=current.decompose(word),
    )


@app.get("/stats")
async def get_stats():
    """Engine statistics"""
    current = _require_engine()
    stats = current.get_stats()
    logger.info(f"Stats: {stats}")
    return stats


# ===== Entry point =====

def main():
    import uvicorn

    host = os.getenv("HOST", "127.0.0.1")
    port = int(os.getenv("PORT", "3000"))
    log_level = os.getenv("LOG_LEVEL", "info").lower()

    logger.info(f"Starting ersatz API: http://{host}:{port}")
    logger.info(f"API docs: http://{host}:{port}/docs")

    uvicorn.run(
        "ersatz.api.server:app",
        host=host,
        port=port,
        reload=False,
        workers=1,
        log_level=log_level,
    )


if __name__ == "__main__":
    main()
