import asyncio
import time
import logging
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI, Request
from starlette.middleware.cors import CORSMiddleware
from starlette.middleware.base import BaseHTTPMiddleware

from intake.api.support_ticket_chat import get_session_store, router as support_ticket_chat_router
from intake.core import config
from intake.services.session_store import SessionStore
from intake.utils.logging_config import setup_logging

setup_logging(level=config.LOG_LEVEL, log_dir=config.LOG_DIR)
logger = logging.getLogger("main")


# ---------------------------------------------------------------------------
# Session sweeper
# ---------------------------------------------------------------------------
async def purge_expired_sessions(store: SessionStore, interval: float):
    """Evict expired sessions every `interval` seconds until cancelled."""
    while True:
        await asyncio.sleep(interval)
        try:
            evicted = store.purge_expired()
        except Exception as e:
            logger.error(f"Session sweep failed: {e}", exc_info=True)
            continue
        if evicted:
            logger.info(f"Session sweep evicted {evicted} expired session(s), {len(store)} left")


@asynccontextmanager
async def lifespan(app: FastAPI):
    store = app.dependency_overrides.get(get_session_store, get_session_store)()
    logger.info(
        f"Starting intake API (external services: "
        f"{'enabled' if config.USE_EXTERNAL_SERVICES else 'disabled'}, "
        f"session grace: {config.SESSION_GRACE_SECONDS}s, "
        f"idle TTL: {config.SESSION_IDLE_TTL_SECONDS}s)"
    )
    sweeper = asyncio.create_task(
        purge_expired_sessions(store, config.SESSION_PURGE_INTERVAL_SECONDS)
    )
    yield
    sweeper.cancel()
    try:
        await sweeper
    except asyncio.CancelledError:
        pass
    logger.info("Intake API stopped")


app = FastAPI(title="Support Ticket Intake API", lifespan=lifespan)



# ---------------------------------------------------------------------------
# Logging Middleware
# ---------------------------------------------------------------------------
class LoggingMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request: Request, call_next):
        start_time = time.time()
        client_host = request.client.host if request.client else "unknown"
        logger.info(f"Incoming: {request.method} {request.url.path} from {client_host}")

        try:
            response = await call_next(request)
            process_time = (time.time() - start_time) * 1000
            logger.info(
                f"Outgoing: {request.method} {request.url.path} - "
                f"Status: {response.status_code} - "
                f"Time: {process_time:.2f}ms"
            )
            return response
        except Exception as e:
            logger.error(f"Request failed: {request.method} {request.url.path} - Error: {str(e)}")
            raise


app.add_middleware(LoggingMiddleware)

# ---------------------------------------------------------------------------
# CORS: the chat widget runs on port 3000
# ---------------------------------------------------------------------------
app.add_middleware(
    CORSMiddleware,
    allow_origins=[
        "http://localhost:3000",
        "http://127.0.0.1:3000",
        "http://localhost:8000",
    ],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.get("/health")
async def health_check():
    return {"status": "ok"}


app.include_router(support_ticket_chat_router)

if __name__ == "__main__":
    uvicorn.run("main:app", host="127.0.0.1", port=8000, reload=True)
