import asyncio
from contextlib import asynccontextmanager, suppress

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from slowapi import _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded

from salon.routers import auth, reservations, calendar, service_options, board
from salon.config import settings
from salon.database import Base, engine
from salon.services.board_session import get_controller
from salon.utils.logging_config import setup_logging
from salon.utils.rate_limit import limiter
from salon.middleware.logging_middleware import log_requests


logger = setup_logging()
logger.info("Application starting...")


async def refresh_clock_periodically():
    """Keeps upcoming/past splits fresh without touching the store."""
    while True:
        await asyncio.sleep(settings.clock_refresh_seconds)
        get_controller().tick()


@asynccontextmanager
async def lifespan(app: FastAPI):
    Base.metadata.create_all(bind=engine)
    ticker = asyncio.create_task(refresh_clock_periodically())
    try:
        yield
    finally:
        ticker.cancel()
        with suppress(asyncio.CancelledError):
            await ticker
        logger.info("Application stopped")


app = FastAPI(title=settings.app_name, debug=settings.debug, lifespan=lifespan)
app.state.limiter = limiter
app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)

app.middleware("http")(log_requests)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(auth.router)
app.include_router(reservations.router)
app.include_router(calendar.router)
app.include_router(service_options.router)
app.include_router(board.router)

@app.get("/")
def root() -> dict:
        return {"message": "예약 관리 시스템 실행 중", "app": settings.app_name}

@app.get("/health")
def health() -> dict:
        return {"status": "ok"}
