import logging

from fastapi import FastAPI
from contextlib import asynccontextmanager
from cinema_booking.db.init_db import create_database, init_db
from cinema_booking.core.config import settings
from cinema_booking.api.errors import register_exception_handlers
from cinema_booking.api.v1.router import api_router

logging.basicConfig(level=settings.LOG_LEVEL)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Startup: Ensure DB exists and create tables
    create_database()
    init_db()
    logger.info("%s started.", settings.PROJECT_NAME)
    yield


app = FastAPI(title=settings.PROJECT_NAME, lifespan=lifespan)

register_exception_handlers(app)

app.include_router(api_router, prefix=settings.API_V1_STR)

@app.get("/")
def read_root():
    return {"Hello": "Cinema Booking"}
