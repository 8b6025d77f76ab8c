import logging
from contextlib import asynccontextmanager

from fastapi import Depends, FastAPI
from redis import Redis

from .config import settings
from .database import engine
from .models.generated import Base
from .redis_client import get_redis
from .routers import admin, bookings, courts, loyalty, users, venues

logging.basicConfig(
    level=settings.log_level.upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(_: FastAPI):
    Base.metadata.create_all(bind=engine)
    logger.info("Database schema ready")
    yield


app = FastAPI(title=settings.app_title, lifespan=lifespan)

app.include_router(venues.router)
app.include_router(courts.router)
app.include_router(users.router)
app.include_router(bookings.router)
app.include_router(loyalty.router)
app.include_router(admin.router)


@app.get("/health")
def health(redis: Redis = Depends(get_redis)):
    return {"redis": redis.ping()}
