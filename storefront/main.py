# storefront/main.py
from contextlib import asynccontextmanager

from fastapi import FastAPI
import uvicorn

from storefront.api import create_api
from storefront.data.database import Base, engine
from storefront.data.seed import seed
from storefront.utils.logging import configure_logging, get_logger

# IMPORT WSZYSTKICH MODELI PRZED CREATE_ALL
import storefront.data.models  # noqa: F401

logger = get_logger(__name__)


def init_db() -> None:
    logger.info(f"Models registered in Base.metadata: {list(Base.metadata.tables.keys())}")
    try:
        Base.metadata.create_all(bind=engine)
        logger.info("Database tables created")
    except Exception as e:
        logger.error(f"Failed to create tables: {e}")
        raise
    seed()


@asynccontextmanager
async def lifespan(app: FastAPI):
    configure_logging()
    init_db()
    yield


def create_app() -> FastAPI:
    return create_api(lifespan=lifespan)


app = create_app()


if __name__ == "__main__":
    uvicorn.run("storefront.main:app", host="0.0.0.0", port=8000, reload=False)
