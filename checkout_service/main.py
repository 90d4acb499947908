import logging
from contextlib import asynccontextmanager
from fastapi import FastAPI

from checkout_service.presentation.api import router
from checkout_service.database import engine

logging.basicConfig(level=logging.INFO, format='%(asctime)s - %(name)s - %(levelname)s - %(message)s')
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Управление жизненным циклом приложения"""
    logger.info("Checkout service запущен")

    yield

    await engine.dispose()
    logger.info("Приложение останавливается...")

app = FastAPI(
    title="Checkout Service",
    description="Оформление заказов из корзины",
    version="1.0.0",
    lifespan=lifespan
)

app.include_router(router, prefix="/api")


@app.get("/")
async def root():
    return {"message": "Checkout Service работает"}


@app.get("/health")
async def health():
    return {"status": "healthy"}
