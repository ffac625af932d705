from fastapi import FastAPI
from contextlib import asynccontextmanager
import logging

from storefront.config import settings
from storefront.container import Container
from storefront.presentation.api import router

logging.basicConfig(level=settings.LOG_LEVEL, format='%(asctime)s - %(name)s - %(levelname)s - %(message)s')
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Управление жизненным циклом приложения"""
    container = Container(settings)
    app.state.container = container
    logger.info("Хранилища и подписчики инициализированы")

    if settings.SEED_DEMO_DATA:
        await container.seed_demo_data()

    yield

    logger.info("Приложение останавливается...")


app = FastAPI(
    title="Storefront",
    description="Сервис товаров и заказов в памяти",
    version="1.0.0",
    lifespan=lifespan
)

app.include_router(router, prefix="/api")


@app.get("/")
async def root():
    return {"message": "Storefront работает"}


@app.get("/health")
async def health():
    return {"status": "healthy"}
