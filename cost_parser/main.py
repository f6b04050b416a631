import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI

from cost_parser.api.routes.cost_items import router as cost_items_router
from cost_parser.api.routes.health import router as health_router
from cost_parser.core.config import settings
from cost_parser.core.logging import setup_logging
from cost_parser.services.registry import load_customer_registry
from cost_parser.state import global_state

# Configure logging before the app is created.
setup_logging()
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info("Starting cost parser service (env=%s)...", settings.app_env)

    if settings.customer_registry_path is not None:
        global_state.customer_registry = load_customer_registry(settings.customer_registry_path)
    else:
        logger.info("No customer registry configured; requests must supply customers.")

    logger.info("System ready!")
    yield
    logger.info("Shutting down service...")


app = FastAPI(title="Subscription Cost Parser", lifespan=lifespan)

app.include_router(health_router, prefix="/api")
app.include_router(cost_items_router, prefix="/api")
