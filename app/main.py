import logging
from fastapi import FastAPI
from datetime import datetime
from app.core.config import settings
from app.core.handlers import register_exception_handlers
from app.core.logging import setup_logging
from app.middleware.request_logging import RequestLoggingMiddleware
from app.database.connection import Base, engine
from app.models import product, user  # noqa: F401  (register tables on Base.metadata)
from app.routes import system
from app.routes.users import router as users_router
from app.routes.products import router as products_router

setup_logging()
logger = logging.getLogger(__name__)

app = FastAPI(title=settings.APP_NAME, version=settings.APP_VERSION)

app.add_middleware(RequestLoggingMiddleware)
register_exception_handlers(app)


app.include_router(users_router)
app.include_router(products_router)
app.include_router(system.router)

@app.on_event("startup")
async def startup_event():
    Base.metadata.create_all(bind=engine)
    app.state.start_time = datetime.utcnow()
    logger.info("%s %s started", settings.APP_NAME, settings.APP_VERSION)
