import logging

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from .api.routes import router
from .core.config import settings
from .core.errors import TarbiyaError
from .db.base import Base
from .db.session import engine

logging.basicConfig(
    level=settings.LOG_LEVEL,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)

app = FastAPI(title="Tarbiya API", version="0.3.0")

@app.on_event("startup")
def on_startup():
    Base.metadata.create_all(bind=engine)

@app.exception_handler(TarbiyaError)
def handle_domain_error(request: Request, exc: TarbiyaError):
    if exc.status_code >= 500:
        logger.error(f"{request.method} {request.url.path} failed: {exc.message}")
    else:
        logger.warning(f"{request.method} {request.url.path} -> {exc.status_code} {exc.error_code}: {exc.message}")
    return JSONResponse(status_code=exc.status_code, content={"detail": exc.message, "code": exc.error_code})

# Register routes
app.include_router(router)
