import logging

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from slowapi.errors import RateLimitExceeded
from slowapi.middleware import SlowAPIMiddleware
from slowapi import _rate_limit_exceeded_handler
import sentry_sdk

from fitcheck.api.v1.analyze import router as analyze_router
from fitcheck.api.v1.health import router as health_router
from fitcheck.api.v1.keywords import router as keywords_router
from fitcheck.core.config import settings
from fitcheck.core.cors import cors_allowed_origins
from fitcheck.core.errors import FitCheckError
from fitcheck.core.rate_limit import limiter

logging.basicConfig(level=settings.log_level, format="%(levelname)s %(name)s %(message)s")
if settings.sentry_dsn:
    sentry_sdk.init(dsn=settings.sentry_dsn, environment=settings.app_env)

logger = logging.getLogger(__name__)

app = FastAPI(title="FitCheck API", version="0.1.0")

app.add_middleware(
    CORSMiddleware,
    allow_origins=cors_allowed_origins(),
    allow_credentials=False,
    allow_methods=["*"],
    allow_headers=["*"],
)
app.state.limiter = limiter
app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)
app.add_middleware(SlowAPIMiddleware)


@app.exception_handler(FitCheckError)
async def fitcheck_error_handler(request: Request, exc: FitCheckError):
    logger.warning("request_failed path=%s code=%s status=%s: %s", request.url.path, exc.code, exc.status_code, exc)
    return JSONResponse(status_code=exc.status_code, content={"error": str(exc), "details": exc.code})


app.include_router(health_router, prefix="/v1", tags=["Health"])
app.include_router(analyze_router, prefix="/v1", tags=["Analyze"])
app.include_router(keywords_router, prefix="/v1", tags=["Keywords"])
