"""
FastAPI Application

HTTP app for the healthcare professional portal: middleware, rate limiting
and operational probes. Feature routers are registered in portal.main.
"""

from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import Response
from prometheus_client import generate_latest, CONTENT_TYPE_LATEST
from slowapi import _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded

from portal.config import get_config
from portal.db.supabase import get_supabase
from portal.utils.limiter import limiter
from portal.utils.logger import get_logger

logger = get_logger(__name__)
config = get_config()

app = FastAPI(
    title="Healthcare Professional Portal API",
    description="Registration, profile management and pharmacy shift booking for healthcare professionals",
    version="1.0.0",
)
app.state.limiter = limiter
app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)

# With allow_credentials=True, origins must be explicit
app.add_middleware(
    CORSMiddleware,
    allow_origins=config.server.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.get("/health")
async def health():
    """Liveness probe: returns 200 if the process is running."""
    return {"status": "ok"}


@app.get("/ready")
async def ready():
    """Readiness probe: returns 200 if Supabase answers a trivial query."""
    try:
        get_supabase().table("districts").select("id").limit(1).execute()
        return {"status": "ready"}
    except Exception as e:
        logger.warning(f"[API] Readiness check failed: {e}")
        raise HTTPException(status_code=503, detail="Service not ready")


@app.get("/metrics", include_in_schema=False)
async def metrics():
    """Prometheus metrics for monitoring."""
    try:
        return Response(content=generate_latest(), media_type=CONTENT_TYPE_LATEST)
    except Exception as e:
        logger.warning(f"[API] Metrics export failed: {e}")
        raise HTTPException(status_code=503, detail="Metrics not available")
