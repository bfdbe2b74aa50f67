"""
Application entrypoint.

Configures logging and registers the feature routers on the app created in
portal.api.main. Run with `uvicorn portal.main:app`.
"""

from portal.api.main import app
from portal.config import get_config
from portal.utils.logger import get_logger, setup_logging

config = get_config()
setup_logging(config)
logger = get_logger(__name__)

from portal.api import auth as auth_api  # noqa: E402
from portal.api import registration as registration_api  # noqa: E402
from portal.api import profile as profile_api  # noqa: E402
from portal.api import shifts as shifts_api  # noqa: E402
from portal.api import admin as admin_api  # noqa: E402
from portal.api import pages as pages_api  # noqa: E402

app.include_router(auth_api.router)
app.include_router(registration_api.router)
app.include_router(profile_api.router)
app.include_router(shifts_api.router)
app.include_router(admin_api.router)
app.include_router(pages_api.router)

logger.info(f"[API] Portal ready ({config.APP_ENV})")
