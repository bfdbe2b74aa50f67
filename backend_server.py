"""
Run FastAPI HTTP Server

Starts the healthcare professional portal.
"""

import os
import uvicorn
from portal.config import get_config

if __name__ == "__main__":
    config = get_config()

    # Hosting platforms provide PORT; fall back to config
    port = int(os.environ.get("PORT", config.server.port))
    host = os.environ.get("HOST", config.server.host)

    uvicorn.run(
        "portal.main:app",
        host=host,
        port=port,
        reload=config.is_development,
        log_level=config.LOG_LEVEL.lower(),
    )
