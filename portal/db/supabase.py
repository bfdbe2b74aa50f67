from typing import Optional

from supabase import create_client, Client

from portal.config import get_config
from portal.utils.logger import get_logger

logger = get_logger(__name__)

# Created on first use so importing the app does not open a connection
_client: Optional[Client] = None


def get_supabase() -> Client:
    global _client
    if _client is None:
        config = get_config()
        _client = create_client(config.supabase.url, config.supabase.service_key)
        logger.info("[Supabase] Client initialised")
    return _client
