from typing import Any, Dict, List

from portal.config import Config
from portal.db.supabase import get_supabase
from portal.utils.logger import get_logger
from portal.utils.exceptions import PortalError

logger = get_logger(__name__)


class DistrictService:
    """Service for service districts and their tax rates"""

    def __init__(self, config: Config):
        self.config = config
        self.client = get_supabase()

    def list_districts(self) -> List[Dict[str, Any]]:
        try:
            response = self.client.table("districts").select("id, name").order("name").execute()
            return response.data or []
        except Exception as e:
            logger.error(f"[DistrictService] Failed to list districts: {str(e)}")
            raise PortalError(f"Failed to list districts: {str(e)}", "DistrictService")
