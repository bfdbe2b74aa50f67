"""
Bank Account Service

Direct-deposit details of a professional (one row per professional).
"""

from typing import Any, Dict, Optional

from portal.config import Config
from portal.db.supabase import get_supabase
from portal.utils.logger import get_logger
from portal.utils.exceptions import PortalError
from portal.utils.datetime_utils import get_now_utc
from portal.utils.validators import mask_account_number

logger = get_logger(__name__)


class BankAccountService:
    """Service for storing payout bank details"""

    def __init__(self, config: Config):
        self.config = config
        self.client = get_supabase()

    def get(self, professional_id: str) -> Optional[Dict[str, Any]]:
        """Saved details with the account number masked, or None."""
        try:
            response = (
                self.client.table("bank_accounts")
                .select("*")
                .eq("professional_id", professional_id)
                .execute()
            )
        except Exception as e:
            logger.error(f"[BankAccountService] Failed to load bank account: {str(e)}")
            raise PortalError(f"Failed to load bank account: {str(e)}", "BankAccountService")

        if not response.data:
            return None
        account = dict(response.data[0])
        account["account_number"] = mask_account_number(account.get("account_number") or "")
        return account

    def save(self, professional_id: str, details: Dict[str, str]) -> Dict[str, Any]:
        """
        Upsert the professional's bank details and set has_bank.

        Args:
            details: transit_number, institution_number, account_number,
                business_name, business_number (already validated)
        """
        now = get_now_utc().isoformat()
        row = {
            "professional_id": professional_id,
            "transit_number": details["transit_number"],
            "institution_number": details["institution_number"],
            "account_number": details["account_number"],
            "business_name": details["business_name"].strip(),
            "business_number": details["business_number"].strip(),
            "updated_at": now,
        }
        try:
            self.client.table("bank_accounts").upsert(row, on_conflict="professional_id").execute()
            self.client.table("professionals").update({
                "has_bank": True,
                "updated_at": now,
            }).eq("id", professional_id).execute()
        except Exception as e:
            logger.error(f"[BankAccountService] Failed to save bank account: {str(e)}", exc_info=True)
            raise PortalError(f"Failed to save bank account: {str(e)}", "BankAccountService")

        logger.info(f"[BankAccountService] Bank account saved for {professional_id}")
        return {**row, "account_number": mask_account_number(row["account_number"])}
