"""
Professional Service

Healthcare professional records in Supabase: registration, profile reads
and updates, profile pictures and account removal.
"""

from typing import Any, Dict, List, Optional
import uuid

from portal.config import Config
from portal.db.supabase import get_supabase
from portal.utils.logger import get_logger
from portal.utils.exceptions import PortalError
from portal.utils.datetime_utils import get_now_utc

logger = get_logger(__name__)

# Applied only when a non-empty value is sent
PERSONAL_FIELDS = [
    "first_name", "last_name", "email", "phone", "address",
    "postcode", "position", "licence", "province",
]
# Applied whenever present, even when empty
BUSINESS_FIELDS = ["gst", "business_name", "business_type", "experience"]

# Tables holding rows owned by a professional, removed before the professional itself
OWNED_TABLES = [
    "professional_languages",
    "professional_skills",
    "professional_softwares",
    "answers",
    "otp_codes",
    "bank_accounts",
    "shift_offers",
    "shift_assignments",
    "revoked_tokens",
]


def public_view(professional: Dict[str, Any]) -> Dict[str, Any]:
    """Professional record without credentials."""
    return {k: v for k, v in professional.items() if k != "password_hash"}


class ProfessionalService:
    """Service for managing healthcare professionals using Supabase"""

    def __init__(self, config: Config):
        self.config = config
        self.client = get_supabase()

    def _first(self, column: str, value: Any) -> Optional[Dict[str, Any]]:
        try:
            response = self.client.table("professionals").select("*").eq(column, value).execute()
            return response.data[0] if response.data else None
        except Exception as e:
            logger.error(f"[ProfessionalService] Lookup by {column} failed: {str(e)}")
            return None

    def get_by_id(self, professional_id: str) -> Optional[Dict[str, Any]]:
        return self._first("id", professional_id)

    def get_by_phone(self, phone: str) -> Optional[Dict[str, Any]]:
        return self._first("phone", phone)

    def is_taken(self, column: str, value: str, exclude_id: Optional[str] = None) -> bool:
        """Whether another professional already uses this email/phone."""
        query = self.client.table("professionals").select("id").eq(column, value)
        if exclude_id:
            query = query.neq("id", exclude_id)
        return bool(query.execute().data)

    def create(self, data: Dict[str, Any], password_hash: str) -> Dict[str, Any]:
        """
        Insert a new professional awaiting review.

        Args:
            data: Registration fields (personal and business)
            password_hash: bcrypt hash of the chosen password

        Returns:
            The stored record without the password hash
        """
        now = get_now_utc().isoformat()
        record = {
            "id": str(uuid.uuid4()),
            "first_name": data["first_name"],
            "last_name": data["last_name"],
            "email": data["email"],
            "phone": data["phone"],
            "password_hash": password_hash,
            "address": data["address"],
            "city": data["city"],
            "district_id": data["district_id"],
            "postcode": data["postcode"],
            "position": data["position"],
            "licence": data["licence"],
            "province": data["province"],
            "licence_image": data.get("licence_image") or "",
            "profile_image": data.get("profile_image") or "",
            "lat": data.get("lat") or 0,
            "lng": data.get("lng") or 0,
            "business_name": data["business_name"],
            "gst": data["gst"],
            "business_type": data.get("business_type"),
            "experience": data.get("experience"),
            "completed": False,
            "has_bank": False,
            "has_languages": False,
            "has_skills": False,
            "has_softwares": False,
            "status": "pending",
            "is_verified": False,
            "phone_verified": False,
            "created_at": now,
            "updated_at": now,
        }
        try:
            self.client.table("professionals").insert(record).execute()
            logger.info(f"[ProfessionalService] ✅ Registered professional {record['id']} ({record['email']})")
            return public_view(record)
        except Exception as e:
            logger.error(f"[ProfessionalService] Failed to register professional: {str(e)}", exc_info=True)
            raise PortalError(f"Failed to register professional: {str(e)}", "ProfessionalService")

    def update(self, professional_id: str, fields: Dict[str, Any]) -> Dict[str, Any]:
        """Write raw column updates and return the refreshed record."""
        fields = {**fields, "updated_at": get_now_utc().isoformat()}
        try:
            response = self.client.table("professionals").update(fields).eq("id", professional_id).execute()
            if not response.data:
                raise PortalError("Professional not found", "ProfessionalService")
            return response.data[0]
        except PortalError:
            raise
        except Exception as e:
            logger.error(f"[ProfessionalService] Failed to update {professional_id}: {str(e)}")
            raise PortalError(f"Failed to update professional: {str(e)}", "ProfessionalService")

    def profile_updates(self, changes: Dict[str, Any]) -> Dict[str, Any]:
        """Filter a PATCH body down to the columns that should change."""
        updates = {}
        for name in PERSONAL_FIELDS:
            if changes.get(name):
                updates[name] = changes[name]
        for name in BUSINESS_FIELDS:
            if name in changes and changes[name] is not None:
                updates[name] = changes[name]
        return updates

    def build_profile(self, professional: Dict[str, Any], selections: Dict[str, List[str]]) -> Dict[str, Any]:
        profile = public_view(professional)
        profile["name"] = f"{professional.get('first_name', '')} {professional.get('last_name', '')}".strip()
        profile["languages"] = selections.get("languages", [])
        profile["skills"] = selections.get("skills", [])
        profile["softwares"] = selections.get("softwares", [])
        return profile

    def upload_picture(self, professional_id: str, content: bytes, content_type: str, extension: str) -> str:
        """
        Store a profile picture in Supabase Storage and save its public URL.

        Returns:
            Public URL of the uploaded image
        """
        bucket = self.config.supabase.storage_bucket
        timestamp = int(get_now_utc().timestamp() * 1000)
        path = f"profile-{professional_id}-{timestamp}.{extension}"
        try:
            self.client.storage.from_(bucket).upload(
                path=path,
                file=content,
                file_options={"content-type": content_type}
            )
            public_url = self.client.storage.from_(bucket).get_public_url(path)
        except Exception as e:
            logger.error(f"[ProfessionalService] Error uploading profile picture: {e}")
            raise PortalError(f"Failed to upload to Supabase Storage: {str(e)}", "ProfessionalService")

        self.update(professional_id, {"profile_image": public_url})
        logger.info(f"[ProfessionalService] Profile picture updated for {professional_id}")
        return public_url

    def delete(self, professional_id: str) -> None:
        """Delete a professional together with every row it owns."""
        try:
            for table in OWNED_TABLES:
                self.client.table(table).delete().eq("professional_id", professional_id).execute()
            self.client.table("professionals").delete().eq("id", professional_id).execute()
            logger.info(f"[ProfessionalService] 🗑️ Deleted professional {professional_id}")
        except Exception as e:
            logger.error(f"[ProfessionalService] Failed to delete {professional_id}: {str(e)}", exc_info=True)
            raise PortalError(f"Failed to delete account: {str(e)}", "ProfessionalService")
