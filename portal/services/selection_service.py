"""
Selection Service

Languages, skills and softwares a professional works with: the fixed
registration catalogs plus each professional's saved list (which may also
contain custom names).
"""

from typing import Any, Dict, Iterable, List

from portal.config import Config
from portal.db.supabase import get_supabase
from portal.utils.logger import get_logger
from portal.utils.exceptions import PortalError
from portal.utils.datetime_utils import get_now_utc

logger = get_logger(__name__)

LANGUAGES_CATALOG = [
    {"id": 1, "title": "English"},
    {"id": 2, "title": "French"},
    {"id": 3, "title": "Spanish"},
    {"id": 4, "title": "Mandarin"},
    {"id": 5, "title": "Cantonese"},
    {"id": 6, "title": "Punjabi"},
    {"id": 7, "title": "Hindi"},
    {"id": 8, "title": "Urdu"},
    {"id": 9, "title": "Arabic"},
    {"id": 10, "title": "Portuguese"},
    {"id": 11, "title": "Italian"},
    {"id": 12, "title": "German"},
    {"id": 13, "title": "Tagalog"},
    {"id": 14, "title": "Vietnamese"},
    {"id": 15, "title": "Korean"},
    {"id": 16, "title": "Russian"},
    {"id": 17, "title": "Japanese"},
    {"id": 18, "title": "Polish"},
    {"id": 19, "title": "Gujarati"},
    {"id": 20, "title": "Tamil"},
]

SKILLS_CATALOG = [
    {"id": 4, "title": "Blister pack"},
    {"id": 5, "title": "Additional Prescribing Authorization"},
    {"id": 6, "title": "Cash Trained"},
    {"id": 7, "title": "Diabetes Education"},
    {"id": 8, "title": "Injection Certified"},
    {"id": 9, "title": "Medication Review"},
    {"id": 10, "title": "Methadone/Suboxone"},
    {"id": 11, "title": "Minor Ailment Prescribing"},
    {"id": 12, "title": "Smoking Cessation"},
    {"id": 13, "title": "Travel Health Education"},
]

SOFTWARES_CATALOG = [
    {"id": 3, "title": "Kroll"},
    {"id": 4, "title": "Propel"},
    {"id": 5, "title": "HealthWatch"},
]

# kind -> (catalog, table, profile flag)
SELECTION_KINDS = {
    "languages": (LANGUAGES_CATALOG, "professional_languages", "has_languages"),
    "skills": (SKILLS_CATALOG, "professional_skills", "has_skills"),
    "softwares": (SOFTWARES_CATALOG, "professional_softwares", "has_softwares"),
}


def normalize_names(names: Iterable[str]) -> List[str]:
    """Trim names and drop blanks and duplicates, keeping first-seen order."""
    seen = set()
    result = []
    for name in names:
        cleaned = name.strip()
        if cleaned and cleaned not in seen:
            seen.add(cleaned)
            result.append(cleaned)
    return result


class SelectionService:
    """Service for registration catalogs and per-professional selections"""

    def __init__(self, config: Config):
        self.config = config
        self.client = get_supabase()

    def _kind(self, kind: str):
        if kind not in SELECTION_KINDS:
            raise ValueError(f"Unknown selection kind: {kind}")
        return SELECTION_KINDS[kind]

    def catalog(self, kind: str, selected: Iterable[str] = ()) -> List[Dict[str, Any]]:
        """Catalog entries for a kind, each marked selected when its title is in `selected`."""
        entries, _, _ = self._kind(kind)
        chosen = set(selected)
        return [{**entry, "selected": entry["title"] in chosen} for entry in entries]

    def get_selection(self, professional_id: str, kind: str) -> List[str]:
        _, table, _ = self._kind(kind)
        try:
            response = (
                self.client.table(table)
                .select("name")
                .eq("professional_id", professional_id)
                .order("id")
                .execute()
            )
            return [row["name"] for row in response.data or []]
        except Exception as e:
            logger.error(f"[SelectionService] Failed to load {kind} for {professional_id}: {str(e)}")
            raise PortalError(f"Failed to load {kind}: {str(e)}", "SelectionService")

    def get_all_selections(self, professional_id: str) -> Dict[str, List[str]]:
        return {kind: self.get_selection(professional_id, kind) for kind in SELECTION_KINDS}

    def set_selection(self, professional_id: str, kind: str, names: Iterable[str]) -> List[str]:
        """
        Replace a professional's saved list for a kind.

        Names are trimmed and de-duplicated. The matching has_* flag on the
        professional is set to whether anything remains.

        Returns:
            The stored names
        """
        _, table, flag = self._kind(kind)
        cleaned = normalize_names(names)
        try:
            self.client.table(table).delete().eq("professional_id", professional_id).execute()
            if cleaned:
                rows = [{"professional_id": professional_id, "name": name} for name in cleaned]
                self.client.table(table).insert(rows).execute()

            self.client.table("professionals").update({
                flag: bool(cleaned),
                "updated_at": get_now_utc().isoformat(),
            }).eq("id", professional_id).execute()

            logger.info(f"[SelectionService] Saved {len(cleaned)} {kind} for {professional_id}")
            return cleaned
        except Exception as e:
            logger.error(f"[SelectionService] Failed to save {kind} for {professional_id}: {str(e)}", exc_info=True)
            raise PortalError(f"Failed to save {kind}: {str(e)}", "SelectionService")

