"""
Question Service

Screening questions shown during registration and the professional's answers.
"""

from typing import Any, Dict, List

from portal.config import Config
from portal.db.supabase import get_supabase
from portal.utils.logger import get_logger
from portal.utils.exceptions import PortalError
from portal.utils.datetime_utils import get_now_utc

logger = get_logger(__name__)


class QuestionService:
    """Service for registration questions and answers"""

    def __init__(self, config: Config):
        self.config = config
        self.client = get_supabase()

    def list_questions(self) -> List[Dict[str, Any]]:
        try:
            response = self.client.table("questions").select("*").order("id").execute()
            return response.data or []
        except Exception as e:
            logger.error(f"[QuestionService] Failed to list questions: {str(e)}")
            raise PortalError(f"Failed to list questions: {str(e)}", "QuestionService")

    def replace_answers(self, professional_id: str, answers: List[Dict[str, Any]]) -> List[Dict[str, Any]]:
        """
        Replace every stored answer of a professional.

        Args:
            answers: [{"id": question_id, "answer": bool}, ...]
        """
        now = get_now_utc().isoformat()
        rows = [
            {
                "professional_id": professional_id,
                "question_id": item["id"],
                "answer": item["answer"],
                "created_at": now,
            }
            for item in answers
        ]
        try:
            self.client.table("answers").delete().eq("professional_id", professional_id).execute()
            if rows:
                self.client.table("answers").insert(rows).execute()
            logger.info(f"[QuestionService] Saved {len(rows)} answers for {professional_id}")
            return rows
        except Exception as e:
            logger.error(f"[QuestionService] Failed to save answers: {str(e)}", exc_info=True)
            raise PortalError(f"Failed to save answers: {str(e)}", "QuestionService")
