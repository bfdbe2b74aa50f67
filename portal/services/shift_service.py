"""
Shift Service

Pharmacy shifts: the open-shift feed, pricing, offers sent by professionals
and the assignment lifecycle (assigned -> upcoming -> cancel).
"""

from typing import Any, Dict, Iterable, List, Optional
from datetime import date

from portal.config import Config
from portal.db.supabase import get_supabase
from portal.utils.logger import get_logger
from portal.utils.exceptions import PortalError, NotFoundError, ConflictError
from portal.utils.datetime_utils import get_now_utc, parse_shift_date

logger = get_logger(__name__)

ASSIGNMENT_STATUSES = ("assigned", "upcoming", "cancel")
MY_SHIFT_FILTERS = ASSIGNMENT_STATUSES + ("all",)

# Optional counter-offer terms a professional may send
OFFER_TERMS = ("mileage", "house", "hour_rate")

APPLIED_MESSAGES = {
    "accept": "Application sent successfully",
    "counter": "Offer sent to pharmacy",
}


def compute_pricing(shift: Dict[str, Any], district_tax: float, platform_fee_percent: float) -> Dict[str, float]:
    """
    Price breakdown of a shift.

    earning is what the professional is paid for the hours; the pharmacy pays
    earning plus the platform fee, district tax on the earning, and any
    mileage / housing allowance.
    """
    hours = float(shift.get("hours") or 0)
    hour_rate = float(shift.get("hour_rate") or 0)
    earning = hour_rate * hours
    profit = earning * platform_fee_percent / 100
    tax = earning * float(district_tax or 0) / 100
    mileage = float(shift.get("mileage") or 0)
    house = float(shift.get("house") or 0)
    return {
        "earning": round(earning, 2),
        "profit": round(profit, 2),
        "tax": round(tax, 2),
        "total": round(earning + profit + tax + mileage + house, 2),
    }


def _shift_day(shift: Dict[str, Any]) -> Optional[date]:
    try:
        return parse_shift_date(shift.get("date") or "")
    except ValueError:
        logger.warning(f"[ShiftService] Shift {shift.get('id')} has invalid date {shift.get('date')!r}")
        return None


class ShiftService:
    """Service for pharmacy shifts using Supabase"""

    def __init__(self, config: Config):
        self.config = config
        self.client = get_supabase()

    # -- lookups -------------------------------------------------------------

    def get_shift(self, shift_id: int) -> Optional[Dict[str, Any]]:
        try:
            response = self.client.table("shifts").select("*").eq("id", shift_id).execute()
            return response.data[0] if response.data else None
        except Exception as e:
            logger.error(f"[ShiftService] Failed to load shift {shift_id}: {str(e)}")
            raise PortalError(f"Failed to load shift: {str(e)}", "ShiftService")

    def _districts(self) -> Dict[Any, Dict[str, Any]]:
        response = self.client.table("districts").select("*").execute()
        return {d["id"]: d for d in response.data or []}

    def _offers_by_shift(self, professional_id: str) -> Dict[Any, Dict[str, Any]]:
        response = (
            self.client.table("shift_offers")
            .select("*")
            .eq("professional_id", professional_id)
            .execute()
        )
        return {o["shift_id"]: o for o in response.data or []}

    def _assignment(self, professional_id: str, shift_id: int) -> Optional[Dict[str, Any]]:
        response = (
            self.client.table("shift_assignments")
            .select("*")
            .eq("shift_id", shift_id)
            .eq("professional_id", professional_id)
            .execute()
        )
        return response.data[0] if response.data else None

    def _priced(self, shift: Dict[str, Any], districts: Dict[Any, Dict[str, Any]]) -> Dict[str, Any]:
        district = districts.get(shift.get("district_id")) or {}
        return {**shift, **compute_pricing(shift, district.get("tax", 0), self.config.PLATFORM_FEE_PERCENT)}

    @staticmethod
    def _with_application(shift: Dict[str, Any], offer: Optional[Dict[str, Any]]) -> Dict[str, Any]:
        shift["applied"] = offer is not None
        shift["applied_at"] = offer.get("created_at") if offer else None
        shift["applied_msg"] = APPLIED_MESSAGES.get(offer.get("kind")) if offer else None
        return shift

    # -- feed ----------------------------------------------------------------

    def feed(
        self,
        professional_id: str,
        price: Optional[str] = None,
        on_date: Optional[date] = None,
        from_date: Optional[date] = None,
        paginate: Optional[int] = None,
    ) -> Dict[str, List[Dict[str, Any]]]:
        """
        Open shifts grouped by their DD-MM-YYYY date.

        Args:
            price: "high" or "low" orders by hour rate; otherwise chronological
            on_date: only shifts on this day
            from_date: only shifts on or after this day (defaults to today unless on_date is given)
            paginate: maximum number of shifts returned
        """
        try:
            response = self.client.table("shifts").select("*").eq("status", "open").execute()
            districts = self._districts()
            offers = self._offers_by_shift(professional_id)
        except Exception as e:
            logger.error(f"[ShiftService] Failed to load shift feed: {str(e)}", exc_info=True)
            raise PortalError(f"Failed to load shifts: {str(e)}", "ShiftService")

        # An exact day overrides the default of hiding past shifts
        earliest = from_date or (None if on_date else get_now_utc().date())
        dated = []
        for shift in response.data or []:
            day = _shift_day(shift)
            if day is None:
                continue
            if earliest and day < earliest:
                continue
            if on_date and day != on_date:
                continue
            dated.append((day, shift))

        if price in ("high", "low"):
            dated.sort(key=lambda item: float(item[1].get("hour_rate") or 0), reverse=price == "high")
        else:
            dated.sort(key=lambda item: (item[0], item[1].get("from") or ""))

        if paginate:
            dated = dated[:paginate]

        grouped: Dict[str, List[Dict[str, Any]]] = {}
        for _, shift in dated:
            item = self._with_application(self._priced(shift, districts), offers.get(shift["id"]))
            grouped.setdefault(shift["date"], []).append(item)
        return grouped

    def get_details(self, shift_id: int, professional_id: str, selections: Dict[str, List[str]]) -> Optional[Dict[str, Any]]:
        """
        Full shift view for one professional, or None when the shift is unknown.

        Required languages / skills / softwares come back as
        [{"title", "selected"}] where selected means the professional has it.
        """
        shift = self.get_shift(shift_id)
        if not shift:
            return None

        districts = self._districts()
        details = self._priced(shift, districts)
        details["district"] = districts.get(shift.get("district_id"))
        offer = self._offers_by_shift(professional_id).get(shift["id"])
        self._with_application(details, offer)

        for kind in ("languages", "skills", "softwares"):
            owned = set(selections.get(kind, []))
            details[kind] = [{"title": title, "selected": title in owned} for title in shift.get(kind) or []]

        assignment = self._assignment(professional_id, shift_id)
        details["assignment_status"] = assignment.get("status") if assignment else None
        return details

    # -- offers --------------------------------------------------------------

    def send_offer(
        self,
        professional_id: str,
        shift_id: int,
        kind: str,
        terms: Optional[Dict[str, Any]] = None,
    ) -> Dict[str, Any]:
        """
        Apply for an open shift.

        kind "accept" takes the pharmacy's terms as posted; "counter" carries
        only the terms the professional provided (blank comments dropped).

        Raises:
            NotFoundError: unknown shift
            ConflictError: shift closed or already applied
        """
        shift = self.get_shift(shift_id)
        if not shift:
            raise NotFoundError("Shift not found", "ShiftService")
        if shift.get("status") != "open":
            raise ConflictError("Shift is no longer available", "ShiftService")
        if shift["id"] in self._offers_by_shift(professional_id):
            raise ConflictError("You have already applied for this shift", "ShiftService")

        offer = {
            "shift_id": shift["id"],
            "professional_id": professional_id,
            "kind": kind,
            "created_at": get_now_utc().isoformat(),
        }
        for name in OFFER_TERMS:
            value = (terms or {}).get(name)
            if value is not None:
                offer[name] = value
        comment = (terms or {}).get("comment")
        if comment and comment.strip():
            offer["comment"] = comment.strip()

        try:
            self.client.table("shift_offers").insert(offer).execute()
        except Exception as e:
            logger.error(f"[ShiftService] Failed to store offer: {str(e)}", exc_info=True)
            raise PortalError(f"Failed to send offer: {str(e)}", "ShiftService")

        logger.info(f"[ShiftService] {kind} offer from {professional_id} on shift {shift_id}")
        return {**offer, "applied_msg": APPLIED_MESSAGES[kind]}

    # -- assignments ---------------------------------------------------------

    def my_shifts(self, professional_id: str, status: str = "all") -> List[Dict[str, Any]]:
        """Shifts assigned to a professional, optionally filtered by assignment status."""
        try:
            query = self.client.table("shift_assignments").select("*").eq("professional_id", professional_id)
            if status != "all":
                query = query.eq("status", status)
            assignments = query.execute().data or []
            if not assignments:
                return []
            shift_ids = [a["shift_id"] for a in assignments]
            shifts = self.client.table("shifts").select("*").in_("id", shift_ids).execute().data or []
            districts = self._districts()
        except Exception as e:
            logger.error(f"[ShiftService] Failed to load shifts for {professional_id}: {str(e)}", exc_info=True)
            raise PortalError(f"Failed to load shifts: {str(e)}", "ShiftService")

        by_id = {s["id"]: s for s in shifts}
        result = []
        for assignment in assignments:
            shift = by_id.get(assignment["shift_id"])
            if not shift:
                continue
            priced = self._priced(shift, districts)
            district = districts.get(shift.get("district_id")) or {}
            result.append({
                "id": shift["id"],
                "date": shift.get("date"),
                "from": shift.get("from"),
                "to": shift.get("to"),
                "hours": shift.get("hours"),
                "pharmacy_name": shift.get("pharmacy_name"),
                "pharmacy_address": shift.get("address"),
                "city": shift.get("city"),
                "district": district.get("name"),
                "total": priced["total"],
                "earning": priced["earning"],
                "status": assignment["status"],
            })
        result.sort(key=lambda s: _shift_day(s) or date.min)
        return result

    def _transition(self, professional_id: str, shift_id: int, allowed: Iterable[str], target: str) -> Dict[str, Any]:
        assignment = self._assignment(professional_id, shift_id)
        if not assignment:
            raise NotFoundError("Shift is not assigned to you", "ShiftService")
        if assignment["status"] not in allowed:
            raise ConflictError(
                f"Cannot move shift from '{assignment['status']}' to '{target}'", "ShiftService"
            )
        try:
            self.client.table("shift_assignments").update({
                "status": target,
                "updated_at": get_now_utc().isoformat(),
            }).eq("id", assignment["id"]).execute()
        except Exception as e:
            logger.error(f"[ShiftService] Failed to update assignment: {str(e)}", exc_info=True)
            raise PortalError(f"Failed to update shift: {str(e)}", "ShiftService")
        logger.info(f"[ShiftService] Shift {shift_id} for {professional_id}: {assignment['status']} -> {target}")
        return {**assignment, "status": target}

    def accept_assigned(self, professional_id: str, shift_id: int) -> Dict[str, Any]:
        return self._transition(professional_id, shift_id, ("assigned",), "upcoming")

    def cancel(self, professional_id: str, shift_id: int) -> Dict[str, Any]:
        return self._transition(professional_id, shift_id, ("assigned", "upcoming"), "cancel")

    # -- back-office ---------------------------------------------------------

    def create_shift(self, data: Dict[str, Any]) -> Dict[str, Any]:
        row = {**data, "status": "open", "created_at": get_now_utc().isoformat()}
        try:
            response = self.client.table("shifts").insert(row).execute()
            created = response.data[0] if response.data else row
        except Exception as e:
            logger.error(f"[ShiftService] Failed to create shift: {str(e)}", exc_info=True)
            raise PortalError(f"Failed to create shift: {str(e)}", "ShiftService")
        logger.info(f"[ShiftService] ✅ Created shift {created.get('id')} on {created.get('date')}")
        return created

    def assign(self, shift_id: int, professional_id: str) -> Dict[str, Any]:
        """
        Assign a shift to a professional and close it to new offers.

        Raises:
            NotFoundError: unknown shift
            ConflictError: shift already closed
        """
        shift = self.get_shift(shift_id)
        if not shift:
            raise NotFoundError("Shift not found", "ShiftService")
        if shift.get("status") != "open":
            raise ConflictError("Shift is already assigned", "ShiftService")

        now = get_now_utc().isoformat()
        assignment = {
            "shift_id": shift["id"],
            "professional_id": professional_id,
            "status": "assigned",
            "updated_at": now,
        }
        try:
            self.client.table("shift_assignments").insert(assignment).execute()
            self.client.table("shifts").update({"status": "closed"}).eq("id", shift["id"]).execute()
        except Exception as e:
            logger.error(f"[ShiftService] Failed to assign shift: {str(e)}", exc_info=True)
            raise PortalError(f"Failed to assign shift: {str(e)}", "ShiftService")
        logger.info(f"[ShiftService] Shift {shift_id} assigned to {professional_id}")
        return assignment
