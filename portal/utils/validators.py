"""
Field validation shared by the registration, password and bank account flows.

Validators return a dict of field -> message; an empty dict means valid.
"""

import re
from typing import Dict, Optional

TRANSIT_RE = re.compile(r"[0-9]{5}")
INSTITUTION_RE = re.compile(r"[0-9]{3}")
ACCOUNT_RE = re.compile(r"[0-9]{7,12}")

MIN_PASSWORD_LENGTH = 8


def password_rule_error(password: str) -> Optional[str]:
    """Return the first broken password rule, or None."""
    if len(password) < MIN_PASSWORD_LENGTH:
        return f"Password must be at least {MIN_PASSWORD_LENGTH} characters"
    if not re.search(r"[a-z]", password) or not re.search(r"[A-Z]", password) or not re.search(r"\d", password):
        return "Password must contain uppercase, lowercase, and number"
    return None


def validate_password_change(
    old_password: Optional[str],
    password: Optional[str],
    password_confirmation: Optional[str],
) -> Dict[str, str]:
    errors: Dict[str, str] = {}

    if not old_password:
        errors["old_password"] = "Current password is required"

    if not password:
        errors["password"] = "New password is required"
    else:
        rule_error = password_rule_error(password)
        if rule_error:
            errors["password"] = rule_error
        elif old_password and password == old_password:
            errors["password"] = "New password must be different from current password"

    if not password_confirmation:
        errors["password_confirmation"] = "Please confirm your new password"
    elif password and password != password_confirmation:
        errors["password_confirmation"] = "Passwords do not match"

    return errors


def validate_bank_account(
    transit_number: Optional[str],
    institution_number: Optional[str],
    account_number: Optional[str],
    business_name: Optional[str],
    business_number: Optional[str],
) -> Dict[str, str]:
    errors: Dict[str, str] = {}

    if not transit_number:
        errors["transit_number"] = "Transit number is required"
    elif not TRANSIT_RE.fullmatch(transit_number):
        errors["transit_number"] = "Transit number must be exactly 5 digits"

    if not institution_number:
        errors["institution_number"] = "Institution number is required"
    elif not INSTITUTION_RE.fullmatch(institution_number):
        errors["institution_number"] = "Institution number must be exactly 3 digits"

    if not account_number:
        errors["account_number"] = "Account number is required"
    elif not ACCOUNT_RE.fullmatch(account_number):
        errors["account_number"] = "Account number must be between 7-12 digits"

    if not business_name or not business_name.strip():
        errors["business_name"] = "Business name is required"

    if not business_number or not business_number.strip():
        errors["business_number"] = "Business number is required"

    return errors


def mask_account_number(account_number: str) -> str:
    if len(account_number) <= 4:
        return account_number
    return "*" * (len(account_number) - 4) + account_number[-4:]
