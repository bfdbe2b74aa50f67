#!/usr/bin/env python3
"""
Seed reference data in Supabase: screening questions, districts and,
optionally, a sample professional.

Run from the project root: python3 seed_data.py

Set SEED_SAMPLE_PASSWORD to also create the sample professional
(john.doe@pharmacy.com) with that password.
"""
import os
import sys
import uuid
from pathlib import Path

# Ensure project root is on path
sys.path.insert(0, str(Path(__file__).resolve().parent))

import bcrypt
from portal.db.supabase import get_supabase
from portal.utils.datetime_utils import get_now_utc
from portal.utils.validators import password_rule_error

QUESTIONS = [
    {"id": 3, "question": "Have you ever been convicted of a felony or criminal offense that would affect your ability to practice pharmacy?"},
    {"id": 4, "question": "Have you ever been found guilty of professional malpractice, negligence, or misconduct in any healthcare setting?"},
    {"id": 5, "question": "Are you legally eligible to work in Canada without any restrictions?"},
    {"id": 6, "question": "Have you ever had your Provincial License restricted, suspended, or revoked for any reason?"},
    {"id": 7, "question": "Is your license currently registered as active and in good standing with your provincial regulatory authority?"},
]

# Provincial sales tax applied on top of shift earnings, in percent
DISTRICTS = [
    {"id": 1, "name": "Ontario", "tax": 13},
    {"id": 2, "name": "British Columbia", "tax": 5},
    {"id": 3, "name": "Quebec", "tax": 5},
    {"id": 4, "name": "Alberta", "tax": 5},
    {"id": 5, "name": "Manitoba", "tax": 5},
    {"id": 6, "name": "Saskatchewan", "tax": 5},
    {"id": 7, "name": "Nova Scotia", "tax": 15},
    {"id": 8, "name": "New Brunswick", "tax": 15},
    {"id": 9, "name": "Newfoundland and Labrador", "tax": 15},
    {"id": 10, "name": "Prince Edward Island", "tax": 15},
]

SAMPLE_PROFESSIONAL = {
    "first_name": "John",
    "last_name": "Doe",
    "email": "john.doe@pharmacy.com",
    "phone": "+15551234567",
    "address": "123 Main Street, Suite 100",
    "city": "Toronto",
    "district_id": 1,
    "postcode": "M5V 2T6",
    "position": "Pharmacist",
    "licence": "ON-123456",
    "province": "Ontario",
    "licence_image": "",
    "profile_image": "",
    "lat": 43.6532,
    "lng": -79.3832,
    "business_name": "Community Pharmacy Plus",
    "gst": "123456789",
    "business_type": "Independent Pharmacy",
    "experience": 15,
    "completed": True,
    "has_bank": False,
    "has_languages": True,
    "has_skills": True,
    "has_softwares": True,
    "status": "active",
    "is_verified": True,
    "phone_verified": True,
}

SAMPLE_SELECTIONS = {
    "professional_languages": ["English", "French", "Spanish"],
    "professional_skills": ["Blister pack", "Injection Certified", "Medication Review"],
    "professional_softwares": ["Kroll", "Propel"],
}


def seed_reference(client):
    client.table("questions").upsert(QUESTIONS, on_conflict="id").execute()
    print(f"Seeded {len(QUESTIONS)} questions")
    client.table("districts").upsert(DISTRICTS, on_conflict="id").execute()
    print(f"Seeded {len(DISTRICTS)} districts")


def seed_sample_professional(client, password):
    existing = client.table("professionals").select("id").eq("email", SAMPLE_PROFESSIONAL["email"]).execute()
    if existing.data:
        print("Sample professional already exists")
        return

    now = get_now_utc().isoformat()
    professional_id = str(uuid.uuid4())
    client.table("professionals").insert({
        **SAMPLE_PROFESSIONAL,
        "id": professional_id,
        "password_hash": bcrypt.hashpw(password.encode("utf-8"), bcrypt.gensalt(rounds=12)).decode("utf-8"),
        "created_at": now,
        "updated_at": now,
    }).execute()

    for table, names in SAMPLE_SELECTIONS.items():
        client.table(table).insert([{"professional_id": professional_id, "name": n} for n in names]).execute()

    print(f"Created sample professional: {SAMPLE_PROFESSIONAL['email']} ({professional_id})")


def main():
    client = get_supabase()
    seed_reference(client)

    password = os.getenv("SEED_SAMPLE_PASSWORD")
    if not password:
        print("SEED_SAMPLE_PASSWORD not set, skipping sample professional")
        return

    rule_error = password_rule_error(password)
    if rule_error:
        print(f"ERROR: SEED_SAMPLE_PASSWORD rejected: {rule_error}")
        sys.exit(1)

    seed_sample_professional(client, password)


if __name__ == "__main__":
    main()
