import os

# Configuration is read at import time, so the environment is prepared first
os.environ.setdefault("SUPABASE_URL", "http://localhost:54321")
os.environ.setdefault("SUPABASE_SERVICE_KEY", "test-service-key")
os.environ.setdefault("JWT_SECRET_KEY", "test-jwt-secret")
os.environ["APP_ENV"] = "development"
for _name in ("SMS_GATEWAY_URL", "SMS_API_TOKEN", "SMTP_HOST", "SMTP_USER", "SMTP_PASSWORD", "API_KEY_HASH"):
    os.environ.pop(_name, None)

import copy
import itertools

import bcrypt
import pytest
from fastapi.testclient import TestClient

from portal.db import supabase as supabase_db


class FakeResponse:
    def __init__(self, data):
        self.data = data


class FakeQuery:
    """Subset of the PostgREST query builder used by the services."""

    def __init__(self, db, table):
        self.db = db
        self.table = table
        self.action = "select"
        self.columns = "*"
        self.payload = None
        self.on_conflict = None
        self.filters = []
        self.order_by = []
        self.limit_n = None

    def select(self, columns="*", count=None):
        self.action = "select"
        self.columns = columns
        return self

    def insert(self, payload):
        self.action = "insert"
        self.payload = payload
        return self

    def update(self, payload):
        self.action = "update"
        self.payload = payload
        return self

    def upsert(self, payload, on_conflict=None):
        self.action = "upsert"
        self.payload = payload
        self.on_conflict = on_conflict
        return self

    def delete(self):
        self.action = "delete"
        return self

    def eq(self, column, value):
        self.filters.append(lambda row: row.get(column) == value)
        return self

    def neq(self, column, value):
        self.filters.append(lambda row: row.get(column) != value)
        return self

    def in_(self, column, values):
        values = list(values)
        self.filters.append(lambda row: row.get(column) in values)
        return self

    def order(self, column, desc=False):
        self.order_by.append((column, desc))
        return self

    def limit(self, n):
        self.limit_n = n
        return self

    def _matches(self, row):
        return all(f(row) for f in self.filters)

    def _new_row(self, item):
        row = dict(item)
        if "id" not in row:
            row["id"] = next(self.db.ids.setdefault(self.table, itertools.count(1000)))
        return row

    def execute(self):
        rows = self.db.tables.setdefault(self.table, [])

        if self.action == "select":
            result = [copy.deepcopy(r) for r in rows if self._matches(r)]
            for column, desc in reversed(self.order_by):
                result.sort(
                    key=lambda r: (r.get(column) is None, r.get(column) if r.get(column) is not None else ""),
                    reverse=desc,
                )
            if self.limit_n is not None:
                result = result[:self.limit_n]
            if self.columns.strip() != "*":
                names = [c.strip() for c in self.columns.split(",")]
                result = [{n: r.get(n) for n in names} for r in result]
            return FakeResponse(result)

        if self.action == "insert":
            items = self.payload if isinstance(self.payload, list) else [self.payload]
            created = [self._new_row(item) for item in items]
            rows.extend(created)
            return FakeResponse(copy.deepcopy(created))

        if self.action == "update":
            changed = []
            for row in rows:
                if self._matches(row):
                    row.update(copy.deepcopy(self.payload))
                    changed.append(copy.deepcopy(row))
            return FakeResponse(changed)

        if self.action == "upsert":
            keys = [k.strip() for k in (self.on_conflict or "id").split(",")]
            items = self.payload if isinstance(self.payload, list) else [self.payload]
            result = []
            for item in items:
                existing = next((r for r in rows if all(r.get(k) == item.get(k) for k in keys)), None)
                if existing is not None:
                    existing.update(copy.deepcopy(item))
                    result.append(copy.deepcopy(existing))
                else:
                    row = self._new_row(item)
                    rows.append(row)
                    result.append(copy.deepcopy(row))
            return FakeResponse(result)

        if self.action == "delete":
            removed = [r for r in rows if self._matches(r)]
            self.db.tables[self.table] = [r for r in rows if not self._matches(r)]
            return FakeResponse(copy.deepcopy(removed))

        raise AssertionError(f"Unsupported action {self.action}")


class FakeBucket:
    def __init__(self, db, name):
        self.db = db
        self.name = name

    def upload(self, path, file, file_options=None):
        self.db.files[(self.name, path)] = (file, file_options)
        return {"Key": f"{self.name}/{path}"}

    def get_public_url(self, path):
        return f"https://storage.test/{self.name}/{path}"


class FakeStorage:
    def __init__(self, db):
        self.db = db

    def from_(self, name):
        return FakeBucket(self.db, name)


class FakeSupabase:
    """In-memory stand-in for the Supabase client."""

    def __init__(self):
        self.reset()

    def reset(self):
        self.tables = {}
        self.files = {}
        self.ids = {}

    def table(self, name):
        return FakeQuery(self, name)

    @property
    def storage(self):
        return FakeStorage(self)

    def rows(self, table):
        return self.tables.get(table, [])


fake_supabase = FakeSupabase()
# Services capture the client when the container is imported
supabase_db._client = fake_supabase

from portal.main import app  # noqa: E402
from portal.services.container import auth_service  # noqa: E402
from portal.utils.limiter import limiter  # noqa: E402

limiter.enabled = False

PASSWORD = "Password123"

DISTRICTS = [
    {"id": 1, "name": "Ontario", "tax": 13},
    {"id": 4, "name": "Alberta", "tax": 5},
]


def make_professional(db, **overrides):
    """Insert a professional row directly and return it."""
    row = {
        "id": overrides.pop("id", f"pro-{len(db.rows('professionals')) + 1}"),
        "first_name": "John",
        "last_name": "Doe",
        "email": "john.doe@pharmacy.com",
        "phone": "+15551234567",
        # Low cost factor keeps the suite fast; checkpw accepts any cost
        "password_hash": bcrypt.hashpw(PASSWORD.encode("utf-8"), bcrypt.gensalt(rounds=4)).decode("utf-8"),
        "address": "123 Main Street",
        "city": "Toronto",
        "district_id": 1,
        "postcode": "M5V 2T6",
        "position": "Pharmacist",
        "licence": "ON-123456",
        "province": "Ontario",
        "licence_image": "",
        "profile_image": "",
        "lat": 0,
        "lng": 0,
        "business_name": "Community Pharmacy Plus",
        "gst": "123456789",
        "business_type": "Independent Pharmacy",
        "experience": 15,
        "completed": True,
        "has_bank": False,
        "has_languages": False,
        "has_skills": False,
        "has_softwares": False,
        "status": "active",
        "is_verified": True,
        "phone_verified": False,
    }
    row.update(overrides)
    db.table("professionals").insert(row).execute()
    return row


@pytest.fixture(autouse=True)
def fake_db():
    fake_supabase.reset()
    fake_supabase.table("districts").insert(DISTRICTS).execute()
    yield fake_supabase
    fake_supabase.reset()


@pytest.fixture
def client():
    return TestClient(app)


@pytest.fixture
def professional(fake_db):
    return make_professional(fake_db)


@pytest.fixture
def auth_headers(professional):
    token = auth_service.generate_token(professional["id"], phone=professional["phone"])
    return {"Authorization": f"Bearer {token}"}
