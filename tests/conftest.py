"""
Shared test fixtures for the CodeIR API.
Replaces the Supabase SDK with an in-memory fake and mints real HS256 JWTs.
Zero network calls.
"""
import time
from types import SimpleNamespace

import jwt
import pytest

JWT_SECRET = "test-jwt-secret-for-codeir-suite-0123456789"

STUDENT_ID = "11111111-aaaa-4bbb-8ccc-000000000001"
OTHER_STUDENT_ID = "22222222-aaaa-4bbb-8ccc-000000000002"
INSTRUCTOR_ID = "99999999-aaaa-4bbb-8ccc-000000000009"


class FakeAuthError(Exception):
    """Stands in for the SDK's AuthApiError (carries a .message)."""

    def __init__(self, message):
        super().__init__(message)
        self.message = message


class FakeQuery:
    """Chained PostgREST-style query builder over a dict of tables."""

    def __init__(self, db, table):
        self.db = db
        self.table = table
        self.op = None
        self.payload = None
        self.filters = []
        self.order_by = None
        self.columns = None
        self.on_conflict = None

    def select(self, columns="*"):
        self.op = "select"
        self.columns = columns
        return self

    def eq(self, column, value):
        self.filters.append((column, value))
        return self

    def order(self, column, desc=False):
        self.order_by = (column, desc)
        return self

    def insert(self, row):
        self.op = "insert"
        self.payload = row
        return self

    def upsert(self, row, on_conflict=None):
        self.op = "upsert"
        self.payload = row
        self.on_conflict = on_conflict
        return self

    def execute(self):
        self.db.calls.append(self)
        if self.db.error is not None:
            raise self.db.error

        rows = self.db.tables.setdefault(self.table, [])
        if self.op == "select":
            data = [dict(r) for r in rows if all(r.get(c) == v for c, v in self.filters)]
            if self.order_by:
                column, desc = self.order_by
                data.sort(key=lambda r: r.get(column) or "", reverse=desc)
            return SimpleNamespace(data=data)

        if self.op == "insert":
            row = dict(self.payload, id=f"{self.table}-{len(rows) + 1}")
            rows.append(row)
            return SimpleNamespace(data=[row])

        if self.op == "upsert":
            key = self.on_conflict
            for existing in rows:
                if key and existing.get(key) == self.payload.get(key):
                    existing.update(self.payload)
                    return SimpleNamespace(data=[dict(existing)])
            row = dict(self.payload, id=f"{self.table}-{len(rows) + 1}")
            rows.append(row)
            return SimpleNamespace(data=[row])

        raise AssertionError(f"Unsupported operation {self.op}")


class FakeAuth:
    def __init__(self):
        self.sign_up_response = None
        self.sign_in_response = None
        self.error = None
        self.requests = []
        self.admin = SimpleNamespace(sign_out=self._sign_out)
        self.signed_out = []

    def sign_up(self, credentials):
        self.requests.append(("sign_up", credentials))
        if self.error is not None:
            raise self.error
        return self.sign_up_response

    def sign_in_with_password(self, credentials):
        self.requests.append(("sign_in_with_password", credentials))
        if self.error is not None:
            raise self.error
        return self.sign_in_response

    def _sign_out(self, token, scope="global"):
        self.signed_out.append(token)


class FakeSupabase:
    def __init__(self):
        self.tables = {"submissions": [], "evaluations": []}
        self.calls = []
        self.error = None
        self.auth = FakeAuth()
        self.tokens = []
        self.postgrest = SimpleNamespace(auth=self.tokens.append)

    def table(self, name):
        return FakeQuery(self, name)


def make_user(user_id=STUDENT_ID, email="ada@uni.edu", role="student"):
    return SimpleNamespace(id=user_id, email=email, user_metadata={"role": role})


def make_session(user):
    return SimpleNamespace(
        access_token="access-" + user.id,
        refresh_token="refresh-" + user.id,
        expires_at=int(time.time()) + 3600,
        user=user,
    )


def make_token(user_id=STUDENT_ID, email="ada@uni.edu", role="student", expires_in=3600, secret=JWT_SECRET):
    payload = {
        "sub": user_id,
        "email": email,
        "aud": "authenticated",
        "role": "authenticated",
        "exp": int(time.time()) + expires_in,
        "user_metadata": {"role": role} if role else {},
    }
    return jwt.encode(payload, secret, algorithm="HS256")


def bearer(token):
    return {"Authorization": "Bearer " + token}


@pytest.fixture(autouse=True)
def audit_file(tmp_path, monkeypatch):
    """Keep audit entries out of the home directory."""
    import codeir.audit as audit
    path = str(tmp_path / "audit.log")
    monkeypatch.setattr(audit, "AUDIT_LOG_FILE", path)
    return path


@pytest.fixture
def fake_supabase(monkeypatch):
    """Route every create_client() call to one in-memory fake."""
    from codeir.services import supabase_client

    fake = FakeSupabase()
    monkeypatch.setenv("SUPABASE_URL", "https://example.supabase.co")
    monkeypatch.setenv("SUPABASE_ANON_KEY", "anon-key")
    monkeypatch.setattr(supabase_client, "create_client", lambda url, key: fake)
    supabase_client.reset_client()
    yield fake
    supabase_client.reset_client()


@pytest.fixture
def client(monkeypatch, fake_supabase):
    monkeypatch.setenv("SUPABASE_JWT_SECRET", JWT_SECRET)
    from codeir.app import app
    app.config["TESTING"] = True
    with app.test_client() as c:
        yield c


@pytest.fixture
def student_headers():
    return bearer(make_token())


@pytest.fixture
def instructor_headers():
    return bearer(make_token(user_id=INSTRUCTOR_ID, email="turing@uni.edu", role="instructor"))
