"""
Pytest fixtures for the profile API tests.
Swaps the Supabase client for an in-memory fake and provides two users.
"""
import os
import pytest
from fastapi.testclient import TestClient

# Must be set before settings load; the fake client replaces the real one anyway
os.environ.setdefault("SUPABASE_URL", "https://example.supabase.co")
os.environ.setdefault("SUPABASE_KEY", "test-anon-key")

from app.main import app
from app.core.dependencies import get_caller_supabase
from app.database.supabase_client import get_supabase
from app.modules.auth.service import AuthService, clear_identity_cache
from app.modules.auth.schemas import Identity
from app.modules.profiles.service import ProfileService
from app.modules.profiles.storage import SupabaseResumeStorage
from app.modules.profiles.schemas import ResumeUpload

from tests.fakes import FakeSupabase, ALICE_ID, BOB_ID, ALICE_TOKEN, BOB_TOKEN, PDF


@pytest.fixture(autouse=True)
def reset_identity_cache():
    clear_identity_cache()
    yield
    clear_identity_cache()


@pytest.fixture
def supabase():
    fake = FakeSupabase()
    fake.auth.add_user(ALICE_TOKEN, ALICE_ID, "alice@example.com")
    fake.auth.add_user(BOB_TOKEN, BOB_ID, "bob@example.com")
    fake.auth.passwords["alice@example.com"] = ("s3cret", ALICE_TOKEN)
    return fake


@pytest.fixture
def auth_service(supabase):
    return AuthService(supabase)


@pytest.fixture
def storage(supabase):
    return SupabaseResumeStorage(supabase, bucket_name="resumes")


@pytest.fixture
def service(supabase, storage, auth_service):
    return ProfileService(supabase, storage, auth_service)


@pytest.fixture
def alice():
    return Identity(id=ALICE_ID, email="alice@example.com")


@pytest.fixture
def bob():
    return Identity(id=BOB_ID, email="bob@example.com")


@pytest.fixture
def make_resume():
    def _make(filename="resume.pdf", content_type=PDF, size=1024):
        return ResumeUpload(filename=filename, content_type=content_type, content=b"x" * size)
    return _make


@pytest.fixture
def client(supabase):
    """TestClient wired to the fake Supabase client."""
    app.dependency_overrides[get_supabase] = lambda: supabase
    app.dependency_overrides[get_caller_supabase] = lambda: supabase
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()


@pytest.fixture
def alice_headers():
    return {"Authorization": f"Bearer {ALICE_TOKEN}"}
