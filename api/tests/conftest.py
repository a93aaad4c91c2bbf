import pytest
from fastapi.testclient import TestClient

from db.queries.papers import PaperQueries
from db.queries.storage import StorageQueries
from dependencies.auth import UserContext, get_current_user, get_user_supabase
from main import app
from routes.papers import get_queries
from routes.uploads import get_ingestion
from services.upload import QuestionPaperIngestion

from tests.fakes import USER_ID, FakeSupabase


@pytest.fixture
def supabase():
    return FakeSupabase()


@pytest.fixture
def bucket(supabase):
    return supabase.storage.from_("question-papers")


@pytest.fixture
def ingestion(supabase):
    return QuestionPaperIngestion(storage=StorageQueries(bucket="question-papers", client=supabase))


@pytest.fixture
def user():
    return UserContext(user_id=USER_ID, jwt="test-token", role="authenticated")


@pytest.fixture
def client(supabase, ingestion, user):
    app.dependency_overrides[get_current_user] = lambda: user
    app.dependency_overrides[get_user_supabase] = lambda: supabase
    app.dependency_overrides[get_ingestion] = lambda: ingestion
    app.dependency_overrides[get_queries] = lambda: PaperQueries(client=supabase)
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()


@pytest.fixture
def anonymous_client(ingestion):
    """Real auth dependency; storage still faked."""
    app.dependency_overrides[get_ingestion] = lambda: ingestion
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()
