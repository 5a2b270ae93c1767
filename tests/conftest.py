import pytest

from fakes import seeded_store
from services.vote_service import VoteService


@pytest.fixture
def store():
    return seeded_store()


@pytest.fixture
def service(store):
    return VoteService(store, max_attempts=5, retry_backoff=0.001, attempt_timeout=1.0)
