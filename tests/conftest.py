import pytest
import sys
import os
sys.path.append(os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from fastapi.testclient import TestClient

from smartpaper.config import Settings
from smartpaper.main import create_app
from smartpaper.storage import MemStorage, SqlStorage, seed_storage

# Keep hashing cheap in tests; the format and verification path are unchanged
TEST_HASH_ITERATIONS = 1000


@pytest.fixture
def settings():
    return Settings(
        _env_file=None,
        storage_backend="memory",
        seed_data=True,
        password_hash_iterations=TEST_HASH_ITERATIONS,
    )


@pytest.fixture(params=["memory", "sql"])
def storage(request):
    """
    An empty store for each test, run once per backend.
    """
    if request.param == "memory":
        store = MemStorage()
    else:
        store = SqlStorage("sqlite://")
    try:
        yield store
    finally:
        store.close()


@pytest.fixture
def seeded_storage():
    store = MemStorage()
    seed_storage(store, iterations=TEST_HASH_ITERATIONS)
    return store


@pytest.fixture
def client(settings, seeded_storage):
    """
    A TestClient bound to a fresh app and a freshly seeded in-memory store.
    """
    app = create_app(settings=settings, storage=seeded_storage)
    with TestClient(app) as c:
        yield c


@pytest.fixture
def seeded_ids(seeded_storage):
    teacher = seeded_storage.get_user_by_username("teacher1")
    student = seeded_storage.get_user_by_username("student1")
    math_class = seeded_storage.get_classes_by_teacher(teacher.id)[0]
    paper = seeded_storage.get_papers_by_teacher(teacher.id)[0]
    return {
        "teacher": teacher.id,
        "student": student.id,
        "class": math_class.id,
        "paper": paper.id,
    }
