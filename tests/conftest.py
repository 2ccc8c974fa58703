import pytest
from fastapi.testclient import TestClient

from app.main import create_app
from app.repositories import InMemoryTaskRepository
from app.services import TaskManager


@pytest.fixture()
def repository() -> InMemoryTaskRepository:
    return InMemoryTaskRepository()


@pytest.fixture()
def service(repository: InMemoryTaskRepository) -> TaskManager:
    return TaskManager(repository)


@pytest.fixture()
def app(repository: InMemoryTaskRepository):
    """A fresh application, so every test starts with an empty store."""
    return create_app(repository=repository)


@pytest.fixture()
def client(app) -> TestClient:
    return TestClient(app)
