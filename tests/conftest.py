"""Shared test fixtures."""

import pytest
from fastapi.testclient import TestClient
from sqlmodel import SQLModel, create_engine
from sqlmodel.pool import StaticPool

from tracker.main import app
from tracker.models import CustomerCreate
from tracker.services.workspace import Workspace, get_workspace
from tracker.store import SQLKeyValueStore


@pytest.fixture(name="engine")
def engine_fixture():
    """Create an in-memory SQLite database for testing."""
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    SQLModel.metadata.create_all(engine)
    yield engine
    SQLModel.metadata.drop_all(engine)


@pytest.fixture(name="store")
def store_fixture(engine) -> SQLKeyValueStore:
    """Key/value store over the test database."""
    return SQLKeyValueStore(engine)


@pytest.fixture(name="workspace")
def workspace_fixture(store) -> Workspace:
    """A freshly seeded workspace: three required fields, one default template."""
    return Workspace(store)


@pytest.fixture(name="client")
def client_fixture(workspace: Workspace):
    """Create a test client bound to the test workspace."""

    def get_workspace_override():
        return workspace

    app.dependency_overrides[get_workspace] = get_workspace_override
    client = TestClient(app)
    yield client
    app.dependency_overrides.clear()


def new_customer(name="Asha", email="asha@example.com", phone="9000000001", **kwargs):
    """Build customer input with the three seeded required fields filled in."""
    return CustomerCreate(values={"name": name, "email": email, "phone": phone}, **kwargs)


@pytest.fixture(name="make_customer")
def make_customer_fixture():
    """Factory for customer input."""
    return new_customer


@pytest.fixture(name="sample_customers")
def sample_customers_fixture(workspace: Workspace):
    """Three customers, one per workflow stage."""
    return [
        workspace.customers.create(new_customer("Asha", "asha@example.com", "9000000001")),
        workspace.customers.create(
            new_customer("Ben", "ben@example.com", "9000000002", status="in-progress", amount="250")
        ),
        workspace.customers.create(
            new_customer("Chen", "chen@example.com", "9000000003", status="completed", paid=True, amount="100")
        ),
    ]
