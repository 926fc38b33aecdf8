import pytest

from pos.application.add_product import AddProductHandler
from pos.infrastructure.bootstrap import Container, build_container
from pos.infrastructure.config import Settings


@pytest.fixture
def container() -> Container:
    """A fresh in-memory SQLite database per test."""
    return build_container(Settings(database_url="sqlite://"))


@pytest.fixture
def seeded(container: Container) -> Container:
    add = AddProductHandler(container.unit_of_work())
    add.handle("TEST001", "Test Product 1", "19.99")
    add.handle("TEST002", "Test Product 2", "29.95")
    return container
