from pathlib import Path

import pytest
import yaml

FIXTURES = Path(__file__).parent / "fixtures"


def load_fixture(name: str) -> dict:
    return yaml.safe_load((FIXTURES / name).read_text(encoding="utf-8"))


@pytest.fixture
def petstore() -> dict:
    return load_fixture("petstore.yaml")


@pytest.fixture
def petstore_v2() -> dict:
    return load_fixture("petstore-v2.yaml")


@pytest.fixture
def petstore_swagger2() -> dict:
    return load_fixture("petstore-swagger2.yaml")
