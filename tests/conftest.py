import os

os.environ["ENV_STATE"] = "test"

import pytest
from fastapi.testclient import TestClient

from formapi.main import app


@pytest.fixture()
def client():
    with TestClient(app) as c:
        yield c


@pytest.fixture()
def contact_values():
    return {
        "name": "Al",
        "email": "a@b.co",
        "message": "hi",
        "category": "option1",
        "preferredContact": "email",
        "birthdate": "2000-01-01",
        "age": 30,
    }
