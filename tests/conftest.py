import os
from itertools import product

import pytest
from fastapi.testclient import TestClient

from precedence_sim.api.main import app
from precedence_sim.core.advice.models import AdviceType
from precedence_sim.core.observability.metrics import reset_metrics


@pytest.fixture(scope="session", autouse=True)
def _force_test_env():
    # Make runtime behave deterministically in tests
    for name in ("PRECEDENCE_DEFAULT_RULE", "PRECEDENCE_DEMO_FILE", "PRECEDENCE_EXPORT_GRAPH"):
        os.environ.pop(name, None)


@pytest.fixture(autouse=True)
def _clean_metrics():
    reset_metrics()
    yield
    reset_metrics()


@pytest.fixture()
def client():
    return TestClient(app)


@pytest.fixture(scope="session")
def type_sequences():
    """Every advice-type declaration sequence of length 1..5."""
    return [list(seq) for n in range(1, 6) for seq in product(list(AdviceType), repeat=n)]
