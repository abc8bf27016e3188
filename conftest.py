"""Top-level pytest configuration.

Lives at the repository root so ``tests.*`` helper modules are importable and
so every test starts from zeroed client metrics.
"""

import pytest

from schemacache.schema import metrics as schema_metrics


@pytest.fixture(autouse=True)
def _reset_schema_metrics():
    schema_metrics.reset_metrics()
    yield
