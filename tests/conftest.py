"""Pytest fixtures for dagnorm tests."""

from __future__ import annotations

import pytest

from dagnorm.identifiers import DAG_CBOR_CODE, DAG_PB_CODE
from tests.helpers import FakeResolver


@pytest.fixture
def fake_resolver() -> FakeResolver:
    """Resolver knowing a handful of ``bafy`` CIDs and their codecs."""
    return FakeResolver(
        {
            "bafy01": DAG_PB_CODE,
            "bafy10": DAG_CBOR_CODE,
        }
    )
