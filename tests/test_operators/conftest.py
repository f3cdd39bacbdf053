from __future__ import annotations

import pytest

from json_expressions import create_expression_engine, packs


@pytest.fixture(scope="session")
def engine():
    return create_expression_engine(packs=[packs.all])


@pytest.fixture
def apply(engine):
    return engine.apply
