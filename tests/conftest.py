"""
Pytest configuration and fixtures.

This file provides pytest-specific configuration and fixtures.
For standard test utilities, see tests/__init__.py
"""

import pytest


def pytest_configure(config):
    """Configure pytest markers."""
    config.addinivalue_line(
        "markers", "db: marks tests as requiring database (deselect with '-m \"not db\"')"
    )


@pytest.fixture
def db_engine():
    """Function-scoped engine with freshly created tables."""
    from tests import create_test_engine, drop_test_tables

    engine = create_test_engine()
    yield engine
    drop_test_tables(engine)
    engine.dispose()


@pytest.fixture
def session_factory(db_engine):
    from tests import create_test_session_factory
    return create_test_session_factory(db_engine)
