"""
Pytest configuration and shared fixtures for Jobly data layer tests

Repository tests run against an AsyncMock standing in for DatabaseConnection,
so statements and parameters can be asserted without a live PostgreSQL.
"""

import pytest
from pathlib import Path
import sys
from unittest.mock import AsyncMock

# Add project root to path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from container import RepositoryContainer


@pytest.fixture
def mock_db():
    """Executor double: fetch/fetchrow/run/execute are AsyncMocks returning nothing by default"""
    db = AsyncMock()
    db.fetch = AsyncMock(return_value=[])
    db.fetchrow = AsyncMock(return_value=None)
    db.run = AsyncMock(return_value=[])
    db.execute = AsyncMock(return_value="OK")
    return db


@pytest.fixture
def repos(mock_db):
    """Provides a RepositoryContainer bound to the mock executor"""
    return RepositoryContainer(mock_db)


@pytest.fixture
def company_row():
    return {
        "handle": "c1",
        "name": "C1",
        "description": "Desc1",
        "numEmployees": 1,
        "logoUrl": "http://c1.img",
    }


@pytest.fixture
def job_row():
    return {
        "id": 7,
        "title": "J1",
        "salary": 100,
        "equity": None,
        "companyHandle": "c1",
    }
