"""
Shared pytest fixtures for 2amInDiscord tests.
"""

import pytest
import sqlite3
import os
import sys
from datetime import datetime
from types import SimpleNamespace
from unittest.mock import AsyncMock

# Add project root to path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))


# ============================================================================
# Database Fixtures
# ============================================================================

@pytest.fixture
def db_connection():
    """Create an in-memory SQLite database with the required schema."""
    conn = sqlite3.connect(":memory:")
    conn.row_factory = sqlite3.Row
    cursor = conn.cursor()

    cursor.execute("""
        CREATE TABLE servers (
            server_id TEXT PRIMARY KEY,
            channel_id TEXT,
            frequency INTEGER NOT NULL DEFAULT 24,
            mute_until TEXT,
            created_at DATETIME DEFAULT CURRENT_TIMESTAMP,
            updated_at DATETIME DEFAULT CURRENT_TIMESTAMP
        )
    """)

    conn.commit()
    yield conn
    conn.close()


@pytest.fixture
def tenant_repository(db_connection):
    """Create a TenantRepository with the test database."""
    from twoam.repositories.tenant import TenantRepository
    from twoam.repositories.base import BaseRepository

    BaseRepository.set_shared_connection(db_connection)

    repo = TenantRepository()
    yield repo

    BaseRepository.clear_shared_connection()


# ============================================================================
# Sample Data Fixtures
# ============================================================================

@pytest.fixture
def now():
    """Fixed reference time used by scheduling tests."""
    return datetime(2030, 1, 1, 10, 0, 0)


@pytest.fixture
def sample_tenants(db_connection):
    """Insert sample tenants into the database and return their IDs."""
    cursor = db_connection.cursor()
    tenants = [
        ("100", "1000", 24, None),
        ("200", "2000", 24, "2099-01-01T00:00:00"),
        ("300", None, 24, None),
    ]
    for tenant in tenants:
        cursor.execute(
            "INSERT INTO servers (server_id, channel_id, frequency, mute_until) VALUES (?, ?, ?, ?)",
            tenant
        )
    db_connection.commit()
    return [tenant[0] for tenant in tenants]


# ============================================================================
# Collaborator Fixtures
# ============================================================================

@pytest.fixture
def occupied_probe():
    """Occupancy probe reporting every destination with three members."""
    from twoam.models.decision import DestinationStatus

    probe = SimpleNamespace()
    probe.resolve_destination = AsyncMock(
        return_value=DestinationStatus(exists=True, present_member_count=3)
    )
    return probe


@pytest.fixture
def delivery():
    """Delivery collaborator that always succeeds."""
    collaborator = SimpleNamespace()
    collaborator.deliver = AsyncMock(return_value=None)
    return collaborator
