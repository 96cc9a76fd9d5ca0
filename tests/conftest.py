"""
Pytest fixtures for Wellbeing Engine tests.
"""
import sys
import pytest
from pathlib import Path
from datetime import datetime, timedelta, timezone
from dotenv import load_dotenv

# Ensure src/ is on sys.path so tests can import wellbeing_engine.
ROOT = Path(__file__).resolve().parent.parent
SRC = ROOT / "src"
if str(SRC) not in sys.path:
    sys.path.insert(0, str(SRC))
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

# Load environment variables
load_dotenv()

from wellbeing_engine.models import Activity, ActivityLog, MoodCheckin  # noqa: E402


# Fixed evaluation time so period boundaries are deterministic
NOW = datetime(2024, 6, 15, 12, 0, tzinfo=timezone.utc)


@pytest.fixture
def now():
    return NOW


@pytest.fixture
def make_checkin():
    """Factory for mood check-ins created `days_ago` before NOW."""
    def _make(rating, days_ago=0, activity_ids=(), notes=None, id=None):
        return MoodCheckin(
            id=id,
            rating=rating,
            created_at=NOW - timedelta(days=days_ago),
            activity_ids=frozenset(activity_ids),
            notes=notes,
        )
    return _make


@pytest.fixture
def make_log():
    """Factory for activity logs written `days_ago` (and `hours_ago`) before NOW."""
    def _make(activity_id, days_ago=0, hours_ago=0):
        return ActivityLog(
            activity_id=activity_id,
            logged_at=NOW - timedelta(days=days_ago, hours=hours_ago),
        )
    return _make


@pytest.fixture
def activities():
    """Two groups: Exercise (1) with running and yoga, Social (2) with calls."""
    return [
        Activity(id=1, group_id=1, name="Running", color="#4CAF50", icon="run"),
        Activity(id=2, group_id=1, name="Yoga", color="#FFEB3B"),
        Activity(id=3, group_id=2, name="Call a friend"),
    ]
