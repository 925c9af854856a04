"""Shared fixtures for hacksniff tests."""

from datetime import datetime, timedelta, timezone
from unittest.mock import MagicMock

import pytest

from hacksniff.models import Commit, RepositoryInfo

NOON = datetime(2025, 6, 10, 12, 0, tzinfo=timezone.utc)


def make_commit(i=0, timestamp=None, message="Update README", verified=False, author="dev"):
    return Commit(
        sha=f"{i:040x}",
        timestamp=timestamp or NOON + timedelta(hours=i),
        message=message,
        verified=verified,
        author=author,
    )


def github_commit_payload(i, date, message="Update README", verified=False, login="dev"):
    return {
        "sha": f"{i:040x}",
        "commit": {
            "author": {"date": date},
            "message": message,
            "verification": {"verified": verified, "reason": "valid" if verified else "unsigned"},
        },
        "author": {"login": login} if login else None,
    }


def fake_response(status=200, payload=None, text=""):
    response = MagicMock()
    response.status_code = status
    response.ok = 200 <= status < 300
    response.json.return_value = payload
    response.text = text
    return response


@pytest.fixture
def repo_after_cutoff():
    return RepositoryInfo(
        full_name="octo/after",
        created_at=datetime(2025, 6, 1, 9, 30, tzinfo=timezone.utc),
        size=120,
        language="TypeScript",
    )


@pytest.fixture
def repo_before_cutoff():
    return RepositoryInfo(
        full_name="octo/before",
        created_at=datetime(2024, 12, 1, 9, 30, tzinfo=timezone.utc),
        size=4000,
        language="Python",
    )


@pytest.fixture
def clean_env(monkeypatch):
    """Strip hacksniff-related variables so tests don't see a developer's .env."""
    for name in (
        "GITHUB_TOKEN",
        "ANTHROPIC_API_KEY",
        "HACKSNIFF_MODEL",
        "HACKSNIFF_ELIGIBILITY_CUTOFF",
        "HACKSNIFF_COMMIT_LIMIT",
    ):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setattr("hacksniff.config.load_dotenv", lambda *a, **k: False)
    return monkeypatch
