"""Test configuration and fixtures."""

from datetime import date
from uuid import UUID, uuid4

import logfire
import pytest

from encore.config import AuthSettings
from encore.domain.model import Show
from encore.domain.value import ItemId, OwnerId
from encore.util.jwt import create_token

# Keep telemetry local and quiet during tests
logfire.configure(send_to_logfire=False, console=False)


def make_show(
    owner_id: OwnerId,
    occurred_on: date = date(2024, 6, 1),
    category: str | None = None,
    item_id: UUID | None = None,
) -> Show:
    """Build a show for tests."""
    return Show(
        id=ItemId(item_id or uuid4()),
        owner_id=owner_id,
        occurred_on=occurred_on,
        category=category,
    )


def make_token(owner_id: OwnerId) -> str:
    """Session token for an owner, signed with the default test settings."""
    return create_token(str(owner_id), AuthSettings())


@pytest.fixture
def owner_id() -> OwnerId:
    """A fresh owner."""
    return OwnerId(uuid4())
