import pytest
from unittest.mock import AsyncMock, MagicMock


def _returns_argument(*args, **kwargs):
    return args[0]


@pytest.fixture
def mock_uow():
    uow = MagicMock()
    uow.__aenter__ = AsyncMock(return_value=uow)
    uow.__aexit__ = AsyncMock(return_value=False)  # Must return False to not suppress exceptions
    uow.commit = AsyncMock()
    uow.rollback = AsyncMock()

    # Writes hand the entity back, like the SQLModel repositories do after refresh
    uow.audit_events = MagicMock()
    uow.audit_events.create = AsyncMock(side_effect=_returns_argument)

    uow.scheduled_notifications = MagicMock()
    uow.scheduled_notifications.create = AsyncMock(side_effect=_returns_argument)
    uow.scheduled_notifications.update = AsyncMock(side_effect=_returns_argument)
    uow.scheduled_notifications.get_pending_for_entity = AsyncMock(return_value=[])

    uow.notifications = MagicMock()
    uow.notifications.create = AsyncMock(side_effect=_returns_argument)
    uow.notifications.update = AsyncMock(side_effect=_returns_argument)

    for name in ("projects", "tasks", "leads", "invoices", "transactions", "roles", "permissions"):
        repository = MagicMock()
        repository.create = AsyncMock(side_effect=_returns_argument)
        repository.update = AsyncMock(side_effect=_returns_argument)
        repository.delete = AsyncMock()
        repository.get_by_id = AsyncMock(return_value=None)
        setattr(uow, name, repository)

    return uow
