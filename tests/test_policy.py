from types import SimpleNamespace

import pytest
from orderdesk.services.policy import can_access, ensure_access, require_admin
from orderdesk.utils.errors import ForbiddenError

ADMIN = SimpleNamespace(id=1, role="admin")
AGENT = SimpleNamespace(id=7, role="agent")


def test_admin_always_passes():
    assert can_access(ADMIN, 7)
    assert can_access(ADMIN, 99)
    assert can_access(ADMIN, None)


def test_agent_passes_only_for_own_records():
    assert can_access(AGENT, 7)
    assert not can_access(AGENT, 8)
    assert not can_access(AGENT, None)


def test_denial_is_forbidden_not_missing():
    with pytest.raises(ForbiddenError) as exc_info:
        ensure_access(AGENT, 8, "Access denied")

    assert exc_info.value.status_code == 403
    assert exc_info.value.message == "Access denied"


def test_require_admin():
    require_admin(ADMIN)
    with pytest.raises(ForbiddenError):
        require_admin(AGENT)
