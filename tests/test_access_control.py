import pytest

from registrar.core.enums import AuditAction, ErrorCode
from registrar.core.exceptions import InvalidPrincipalError, NotAuthorizedError
from registrar.services.access_control import AccessControl

from conftest import ADMIN, OUTSIDER


def test_absent_principal_is_not_administrator():
    access = AccessControl(["root"])
    assert access.is_administrator("root")
    assert not access.is_administrator("nobody")
    with pytest.raises(NotAuthorizedError):
        access.require_administrator("nobody")


def test_validate_principal_rejects_only_self_and_empty():
    AccessControl.validate_principal("root", "dean")
    with pytest.raises(InvalidPrincipalError):
        AccessControl.validate_principal("root", "root")
    with pytest.raises(InvalidPrincipalError):
        AccessControl.validate_principal("root", "")


def test_add_administrator(service, admin):
    result = service.add_administrator(admin(), "dean")

    assert result.success
    assert service.is_administrator("dean")
    entry = service.get_audit_entry(result.transaction_id)
    assert entry.action is AuditAction.ADD_ADMINISTRATOR
    assert entry.principal == ADMIN


def test_new_administrator_can_mutate(service, admin, clock):
    service.add_administrator(admin(), "dean")
    result = service.add_student(clock.context_for("dean"), 1001, "Ada", 2022, "CS")
    assert result.success


def test_non_administrator_cannot_add_administrator(service, outsider):
    result = service.add_administrator(outsider(), "someone")

    assert result.error_code is ErrorCode.NOT_AUTHORIZED
    assert not service.is_administrator("someone")
    assert len(service.audit_log) == 0


def test_non_administrator_cannot_add_itself(service, outsider):
    result = service.add_administrator(outsider(), OUTSIDER)
    assert result.error_code is ErrorCode.NOT_AUTHORIZED


def test_administrator_cannot_add_itself(service, admin):
    result = service.add_administrator(admin(), ADMIN)

    assert result.error_code is ErrorCode.INVALID_PRINCIPAL
    assert len(service.audit_log) == 0


def test_re_adding_administrator_is_idempotent(service, admin):
    assert service.add_administrator(admin(), "dean").success
    assert service.add_administrator(admin(), "dean").success
    assert service.access_control.administrators() == ["dean", ADMIN]
    assert len(service.audit_log) == 2
