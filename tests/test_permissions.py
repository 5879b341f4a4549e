from __future__ import annotations

import pytest

from sales_client_sdk import permissions
from sales_client_sdk.permissions import ADMIN_ONLY, CAPABILITIES, OPEN_TO_ALL, PermissionGate, Role, parse_role


@pytest.mark.parametrize("role", ["admin", "ADMIN", " Admin ", Role.ADMIN])
def test_admin_is_case_insensitive(role) -> None:
    assert permissions.is_admin(role)
    assert permissions.is_cashier_or_above(role)


@pytest.mark.parametrize("role", [None, "", "   ", "superuser", "cashiers"])
def test_unknown_roles_fail_closed(role) -> None:
    assert parse_role(role) is None
    gate = PermissionGate(role)
    assert gate.allowed_keys() == set(OPEN_TO_ALL)


def test_guest_can_only_view_products() -> None:
    gate = PermissionGate("guest")
    assert gate.allowed_keys() == {"products.view"}
    assert not permissions.can_use_chatbot("guest")
    assert not permissions.can_view_sales("guest")


def test_cashier_capabilities() -> None:
    gate = PermissionGate("cashier")
    assert gate.allowed_keys() == set(CAPABILITIES) - ADMIN_ONLY
    assert permissions.can_create_products("cashier")
    assert not permissions.can_edit_products("cashier")
    assert not permissions.can_delete_sales("cashier")
    assert not permissions.can_edit_user_roles("cashier")


def test_admin_has_everything() -> None:
    assert PermissionGate("admin").allowed_keys() == set(CAPABILITIES)


@pytest.mark.parametrize("role", ["admin", "cashier", "guest", None, "bogus"])
def test_coarse_names_follow_granular_rules(role) -> None:
    assert permissions.can_manage_products(role) == permissions.can_edit_products(role)
    assert permissions.can_manage_sales(role) == permissions.can_edit_sales(role)
    assert permissions.can_manage_users(role) == permissions.can_edit_users(role)


def test_cashier_cannot_manage_users_or_products() -> None:
    assert not permissions.can_manage_users("cashier")
    assert not permissions.can_manage_products("cashier")
    assert permissions.can_manage_users("admin")


def test_gate_denies_unknown_capability_keys() -> None:
    gate = PermissionGate("admin")
    assert not gate.is_allowed("reports.export")
    assert gate.allows_any("reports.export", "reports.view")
