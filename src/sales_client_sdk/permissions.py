"""Role-based capability checks mirrored client-side for UI gating.

The server enforces authorization; these predicates only decide what the
presentation layer offers. Every check is case-insensitive and fails closed:
an unknown, empty or missing role gets none of the elevated capabilities.
"""
from __future__ import annotations

from enum import Enum
from typing import Callable, Union


class Role(str, Enum):
    ADMIN = "admin"
    CASHIER = "cashier"
    GUEST = "guest"


RoleLike = Union[str, Role, None]
Predicate = Callable[[RoleLike], bool]


def parse_role(value: RoleLike) -> Role | None:
    if isinstance(value, Role):
        return value
    if not value:
        return None
    try:
        return Role(value.strip().lower())
    except ValueError:
        return None


def is_admin(role: RoleLike) -> bool:
    return parse_role(role) is Role.ADMIN


def is_cashier_or_above(role: RoleLike) -> bool:
    return parse_role(role) in {Role.ADMIN, Role.CASHIER}


# Products


def can_view_products(role: RoleLike) -> bool:
    return True


def can_create_products(role: RoleLike) -> bool:
    return is_cashier_or_above(role)


def can_edit_products(role: RoleLike) -> bool:
    return is_admin(role)


def can_delete_products(role: RoleLike) -> bool:
    return is_admin(role)


# Sales


def can_view_sales(role: RoleLike) -> bool:
    return is_cashier_or_above(role)


def can_create_sales(role: RoleLike) -> bool:
    return is_cashier_or_above(role)


def can_edit_sales(role: RoleLike) -> bool:
    return is_admin(role)


def can_delete_sales(role: RoleLike) -> bool:
    return is_admin(role)


# Users


def can_view_users(role: RoleLike) -> bool:
    return is_cashier_or_above(role)


def can_edit_users(role: RoleLike) -> bool:
    return is_admin(role)


def can_delete_users(role: RoleLike) -> bool:
    return is_admin(role)


def can_edit_user_roles(role: RoleLike) -> bool:
    return is_admin(role)


def can_toggle_user_status(role: RoleLike) -> bool:
    return is_admin(role)


# Other


def can_view_reports(role: RoleLike) -> bool:
    return is_cashier_or_above(role)


def can_use_chatbot(role: RoleLike) -> bool:
    return is_cashier_or_above(role)


# Deprecated coarse names kept as aliases of the granular rules.
can_manage_products = can_edit_products
can_manage_sales = can_edit_sales
can_manage_users = can_edit_users


CAPABILITIES: dict[str, Predicate] = {
    "products.view": can_view_products,
    "products.create": can_create_products,
    "products.edit": can_edit_products,
    "products.delete": can_delete_products,
    "sales.view": can_view_sales,
    "sales.create": can_create_sales,
    "sales.edit": can_edit_sales,
    "sales.delete": can_delete_sales,
    "users.view": can_view_users,
    "users.edit": can_edit_users,
    "users.delete": can_delete_users,
    "users.edit_role": can_edit_user_roles,
    "users.toggle_status": can_toggle_user_status,
    "reports.view": can_view_reports,
    "chatbot.use": can_use_chatbot,
}

ADMIN_ONLY: frozenset[str] = frozenset(
    {
        "products.edit",
        "products.delete",
        "sales.edit",
        "sales.delete",
        "users.edit",
        "users.delete",
        "users.edit_role",
        "users.toggle_status",
    }
)

OPEN_TO_ALL: frozenset[str] = frozenset({"products.view"})


class PermissionGate:
    """Default deny lookup of capability keys for one role."""

    def __init__(self, role: RoleLike) -> None:
        self.role = parse_role(role)
        self._decisions = {key: predicate(role) for key, predicate in CAPABILITIES.items()}

    def is_allowed(self, capability: str) -> bool:
        return self._decisions.get(capability, False)

    def allows_any(self, *capabilities: str) -> bool:
        return any(self.is_allowed(key) for key in capabilities)

    def allowed_keys(self) -> set[str]:
        return {key for key, allowed in self._decisions.items() if allowed}
