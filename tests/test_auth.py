"""Tests for token handling and role checks."""

from __future__ import annotations

from datetime import timedelta

import pytest

from expense_ledger.core.auth.dependencies import EXPENSE_MANAGER_ROLES, has_required_role
from expense_ledger.core.auth.service import AuthService
from expense_ledger.shared.database.models import UserRole


class TestHasRequiredRole:
    @pytest.mark.parametrize("role", ["FACILITIES_TEAM", "FINANCE_TEAM", "ADMIN"])
    def test_expense_managers_allowed(self, role):
        assert has_required_role(role, EXPENSE_MANAGER_ROLES)

    @pytest.mark.parametrize("role", ["STAFF", "EVENT_COORDINATOR", "admin", ""])
    def test_other_roles_denied(self, role):
        assert not has_required_role(role, EXPENSE_MANAGER_ROLES)

    def test_missing_role_denied(self):
        assert not has_required_role(None, EXPENSE_MANAGER_ROLES)

    def test_accepts_enum_values(self):
        assert has_required_role(UserRole.ADMIN.value, [UserRole.ADMIN.value])


class TestAuthService:
    def test_token_round_trip(self):
        token = AuthService.create_access_token({"user_id": "abc", "role": "ADMIN"})

        payload = AuthService.verify_token(token)

        assert payload["user_id"] == "abc"
        assert payload["role"] == "ADMIN"
        assert "exp" in payload

    def test_expired_token_rejected(self):
        token = AuthService.create_access_token({"user_id": "abc"}, expires_delta=timedelta(minutes=-5))

        assert AuthService.verify_token(token) is None

    def test_garbage_token_rejected(self):
        assert AuthService.verify_token("not.a.token") is None

    def test_user_id_required(self):
        with pytest.raises(ValueError):
            AuthService.create_access_token({"email": "someone@example.com"})
