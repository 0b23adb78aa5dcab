"""Unit tests for app.middleware.edge_gate: route classification and gate decisions."""

import unittest
from dataclasses import replace
from datetime import UTC, datetime, timedelta

from app.core.config import Settings, get_settings
from app.core.security import SessionClaims
from app.middleware.edge_gate import (
    GateAction,
    RouteClass,
    RouteRules,
    classify,
    evaluate,
    matches_prefix,
)

RULES = RouteRules.from_settings(get_settings())


def _claims(role: str = "user") -> SessionClaims:
    now = datetime.now(UTC)
    return SessionClaims(user_id=1, role=role, issued_at=now, expires_at=now + timedelta(days=7))


class TestClassify(unittest.TestCase):
    def test_prefix_matches_sub_paths_only_on_segment_boundary(self) -> None:
        self.assertTrue(matches_prefix("/dashboard", "/dashboard"))
        self.assertTrue(matches_prefix("/dashboard/tasks", "/dashboard"))
        self.assertFalse(matches_prefix("/dashboardx", "/dashboard"))
        self.assertFalse(matches_prefix("/logout", "/login"))

    def test_classes(self) -> None:
        self.assertEqual(classify("/dashboard/profile", RULES), {RouteClass.PROTECTED})
        self.assertEqual(classify("/api/v1/tasks/3", RULES), {RouteClass.PROTECTED})
        self.assertEqual(classify("/signup", RULES), {RouteClass.AUTH_ONLY})
        self.assertEqual(classify("/api/v1/admin/users", RULES), {RouteClass.ADMIN_ONLY})
        self.assertEqual(classify("/api/auth/login", RULES), frozenset())


class TestEvaluate(unittest.TestCase):
    def test_protected_page_without_session_redirects_to_login(self) -> None:
        decision = evaluate("/dashboard", None, RULES)
        self.assertIs(decision.action, GateAction.REDIRECT)
        self.assertEqual(decision.location, "/login")

    def test_protected_api_without_session_is_401(self) -> None:
        decision = evaluate("/api/v1/tasks", None, RULES)
        self.assertIs(decision.action, GateAction.REJECT)
        self.assertEqual(decision.status_code, 401)

    def test_auth_page_with_session_redirects_to_dashboard(self) -> None:
        decision = evaluate("/login", _claims(), RULES)
        self.assertIs(decision.action, GateAction.REDIRECT)
        self.assertEqual(decision.location, "/dashboard")

    def test_auth_page_without_session_is_allowed(self) -> None:
        self.assertIs(evaluate("/signup", None, RULES).action, GateAction.ALLOW)

    def test_admin_api_with_user_session_is_403(self) -> None:
        decision = evaluate("/api/v1/admin/users", _claims("user"), RULES)
        self.assertIs(decision.action, GateAction.REJECT)
        self.assertEqual(decision.status_code, 403)

    def test_admin_api_without_session_is_403(self) -> None:
        self.assertEqual(evaluate("/api/v1/admin/users", None, RULES).status_code, 403)

    def test_admin_api_with_admin_session_is_allowed(self) -> None:
        self.assertIs(evaluate("/api/v1/admin/users", _claims("admin"), RULES).action, GateAction.ALLOW)

    def test_protected_api_with_session_is_allowed(self) -> None:
        self.assertIs(evaluate("/api/v1/tasks", _claims(), RULES).action, GateAction.ALLOW)

    def test_unclassified_path_is_allowed(self) -> None:
        self.assertIs(evaluate("/docs", None, RULES).action, GateAction.ALLOW)

    def test_protected_check_precedes_admin_check(self) -> None:
        rules = replace(RULES, protected=("/api/v1",), admin_only=("/api/v1/admin",))
        decision = evaluate("/api/v1/admin/users", None, rules)
        self.assertEqual(decision.status_code, 401)

    def test_admin_check_precedes_auth_only_check(self) -> None:
        rules = replace(RULES, auth_only=("/api/v1/admin",), admin_only=("/api/v1/admin",))
        decision = evaluate("/api/v1/admin", _claims("user"), rules)
        self.assertIs(decision.action, GateAction.REJECT)
        self.assertEqual(decision.status_code, 403)


class TestRulesFromSettings(unittest.TestCase):
    def test_rules_follow_configured_prefixes(self) -> None:
        rules = RouteRules.from_settings(
            Settings(
                PROTECTED_ROUTE_PREFIXES=["/app/"],
                ADMIN_ROUTE_PREFIXES=["/app/admin"],
                LOGIN_PATH="/signin",
            )
        )
        self.assertEqual(rules.protected, ("/app",))
        self.assertEqual(rules.admin_only, ("/app/admin",))
        decision = evaluate("/app/reports", None, rules)
        self.assertEqual(decision.location, "/signin")
        self.assertIs(evaluate("/dashboard", None, rules).action, GateAction.ALLOW)


if __name__ == "__main__":
    unittest.main()
