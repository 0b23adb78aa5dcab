"""Unit tests for app.core.session.SessionManager: cookie issue, read and removal."""

import unittest
from datetime import timedelta

from fastapi import Request, Response

from app.core.security import TokenCodec
from app.core.session import SessionManager, bearer_token


def _request(cookie: str | None = None, authorization: str | None = None) -> Request:
    headers = []
    if cookie is not None:
        headers.append((b"cookie", cookie.encode("latin-1")))
    if authorization is not None:
        headers.append((b"authorization", authorization.encode("latin-1")))
    return Request({"type": "http", "method": "GET", "path": "/", "query_string": b"", "headers": headers})


def _set_cookie_headers(response: Response) -> list[str]:
    return [value.decode("latin-1") for key, value in response.raw_headers if key == b"set-cookie"]


class TestSessionStart(unittest.TestCase):
    def setUp(self) -> None:
        self.codec = TokenCodec("session-test-secret", ttl=timedelta(days=7))
        self.sessions = SessionManager(self.codec)

    def test_sets_http_only_lax_cookie_for_seven_days(self) -> None:
        response = Response()
        token = self.sessions.start(response, 3, "user")
        headers = _set_cookie_headers(response)
        self.assertEqual(len(headers), 1)
        cookie = headers[0].lower()
        self.assertTrue(headers[0].startswith(f"session={token}"))
        self.assertIn("httponly", cookie)
        self.assertIn("samesite=lax", cookie)
        self.assertIn("path=/", cookie)
        self.assertIn("max-age=604800", cookie)
        self.assertIn("expires=", cookie)
        self.assertNotIn("secure", cookie)

    def test_secure_flag_when_enabled(self) -> None:
        response = Response()
        SessionManager(self.codec, secure=True).start(response, 3, "user")
        self.assertIn("secure", _set_cookie_headers(response)[0].lower())

    def test_started_token_resolves_to_claims(self) -> None:
        token = self.sessions.start(Response(), 9, "admin")
        claims = self.sessions.current(_request(cookie=f"session={token}"))
        self.assertEqual((claims.user_id, claims.role), (9, "admin"))


class TestSessionCurrent(unittest.TestCase):
    def setUp(self) -> None:
        self.sessions = SessionManager(TokenCodec("session-test-secret"))

    def test_no_cookie_is_no_session(self) -> None:
        self.assertIsNone(self.sessions.current(_request()))

    def test_invalid_cookie_is_no_session(self) -> None:
        self.assertIsNone(self.sessions.current(_request(cookie="session=garbage")))

    def test_bearer_header_fallback(self) -> None:
        token = self.sessions.codec.issue(4, "user")
        claims = self.sessions.current(_request(authorization=f"Bearer {token}"))
        self.assertEqual(claims.user_id, 4)

    def test_bearer_token_parsing(self) -> None:
        self.assertEqual(bearer_token("Bearer abc"), "abc")
        self.assertIsNone(bearer_token("Basic abc"))
        self.assertIsNone(bearer_token("Bearer "))
        self.assertIsNone(bearer_token(None))


class TestSessionEnd(unittest.TestCase):
    def test_end_expires_cookie_and_is_idempotent(self) -> None:
        sessions = SessionManager(TokenCodec("session-test-secret"))
        response = Response()
        sessions.end(response)
        sessions.end(response)
        headers = _set_cookie_headers(response)
        self.assertEqual(len(headers), 2)
        for header in headers:
            self.assertTrue(header.startswith("session="))
            self.assertIn("max-age=0", header.lower())


if __name__ == "__main__":
    unittest.main()
