"""Unit tests for CORS origin parsing and headers."""

from __future__ import annotations

import pytest
from commerce_auth.core.cors import parse_origins


@pytest.mark.parametrize("raw", [None, "", " , ", "*", "https://a.test, *"])
def test_any_origin(raw):
    assert parse_origins(raw) == "*"


def test_explicit_origins():
    assert parse_origins("https://a.test, https://b.test ") == ["https://a.test", "https://b.test"]


def test_cors_response_exposes_retry_after(client):
    resp = client.get("/api/v1/health", headers={"Origin": "http://localhost:5173"})
    assert "Retry-After" in resp.headers["Access-Control-Expose-Headers"]
