"""Unit tests for snapshot payload parsing"""

import asyncio
import httpx
import pytest
from unittest.mock import AsyncMock, patch
from datetime import date, datetime, timezone
from money_mirror.domain.exceptions import DataSourceError
from money_mirror.infrastructure.clients.snapshots import SnapshotClient, parse_snapshot


@pytest.fixture
def payload() -> dict:
    return {
        "timestamp": "2025-01-31T12:00:00+00:00",
        "accounts": [
            {"id": "chk", "name": "Checking", "type": "checking", "balance": 2400.0, "institution": "Bank"},
            {"id": "sav", "name": "Savings", "type": "savings", "balance": 8000.0},
        ],
        "transactions": [
            {"id": "t1", "date": "2025-01-02", "amount": -1200, "category": "Housing", "merchant": "Landlord"},
            {"id": "t2", "date": "2025-01-03", "amount": 5000, "category": "Income", "merchant": "Employer"},
        ],
        "net_worth": 10400.0,
        "monthly_income": 5000,
        "monthly_expenses": 3800,
    }


def test_parse_signed_payload(payload: dict):
    snapshot = parse_snapshot(payload)

    assert snapshot.timestamp.date() == date(2025, 1, 31)
    assert [a.type for a in snapshot.accounts] == ["checking", "savings"]
    assert snapshot.accounts[1].institution == ""
    assert [t.amount for t in snapshot.transactions] == [-1200, 5000]
    assert snapshot.monthly_expenses == 3800


def test_parse_unsigned_payload(payload: dict):
    payload["amount_convention"] = "unsigned"
    payload["transactions"][0]["amount"] = 1200

    snapshot = parse_snapshot(payload)

    assert [t.amount for t in snapshot.transactions] == [-1200, 5000]


def test_parse_missing_timestamp(payload: dict):
    del payload["timestamp"]

    with pytest.raises(DataSourceError, match="Invalid snapshot data"):
        parse_snapshot(payload)


def test_parse_bad_transaction(payload: dict):
    payload["transactions"][0]["amount"] = "lots"

    with pytest.raises(DataSourceError):
        parse_snapshot(payload)


@patch("httpx.AsyncClient.get", new_callable=AsyncMock)
def test_not_found_returns_none(mock_get: AsyncMock):
    mock_get.return_value = httpx.Response(404, request=httpx.Request("GET", "http://snapshots.test"))

    result = asyncio.run(SnapshotClient(base_url="http://snapshots.test").get_snapshot("user_1"))

    assert result is None


@patch("httpx.AsyncClient.get", new_callable=AsyncMock)
def test_timeout_maps_to_data_source_error(mock_get: AsyncMock):
    mock_get.side_effect = httpx.ReadTimeout("timed out")

    with pytest.raises(DataSourceError, match="timeout"):
        asyncio.run(SnapshotClient(base_url="http://snapshots.test", timeout=1.0).get_snapshot("user_1"))


@patch("httpx.AsyncClient.get", new_callable=AsyncMock)
def test_server_error_maps_to_data_source_error(mock_get: AsyncMock, payload: dict):
    mock_get.return_value = httpx.Response(
        502, json=payload, request=httpx.Request("GET", "http://snapshots.test")
    )

    with pytest.raises(DataSourceError, match="502"):
        asyncio.run(SnapshotClient(base_url="http://snapshots.test").get_snapshot("user_1"))


def test_parse_uses_default_convention(payload: dict):
    """A payload without amount_convention falls back to the caller's default"""
    payload["transactions"][0]["amount"] = 1200

    snapshot = parse_snapshot(payload, default_convention="unsigned")

    assert snapshot.transactions[0].amount == -1200


@patch("httpx.AsyncClient.get", new_callable=AsyncMock)
def test_non_json_body_maps_to_data_source_error(mock_get: AsyncMock):
    """A gateway error page with a 200 status is a malformed payload"""
    mock_get.return_value = httpx.Response(
        200, text="<html>gateway error</html>", request=httpx.Request("GET", "http://snapshots.test")
    )

    with pytest.raises(DataSourceError, match="Invalid snapshot payload"):
        asyncio.run(SnapshotClient(base_url="http://snapshots.test").get_snapshot("user_1"))


@patch("httpx.AsyncClient.get", new_callable=AsyncMock)
def test_json_array_body_maps_to_data_source_error(mock_get: AsyncMock, payload: dict):
    mock_get.return_value = httpx.Response(
        200, json=[payload], request=httpx.Request("GET", "http://snapshots.test")
    )

    with pytest.raises(DataSourceError, match="must be an object"):
        asyncio.run(SnapshotClient(base_url="http://snapshots.test").get_snapshot("user_1"))


@patch("httpx.AsyncClient.get", new_callable=AsyncMock)
def test_valid_body_is_parsed(mock_get: AsyncMock, payload: dict):
    mock_get.return_value = httpx.Response(200, json=payload, request=httpx.Request("GET", "http://snapshots.test"))

    snapshot = asyncio.run(SnapshotClient(base_url="http://snapshots.test").get_snapshot("user_1"))

    assert len(snapshot.transactions) == 2
    mock_get.assert_awaited_once_with("http://snapshots.test/snapshots/current", params={"user_id": "user_1"})


def test_parse_utc_z_timestamp(payload: dict):
    """Snapshots written by JavaScript clients end in Z"""
    payload["timestamp"] = "2025-01-31T12:00:00.000Z"

    snapshot = parse_snapshot(payload)

    assert snapshot.timestamp == datetime(2025, 1, 31, 12, tzinfo=timezone.utc)
