"""Account aggregation HTTP client for fetching financial snapshots"""

import httpx
from typing import Any, Dict, Optional
from money_mirror.config import settings
from money_mirror.domain.exceptions import DataSourceError, InvalidTransactionDataError
from money_mirror.domain.models import Account, FinancialSnapshot
from money_mirror.domain.spending import normalize_transactions
from money_mirror.utils.date_utils import parse_timestamp


class SnapshotClient:
    """Client for the external account/transaction aggregation service"""

    def __init__(self, base_url: str | None = None, timeout: float | None = None):
        self.base_url = base_url or settings.snapshot_api_base
        self.timeout = timeout or settings.http_timeout_seconds

    async def get_snapshot(self, user_id: str) -> Optional[FinancialSnapshot]:
        """
        Fetch the current snapshot (accounts, transaction window, income/expenses).

        Returns None when the source has no linked accounts for the user (404).

        Raises:
            DataSourceError: On timeout, HTTP errors, or invalid response
        """
        async with httpx.AsyncClient(timeout=self.timeout) as client:
            try:
                response = await client.get(
                    f"{self.base_url}/snapshots/current",
                    params={"user_id": user_id},
                )
                if response.status_code == 404:
                    return None
                response.raise_for_status()
                return parse_snapshot(response.json())

            except httpx.TimeoutException as e:
                raise DataSourceError(f"Snapshot source timeout after {self.timeout}s") from e
            except httpx.HTTPStatusError as e:
                raise DataSourceError(f"Snapshot source error: {e.response.status_code}") from e
            except httpx.RequestError as e:
                raise DataSourceError(f"Snapshot source unreachable: {e}") from e
            except (KeyError, ValueError, TypeError) as e:
                raise DataSourceError(f"Invalid snapshot payload from source: {e}") from e


def parse_snapshot(data: Dict[str, Any], default_convention: str | None = None) -> FinancialSnapshot:
    """
    Build a FinancialSnapshot from the source payload.

    The payload's "amount_convention" ("signed" or "unsigned") says how
    transaction amounts are reported; without it, default_convention or the
    configured snapshot_amount_convention applies. Amounts are normalized to
    negative-is-spend here.
    """
    if not isinstance(data, dict):
        raise DataSourceError(f"Snapshot payload must be an object, got {type(data).__name__}")

    try:
        accounts = [
            Account(
                id=str(a["id"]),
                name=a.get("name", ""),
                type=a["type"],
                balance=float(a["balance"]),
                institution=a.get("institution", ""),
            )
            for a in data.get("accounts", [])
        ]
        transactions = normalize_transactions(
            data.get("transactions", []),
            convention=data.get("amount_convention") or default_convention or settings.snapshot_amount_convention,
        )
        return FinancialSnapshot(
            timestamp=parse_timestamp(data["timestamp"]),
            accounts=accounts,
            transactions=transactions,
            net_worth=float(data.get("net_worth", 0.0)),
            monthly_income=float(data.get("monthly_income", 0.0)),
            monthly_expenses=float(data.get("monthly_expenses", 0.0)),
        )
    except InvalidTransactionDataError as e:
        raise DataSourceError(str(e)) from e
    except (KeyError, ValueError, TypeError) as e:
        raise DataSourceError(f"Invalid snapshot data from source: {e}") from e
