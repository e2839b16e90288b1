"""Dependency injection for FastAPI endpoints"""

from typing import Generator
from fastapi import Depends, Request
from sqlalchemy.orm import Session
from money_mirror.config import settings
from money_mirror.domain.engine import ContradictionEngine
from money_mirror.domain.rules import default_rules
from money_mirror.infrastructure.clients.snapshots import SnapshotClient
from money_mirror.infrastructure.database.repositories import ProfileStore, SqlProfileStore
from money_mirror.infrastructure.database.session import get_db


def get_request_id(request: Request) -> str:
    """Extract request ID from request state"""
    return getattr(request.state, "request_id", "unknown")


def get_profile_store(db: Session = Depends(get_db)) -> Generator[ProfileStore, None, None]:
    """SQL-backed profile store; commits when the request succeeds"""
    store = SqlProfileStore(db)
    try:
        yield store
        db.commit()
    except Exception:
        db.rollback()
        raise


def get_snapshot_client() -> SnapshotClient:
    """Provide snapshot source client instance"""
    return SnapshotClient()


def get_engine() -> ContradictionEngine:
    """Rule engine with the full default rule set and configured budget overrides"""
    return ContradictionEngine(default_rules(settings.budget_overrides), max_workers=settings.rule_workers)
