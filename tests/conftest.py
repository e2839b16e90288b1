"""Shared pytest fixtures: in-memory database, API client, assessment answers"""

from typing import Callable, Dict, Generator, List
import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool
from money_mirror.api.main import create_app
from money_mirror.domain.assessment import QUESTION_BANK
from money_mirror.domain.models import AssessmentAnswer, Dimension
from money_mirror.infrastructure.database.models import Base
from money_mirror.infrastructure.database.session import get_db

# One shared connection so TestClient worker threads see the same in-memory tables
engine = create_engine(
    "sqlite://",
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture
def db() -> Generator[Session, None, None]:
    """Fresh schema per test"""
    Base.metadata.create_all(bind=engine)
    session = TestingSessionLocal()
    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture
def client(db: Session) -> TestClient:
    """API client whose profile store runs on the test session"""
    app = create_app()
    app.dependency_overrides[get_db] = lambda: db
    return TestClient(app)


@pytest.fixture
def make_answers() -> Callable[[Dict[Dimension, int]], List[AssessmentAnswer]]:
    """
    Build a full answer sheet: every scoring item of a dimension gets the
    given score, contextual items get 0.
    """

    def build(per_dimension: Dict[Dimension, int]) -> List[AssessmentAnswer]:
        return [
            AssessmentAnswer(
                question_id=q.id,
                dimension=q.dimension,
                score=0 if q.contextual else per_dimension[q.dimension],
            )
            for q in QUESTION_BANK
        ]

    return build
