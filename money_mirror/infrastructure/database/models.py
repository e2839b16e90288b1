"""SQLAlchemy ORM models for profiles, goals and findings"""

import uuid
from sqlalchemy import Boolean, Column, Date, DateTime, Float, ForeignKey, Text, UniqueConstraint, JSON
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import declarative_base, relationship
from sqlalchemy.sql import func

Base = declarative_base()


class UserProfileRecord(Base):
    """User profile with onboarding data stored as JSON documents"""

    __tablename__ = "user_profile"

    user_id = Column(Text, primary_key=True)
    email = Column(Text, nullable=False)
    name = Column(Text, nullable=False)
    created_at = Column(DateTime(timezone=True), nullable=False)
    life_context = Column(JSON, nullable=True)
    stated_preferences = Column(JSON, nullable=True)
    money_style = Column(JSON, nullable=True)
    updated_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now(), onupdate=func.now())

    goals = relationship("FinancialGoalRecord", back_populates="profile", cascade="all, delete-orphan")
    findings = relationship("FindingRecord", back_populates="profile", cascade="all, delete-orphan")


class FinancialGoalRecord(Base):
    """Savings or payoff goal owned by a user"""

    __tablename__ = "financial_goal"
    __table_args__ = (UniqueConstraint("user_id", "goal_id", name="uq_financial_goal_user_goal"),)

    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    user_id = Column(Text, ForeignKey("user_profile.user_id", ondelete="CASCADE"), nullable=False, index=True)
    goal_id = Column(Text, nullable=False)
    title = Column(Text, nullable=False)
    target_amount = Column(Float, nullable=False)
    current_amount = Column(Float, nullable=False, default=0.0)
    target_date = Column(Date, nullable=False)
    category = Column(Text, nullable=False)
    created_on = Column(Date, nullable=True)

    profile = relationship("UserProfileRecord", back_populates="goals")


class FindingRecord(Base):
    """Detected contradiction kept for follow-up; the full finding lives in `document`"""

    __tablename__ = "finding"
    __table_args__ = (UniqueConstraint("user_id", "finding_id", name="uq_finding_user_finding"),)

    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    user_id = Column(Text, ForeignKey("user_profile.user_id", ondelete="CASCADE"), nullable=False, index=True)
    finding_id = Column(Text, nullable=False)
    rule = Column(Text, nullable=False)
    severity = Column(Text, nullable=False)
    resolved = Column(Boolean, nullable=False, default=False)
    detected_at = Column(DateTime(timezone=True), nullable=False)
    document = Column(JSON, nullable=False)

    profile = relationship("UserProfileRecord", back_populates="findings")
