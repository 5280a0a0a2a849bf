"""SQLAlchemy ORM models."""

from datetime import date, datetime
from uuid import UUID, uuid4

from sqlalchemy import (
    Boolean,
    CheckConstraint,
    Date,
    DateTime,
    ForeignKey,
    Integer,
    String,
    Text,
)
from sqlalchemy.dialects.postgresql import UUID as PG_UUID
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column, relationship


class Base(DeclarativeBase):
    """Base class for all ORM models."""

    pass


class PersonFieldsMixin:
    """Columns shared by local profiles and RMS people."""

    first_name: Mapped[str | None] = mapped_column(String(100))
    last_name: Mapped[str | None] = mapped_column(String(100))
    middle_initial: Mapped[str | None] = mapped_column(String(10))
    date_of_birth: Mapped[date | None] = mapped_column(Date)
    sex: Mapped[str | None] = mapped_column(String(50))
    race: Mapped[str | None] = mapped_column(String(100))
    eye_color: Mapped[str | None] = mapped_column(String(50))
    hair_color: Mapped[str | None] = mapped_column(String(50))
    height_in_inches: Mapped[int | None] = mapped_column(Integer)
    weight_in_pounds: Mapped[int | None] = mapped_column(Integer)
    scars_and_marks: Mapped[str | None] = mapped_column(Text)
    location_name: Mapped[str | None] = mapped_column(String(255))
    location_address: Mapped[str | None] = mapped_column(String(500))


class ProfileModel(PersonFieldsMixin, Base):
    """Locally maintained profile. Person columns hold local overrides only."""

    __tablename__ = "profiles"

    id: Mapped[UUID] = mapped_column(
        PG_UUID(as_uuid=True),
        primary_key=True,
        default=uuid4,
    )
    analytics_token: Mapped[str] = mapped_column(String(64), nullable=False, unique=True)
    created_at: Mapped[datetime] = mapped_column(DateTime, default=datetime.utcnow)
    updated_at: Mapped[datetime] = mapped_column(
        DateTime,
        default=datetime.utcnow,
        onupdate=datetime.utcnow,
    )

    # Relationships
    aliases: Mapped[list["AliasModel"]] = relationship(
        "AliasModel",
        back_populates="profile",
        cascade="all, delete-orphan",
        order_by="AliasModel.name",
    )
    images: Mapped[list["ImageModel"]] = relationship(
        "ImageModel",
        back_populates="profile",
        cascade="all, delete-orphan",
        order_by="ImageModel.position",
    )
    rms_person: Mapped["RMSPersonModel | None"] = relationship(
        "RMSPersonModel",
        back_populates="profile",
        uselist=False,
        passive_deletes=True,
    )
    response_plans: Mapped[list["ResponsePlanModel"]] = relationship(
        "ResponsePlanModel",
        back_populates="profile",
        passive_deletes=True,
    )
    visibilities: Mapped[list["VisibilityModel"]] = relationship(
        "VisibilityModel",
        back_populates="profile",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )
    reviews: Mapped[list["ReviewModel"]] = relationship(
        "ReviewModel",
        back_populates="profile",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )


class AliasModel(Base):
    """Alternate name owned by a profile."""

    __tablename__ = "aliases"

    id: Mapped[UUID] = mapped_column(
        PG_UUID(as_uuid=True),
        primary_key=True,
        default=uuid4,
    )
    profile_id: Mapped[UUID] = mapped_column(
        PG_UUID(as_uuid=True),
        ForeignKey("profiles.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    name: Mapped[str] = mapped_column(String(255), nullable=False)

    profile: Mapped["ProfileModel"] = relationship("ProfileModel", back_populates="aliases")


class ImageModel(Base):
    """Image owned by a profile; the lowest position is the profile image."""

    __tablename__ = "images"

    id: Mapped[UUID] = mapped_column(
        PG_UUID(as_uuid=True),
        primary_key=True,
        default=uuid4,
    )
    profile_id: Mapped[UUID] = mapped_column(
        PG_UUID(as_uuid=True),
        ForeignKey("profiles.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    source_url: Mapped[str] = mapped_column(String(1000), nullable=False)
    position: Mapped[int] = mapped_column(Integer, default=0, nullable=False)

    profile: Mapped["ProfileModel"] = relationship("ProfileModel", back_populates="images")


class RMSPersonModel(PersonFieldsMixin, Base):
    """Person record imported from the RMS (read-only for the engine)."""

    __tablename__ = "rms_people"

    id: Mapped[UUID] = mapped_column(
        PG_UUID(as_uuid=True),
        primary_key=True,
        default=uuid4,
    )
    profile_id: Mapped[UUID | None] = mapped_column(
        PG_UUID(as_uuid=True),
        ForeignKey("profiles.id", ondelete="SET NULL"),
        unique=True,
        index=True,
    )

    profile: Mapped["ProfileModel | None"] = relationship(
        "ProfileModel", back_populates="rms_person"
    )
    crisis_incidents: Mapped[list["CrisisIncidentModel"]] = relationship(
        "CrisisIncidentModel",
        back_populates="rms_person",
    )


class CrisisIncidentModel(Base):
    """Crisis incident reported against an RMS person."""

    __tablename__ = "rms_crisis_incidents"

    id: Mapped[UUID] = mapped_column(
        PG_UUID(as_uuid=True),
        primary_key=True,
        default=uuid4,
    )
    rms_person_id: Mapped[UUID] = mapped_column(
        PG_UUID(as_uuid=True),
        ForeignKey("rms_people.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    reported_at: Mapped[datetime] = mapped_column(DateTime, nullable=False, index=True)
    veteran: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)

    rms_person: Mapped["RMSPersonModel"] = relationship(
        "RMSPersonModel", back_populates="crisis_incidents"
    )


class ResponsePlanModel(Base):
    """Response plan for a profile (independent lifecycle)."""

    __tablename__ = "response_plans"
    __table_args__ = (
        CheckConstraint(
            "state IN ('draft', 'submitted', 'approved')",
            name="ck_response_plans_state",
        ),
    )

    id: Mapped[UUID] = mapped_column(
        PG_UUID(as_uuid=True),
        primary_key=True,
        default=uuid4,
    )
    profile_id: Mapped[UUID] = mapped_column(
        PG_UUID(as_uuid=True),
        ForeignKey("profiles.id", ondelete="RESTRICT"),
        nullable=False,
        index=True,
    )
    state: Mapped[str] = mapped_column(String(20), nullable=False, default="draft")
    author_id: Mapped[UUID | None] = mapped_column(PG_UUID(as_uuid=True))
    approver_id: Mapped[UUID | None] = mapped_column(PG_UUID(as_uuid=True))
    submitted_at: Mapped[datetime | None] = mapped_column(DateTime)
    approved_at: Mapped[datetime | None] = mapped_column(DateTime, index=True)
    created_at: Mapped[datetime] = mapped_column(DateTime, default=datetime.utcnow)

    profile: Mapped["ProfileModel"] = relationship(
        "ProfileModel", back_populates="response_plans"
    )
    response_strategies: Mapped[list["ResponseStrategyModel"]] = relationship(
        "ResponseStrategyModel",
        back_populates="response_plan",
        cascade="all, delete-orphan",
        order_by="ResponseStrategyModel.priority",
    )


class ResponseStrategyModel(Base):
    """Individual strategy within a response plan."""

    __tablename__ = "response_strategies"

    id: Mapped[UUID] = mapped_column(
        PG_UUID(as_uuid=True),
        primary_key=True,
        default=uuid4,
    )
    response_plan_id: Mapped[UUID] = mapped_column(
        PG_UUID(as_uuid=True),
        ForeignKey("response_plans.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    title: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[str | None] = mapped_column(Text)
    priority: Mapped[int] = mapped_column(Integer, default=0, nullable=False)

    response_plan: Mapped["ResponsePlanModel"] = relationship(
        "ResponsePlanModel", back_populates="response_strategies"
    )


class VisibilityModel(Base):
    """Window during which a profile is visible."""

    __tablename__ = "visibilities"

    id: Mapped[UUID] = mapped_column(
        PG_UUID(as_uuid=True),
        primary_key=True,
        default=uuid4,
    )
    profile_id: Mapped[UUID] = mapped_column(
        PG_UUID(as_uuid=True),
        ForeignKey("profiles.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    created_by_id: Mapped[UUID | None] = mapped_column(PG_UUID(as_uuid=True))
    removed_by_id: Mapped[UUID | None] = mapped_column(PG_UUID(as_uuid=True))
    creation_notes: Mapped[str | None] = mapped_column(Text)
    removal_notes: Mapped[str | None] = mapped_column(Text)
    created_at: Mapped[datetime] = mapped_column(DateTime, default=datetime.utcnow)
    removed_at: Mapped[datetime | None] = mapped_column(DateTime)

    profile: Mapped["ProfileModel"] = relationship("ProfileModel", back_populates="visibilities")


class ReviewModel(Base):
    """Recorded review of a profile."""

    __tablename__ = "reviews"

    id: Mapped[UUID] = mapped_column(
        PG_UUID(as_uuid=True),
        primary_key=True,
        default=uuid4,
    )
    profile_id: Mapped[UUID] = mapped_column(
        PG_UUID(as_uuid=True),
        ForeignKey("profiles.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    reviewer_id: Mapped[UUID | None] = mapped_column(PG_UUID(as_uuid=True))
    created_at: Mapped[datetime] = mapped_column(DateTime, default=datetime.utcnow)

    profile: Mapped["ProfileModel"] = relationship("ProfileModel", back_populates="reviews")
