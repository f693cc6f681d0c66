"""
SQLAlchemy models for Notaire persistence.
"""

from datetime import datetime, timezone
from typing import Any

from sqlalchemy import JSON, DateTime, ForeignKey, String, Text
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column, relationship


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


class Base(DeclarativeBase):
    """Base class for all models."""


class UserModel(Base):
    """User database model - registered asset owner."""

    __tablename__ = "users"

    id: Mapped[str] = mapped_column(String(64), primary_key=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    verification_id: Mapped[str | None] = mapped_column(
        String(32), unique=True, index=True
    )
    phone: Mapped[str | None] = mapped_column(String(20))
    email: Mapped[str | None] = mapped_column(String(255))
    owner_id: Mapped[str | None] = mapped_column(String(32), unique=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=_utc_now
    )

    # Relationships
    assets: Mapped[list["AssetModel"]] = relationship(
        "AssetModel",
        back_populates="owner",
        lazy="select",
    )


class AssetModel(Base):
    """Asset database model - current owner plus provenance."""

    __tablename__ = "assets"

    id: Mapped[str] = mapped_column(String(64), primary_key=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[str | None] = mapped_column(Text)
    media_ref: Mapped[str] = mapped_column(String(1024), nullable=False)
    owner_id: Mapped[str] = mapped_column(
        String(64), ForeignKey("users.id"), index=True, nullable=False
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False
    )
    # uint256 as decimal text
    chain_token_id: Mapped[str | None] = mapped_column(String(78))
    media_cid: Mapped[str | None] = mapped_column(String(128))
    metadata_cid: Mapped[str | None] = mapped_column(String(128))
    mint_tx_hash: Mapped[str | None] = mapped_column(String(66))

    # Relationships
    owner: Mapped["UserModel"] = relationship(
        "UserModel", back_populates="assets", lazy="select"
    )


class TransferModel(Base):
    """Transfer database model - append-only ownership history."""

    __tablename__ = "transfers"
    id: Mapped[str] = mapped_column(String(64), primary_key=True)
    asset_id: Mapped[str] = mapped_column(
        String(64), ForeignKey("assets.id"), index=True, nullable=False
    )
    from_owner_id: Mapped[str] = mapped_column(
        String(64), ForeignKey("users.id"), index=True, nullable=False
    )
    to_owner_id: Mapped[str] = mapped_column(
        String(64), ForeignKey("users.id"), index=True, nullable=False
    )
    transferred_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False
    )
    tx_hash: Mapped[str | None] = mapped_column(String(66))
    asset_snapshot: Mapped[dict[str, Any] | None] = mapped_column(JSON)


class ChainIdentityModel(Base):
    """Chain identity database model - user to chain address."""

    __tablename__ = "chain_identities"

    user_id: Mapped[str] = mapped_column(
        String(64), ForeignKey("users.id"), primary_key=True
    )
    address: Mapped[str] = mapped_column(String(42), nullable=False)
    linked_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=_utc_now, onupdate=_utc_now
    )
