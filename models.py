import uuid
from datetime import datetime, timezone

from sqlalchemy import Boolean, Column, DateTime, Float, ForeignKey, String
from sqlalchemy.orm import relationship

from database import Base


def _uuid() -> str:
    return str(uuid.uuid4())


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class User(Base):
    __tablename__ = "users"
    id = Column(String(36), primary_key=True, default=_uuid)
    name = Column(String, nullable=False)
    email = Column(String, nullable=False, unique=True, index=True)
    password = Column(String, nullable=False)
    is_admin = Column(Boolean, nullable=False, default=False)
    created_at = Column(DateTime(timezone=True), nullable=False, default=_utcnow)
    items = relationship("ClothingItem", back_populates="owner",
                         cascade="all, delete-orphan", passive_deletes=True)
    outfits = relationship("Outfit", back_populates="user",
                           cascade="all, delete-orphan", passive_deletes=True)


class ClothingItem(Base):
    __tablename__ = "clothing_items"
    id = Column(String(36), primary_key=True, default=_uuid)
    user_id = Column(String(36), ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    brand = Column(String, nullable=True)
    # Free text on purpose: analytics re-parse it and skip what does not parse.
    price = Column(String, nullable=True)
    season = Column(String, nullable=True)
    size = Column(String, nullable=True)
    category = Column(String, nullable=True)
    image_path = Column(String, nullable=True)
    gps_lat = Column(Float, nullable=True)
    gps_lon = Column(Float, nullable=True)
    gps_alt = Column(Float, nullable=True)
    datetime_original = Column(String, nullable=True)
    camera_make = Column(String, nullable=True)
    camera_model = Column(String, nullable=True)
    software = Column(String, nullable=True)
    created_at = Column(DateTime(timezone=True), nullable=False, default=_utcnow)
    owner = relationship("User", back_populates="items")


class Outfit(Base):
    __tablename__ = "outfits"
    id = Column(String(36), primary_key=True, default=_uuid)
    user_id = Column(String(36), ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    name = Column(String, nullable=False)
    top_id = Column(String(36), ForeignKey("clothing_items.id", ondelete="SET NULL"), nullable=True)
    bottom_id = Column(String(36), ForeignKey("clothing_items.id", ondelete="SET NULL"), nullable=True)
    shoes_id = Column(String(36), ForeignKey("clothing_items.id", ondelete="SET NULL"), nullable=True)
    created_at = Column(DateTime(timezone=True), nullable=False, default=_utcnow)

    user = relationship("User", back_populates="outfits")
    top = relationship("ClothingItem", foreign_keys=[top_id])
    bottom = relationship("ClothingItem", foreign_keys=[bottom_id])
    shoes = relationship("ClothingItem", foreign_keys=[shoes_id])
