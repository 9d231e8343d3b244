from sqlalchemy import Boolean, Column, ForeignKey, Integer, Text
from sqlalchemy.orm import relationship
from marketplace.database import Base


class Event(Base):
    __tablename__ = "events"

    id = Column(Text, primary_key=True)
    creator_id = Column(Text, ForeignKey("users.id", ondelete="CASCADE"), nullable=False)
    title = Column(Text, nullable=False)
    slug = Column(Text, nullable=False, unique=True)
    type = Column(Text, nullable=False)
    description = Column(Text, nullable=False)
    location = Column(Text, nullable=False)
    start_datetime = Column(Text, nullable=False)
    end_datetime = Column(Text, nullable=False)
    is_paid = Column(Boolean, nullable=False, default=False)
    price_per_person = Column(Integer)
    admin_fee = Column(Integer, nullable=False, default=0)
    quota = Column(Integer)  # NULL = unlimited
    status = Column(Text, nullable=False)
    published_at = Column(Text)
    created_at = Column(Text, nullable=False)
    updated_at = Column(Text, nullable=False)

    creator = relationship("User")
    registrations = relationship("EventRegistration", back_populates="event", cascade="all, delete-orphan")


class EventRegistration(Base):
    __tablename__ = "event_registrations"

    id = Column(Text, primary_key=True)
    event_id = Column(Text, ForeignKey("events.id", ondelete="CASCADE"), nullable=False)
    user_id = Column(Text, ForeignKey("users.id", ondelete="CASCADE"), nullable=False)
    status = Column(Text, nullable=False)
    total_amount = Column(Integer, nullable=False, default=0)
    created_at = Column(Text, nullable=False)
    updated_at = Column(Text, nullable=False)

    event = relationship("Event", back_populates="registrations")
    user = relationship("User")
