from sqlalchemy import Column, ForeignKey, Text
from sqlalchemy.orm import relationship
from marketplace.database import Base


class Business(Base):
    __tablename__ = "businesses"

    id = Column(Text, primary_key=True)
    owner_id = Column(Text, ForeignKey("users.id", ondelete="CASCADE"), nullable=False)
    name = Column(Text, nullable=False)
    logo_url = Column(Text)
    website_url = Column(Text)
    description = Column(Text)
    status = Column(Text, nullable=False, default="PENDING")
    created_at = Column(Text, nullable=False)
    updated_at = Column(Text, nullable=False)

    owner = relationship("User", back_populates="businesses")
    jobs = relationship("JobPost", back_populates="business", cascade="all, delete-orphan")
