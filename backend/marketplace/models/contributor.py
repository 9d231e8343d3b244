from sqlalchemy import Column, ForeignKey, Text
from sqlalchemy.orm import relationship
from marketplace.database import Base


class ContributorProfile(Base):
    __tablename__ = "contributor_profiles"

    id = Column(Text, primary_key=True)
    user_id = Column(Text, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, unique=True)
    status = Column(Text, nullable=False, default="ACTIVE")
    bio = Column(Text)
    social_links = Column(Text)  # JSON-encoded mapping
    created_at = Column(Text, nullable=False)

    user = relationship("User")
