from sqlalchemy import Column, ForeignKey, Integer, Text
from sqlalchemy.orm import relationship
from marketplace.database import Base


class Payment(Base):
    __tablename__ = "payments"

    id = Column(Text, primary_key=True)
    user_id = Column(Text, ForeignKey("users.id", ondelete="CASCADE"), nullable=False)
    payment_type = Column(Text, nullable=False)
    amount = Column(Integer, nullable=False)
    reference_code = Column(Text)
    screenshot_url = Column(Text)
    status = Column(Text, nullable=False, default="PENDING")
    verified_by_id = Column(Text, ForeignKey("users.id", ondelete="SET NULL"))
    verified_at = Column(Text)
    event_registration_id = Column(Text, ForeignKey("event_registrations.id", ondelete="SET NULL"))
    event_id = Column(Text, ForeignKey("events.id", ondelete="SET NULL"))
    business_id = Column(Text, ForeignKey("businesses.id", ondelete="SET NULL"))
    job_post_id = Column(Text, ForeignKey("job_posts.id", ondelete="SET NULL"))
    created_at = Column(Text, nullable=False)
    updated_at = Column(Text, nullable=False)

    user = relationship("User", foreign_keys=[user_id])
    verified_by = relationship("User", foreign_keys=[verified_by_id])
    event_registration = relationship("EventRegistration")
    event = relationship("Event")
