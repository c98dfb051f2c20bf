from noteai.models.base_import import Base, Column, String, Boolean, DateTime, relationship, utc_now


class UserProfile(Base):
    """Profile row mirroring a user of the external auth provider."""

    __tablename__ = "user_profiles"

    id = Column(String(36), primary_key=True)  # same id as the auth provider's user
    onboarding_completed = Column(Boolean, default=False, nullable=False)
    created_at = Column(DateTime, default=utc_now, nullable=False)
    updated_at = Column(DateTime, default=utc_now, onupdate=utc_now, nullable=False)

    notes = relationship("Note", back_populates="user", cascade="all, delete-orphan", passive_deletes=True)
