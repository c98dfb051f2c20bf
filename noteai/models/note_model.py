from noteai.models.base_import import (
    Base, Column, String, Text, DateTime, ForeignKey, Index, relationship, new_uuid, utc_now
)


class Note(Base):
    __tablename__ = "notes"

    id = Column(String(36), primary_key=True, default=new_uuid)
    user_id = Column(String(36), ForeignKey("user_profiles.id", ondelete="CASCADE"), nullable=False)

    # Content
    title = Column(Text, nullable=False)
    content = Column(Text, nullable=False)

    # Timestamps
    created_at = Column(DateTime, default=utc_now, nullable=False)
    updated_at = Column(DateTime, default=utc_now, nullable=False)

    # Relationships
    user = relationship("UserProfile", back_populates="notes")
    tags = relationship("NoteTag", back_populates="note", cascade="all, delete-orphan", passive_deletes=True)
    summary = relationship(
        "Summary", back_populates="note", uselist=False, cascade="all, delete-orphan", passive_deletes=True
    )

    __table_args__ = (
        Index("notes_user_id_idx", "user_id"),
        Index("notes_created_at_idx", "created_at"),
    )

    def __repr__(self):
        return f"<Note(id={self.id}, title='{self.title}', user_id={self.user_id})>"
