from noteai.models.base_import import (
    Base, Column, String, Text, DateTime, ForeignKey, Index, relationship, new_uuid, utc_now
)


class Summary(Base):
    __tablename__ = "summaries"

    id = Column(String(36), primary_key=True, default=new_uuid)
    note_id = Column(String(36), ForeignKey("notes.id", ondelete="CASCADE"), nullable=False, unique=True)
    model = Column(Text, nullable=False)  # AI model name, e.g. "gemini-2.0-flash-001"
    content = Column(Text, nullable=False)
    created_at = Column(DateTime, default=utc_now, nullable=False)

    note = relationship("Note", back_populates="summary")

    __table_args__ = (
        Index("summaries_note_id_idx", "note_id"),
    )
