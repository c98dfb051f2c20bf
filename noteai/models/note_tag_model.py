from noteai.models.base_import import (
    Base, Column, String, Text, ForeignKey, Index, PrimaryKeyConstraint, relationship
)


class NoteTag(Base):
    __tablename__ = "note_tags"

    note_id = Column(String(36), ForeignKey("notes.id", ondelete="CASCADE"), nullable=False)
    tag = Column(Text, nullable=False)

    note = relationship("Note", back_populates="tags")

    __table_args__ = (
        PrimaryKeyConstraint("note_id", "tag"),
        Index("note_tags_note_id_idx", "note_id"),
        Index("note_tags_tag_idx", "tag"),
    )
