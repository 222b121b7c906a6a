from __future__ import annotations

from sqlalchemy import Index

from feedback_intel.extensions import db

"""
feedbacks: one row per reviewer comment, written by the upstream ingestion
pipeline (video-review transcription + AI tagging). Read-only here.

• ix_feedbacks_created_at: recency ordering for GET /api/feedbacks
• ix_feedbacks_marca_versao: the brand -> version cascading filter
"""

class Feedback(db.Model):
    __tablename__ = "feedbacks"

    id = db.Column(db.Integer, primary_key=True)

    # Video campaign
    video_marca   = db.Column(db.String(120), nullable=False)
    video_tema    = db.Column(db.String(255), nullable=False)
    video_formato = db.Column(db.String(32),  nullable=True)
    video_versao  = db.Column(db.String(16),  nullable=True)
    video_file    = db.Column(db.String(255), nullable=True)

    # Reviewer comment
    comment_author = db.Column(db.String(120), nullable=True)
    comment_text   = db.Column(db.Text, nullable=True)

    # AI enrichment (topic list is a JSON array serialized as text)
    ai_summary         = db.Column(db.Text, nullable=True)
    ai_category_topic  = db.Column(db.Text, nullable=True)
    ai_action_category = db.Column(db.String(64), nullable=True)

    status    = db.Column(db.String(32), nullable=True)  # pending|in-review|resolved
    sentiment = db.Column(db.String(16), nullable=True)  # positive|neutral|negative

    created_at = db.Column(db.DateTime(timezone=True), server_default=db.func.now(), nullable=False)

    __table_args__ = (
        Index("ix_feedbacks_created_at", "created_at"),
        Index("ix_feedbacks_marca_versao", "video_marca", "video_versao"),
    )

    def __repr__(self) -> str:
        return f"<Feedback id={self.id} marca={self.video_marca!r} versao={self.video_versao!r}>"
