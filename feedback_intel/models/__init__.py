from .feedback import Feedback
from .record import FeedbackRecord, FEEDBACK_FIELDS

__all__ = ["Feedback", "FeedbackRecord", "FEEDBACK_FIELDS"]
