from flask import Blueprint

bp = Blueprint("api", __name__)

from . import feedbacks  # noqa: E402,F401 (import after bp to avoid circulars)
