import os
# Ensure the app factory picks the Testing config & SQLite memory DB
os.environ.setdefault("APP_ENV", "testing")
os.environ.setdefault("TEST_DATABASE_URL", "sqlite:///:memory:")

from datetime import datetime, timedelta

import pytest
from feedback_intel import create_app
from feedback_intel.extensions import db
from feedback_intel.models import Feedback

@pytest.fixture(scope="session")
def app():
    app = create_app()
    app.config.update(
        TESTING=True,
        SQLALCHEMY_DATABASE_URI="sqlite:///:memory:",
        FEEDBACKS_ROW_LIMIT=50,
        FEEDBACKS_API_URL=None,
        DASHBOARD_SAMPLE_FALLBACK=True,
    )
    with app.app_context():
        db.create_all()
    yield app
    with app.app_context():
        db.drop_all()

@pytest.fixture()
def client(app):
    return app.test_client()

@pytest.fixture(autouse=True)
def _db_clean(app):
    # Clean BEFORE each test
    with app.app_context():
        db.session.rollback()
        for tbl in reversed(db.metadata.sorted_tables):
            db.session.execute(tbl.delete())
        db.session.commit()
    yield
    # And AFTER each test (keeps state hermetic even if a test fails mid-transaction)
    with app.app_context():
        db.session.rollback()
        for tbl in reversed(db.metadata.sorted_tables):
            db.session.execute(tbl.delete())
        db.session.commit()

@pytest.fixture()
def add_feedbacks(app):
    """Insert rows; each dict overrides the defaults below. Returns the ids."""
    base = datetime(2024, 5, 1, 9, 0, 0)

    def _add(*rows):
        ids = []
        with app.app_context():
            for i, overrides in enumerate(rows):
                values = dict(
                    video_marca="Nubank",
                    video_tema="Roxinho Cashback",
                    video_formato="BC",
                    video_versao="V1",
                    comment_author="Marina",
                    comment_text="Ajustar trilha",
                    ai_summary="Reduzir trilha",
                    ai_category_topic='["Audio"]',
                    ai_action_category="Ajuste",
                    status="pending",
                    sentiment="neutral",
                    video_file="video.mp4",
                    created_at=base + timedelta(hours=i),
                )
                values.update(overrides)
                fb = Feedback(**values)
                db.session.add(fb)
                db.session.flush()
                ids.append(fb.id)
            db.session.commit()
        return ids

    return _add
