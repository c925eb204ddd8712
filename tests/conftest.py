import os

os.environ.setdefault("DATABASE_URL", "sqlite+pysqlite:///:memory:")
os.environ.setdefault("SCHEDULER_ENABLED", "false")

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from tutorlink.db.session import Base
from tutorlink.db import models  # noqa: F401


@pytest.fixture()
def db_session():
    engine = create_engine("sqlite+pysqlite:///:memory:", future=True)
    TestingSessionLocal = sessionmaker(bind=engine, autoflush=False, autocommit=False)
    Base.metadata.create_all(bind=engine)
    session = TestingSessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture()
def ledger_calls(monkeypatch):
    """Replace the ledger with a recorder returning a fixed balance."""
    from decimal import Decimal
    from tutorlink.services import ledger_service

    calls = []

    def fake_recompute_balance(db, tutor_id):
        calls.append(tutor_id)
        return Decimal("425.00")

    monkeypatch.setattr(ledger_service, "recompute_balance", fake_recompute_balance)
    return calls


@pytest.fixture()
def sent_notifications(monkeypatch):
    """Record notifications instead of persisting or pushing them."""
    from tutorlink.services import notification_service

    sent = []

    def fake_send_notification(db, user_id, title, content, kind, primary_action_url=None):
        sent.append(
            {
                "user_id": user_id,
                "title": title,
                "content": content,
                "kind": kind,
                "url": primary_action_url,
            }
        )

    monkeypatch.setattr(notification_service, "send_notification", fake_send_notification)
    return sent
