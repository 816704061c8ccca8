from datetime import datetime, timedelta

import pytest

from app import create_app
from models import db


class FakeClock:
    def __init__(self, start):
        self.current = start

    def __call__(self):
        return self.current

    def advance(self, **kwargs):
        self.current += timedelta(**kwargs)


class FakeModel:
    """Records prompts and answers with a canned object."""

    def __init__(self, answer=None, error=None):
        self.answer = answer
        self.error = error
        self.calls = []

    def __call__(self, prompt, output_model):
        self.calls.append((prompt, output_model))
        if self.error:
            raise self.error
        if self.answer is not None:
            return self.answer
        return {name: f"{name} text" for name in output_model.model_fields}


@pytest.fixture
def clock():
    # Wednesday
    return FakeClock(datetime(2026, 10, 21, 10, 30))


@pytest.fixture
def fake_model():
    return FakeModel()


@pytest.fixture
def app(clock, fake_model):
    app = create_app(
        {"TESTING": True, "SQLALCHEMY_DATABASE_URI": "sqlite://", "ALLOW_INIT_DB": False},
        clock=clock,
        llm_invoke=fake_model,
    )
    with app.app_context():
        yield app
        db.session.remove()
        db.drop_all()


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def store(app):
    return app.extensions["entry_store"]


def make_entry(content="went for a run", type="activity", mood="happy",
               date="2026-10-21", time="09:00"):
    return {"content": content, "type": type, "mood": mood, "date": date, "time": time}
