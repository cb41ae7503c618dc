import random

import pytest

from termo import create_app
from termo.config import TestingConfig
from termo.services.game_service import GameSession, initialize_game_service
from termo.services.word_corpus import WordCorpus

from .helpers import ACCENTED, ACCEPTED, TARGETS


@pytest.fixture
def corpus():
    return WordCorpus(TARGETS, ACCEPTED, ACCENTED)


@pytest.fixture
def make_session(corpus):
    def factory(mode="single", targets=None, **kwargs):
        kwargs.setdefault("rng", random.Random(1234))
        return GameSession(corpus, mode=mode, targets=targets, **kwargs)
    return factory


@pytest.fixture
def game_service(corpus):
    return initialize_game_service(corpus, notice_seconds=2, rng=random.Random(99))


@pytest.fixture
def app(tmp_path, game_service):
    class Config(TestingConfig):
        LOG_DIR = str(tmp_path / "logs")

    app, socketio = create_app(Config)
    yield app


@pytest.fixture
def client(app):
    return app.test_client()
