import pytest
from django.core.cache import cache

from giveaway import utils


BROWSER_UA = (
    'Mozilla/5.0 (X11; Linux x86_64) AppleWebKit/537.36 (KHTML, like Gecko) '
    'Chrome/124.0.0.0 Safari/537.36'
)
OTHER_UA = 'Mozilla/5.0 (iPhone; CPU iPhone OS 17_4 like Mac OS X) AppleWebKit/605.1.15 Mobile/15E148'

CREATOR_IP = '10.0.0.1'

GIVEAWAY_DATA = {
    'title': 'Summer Giveaway',
    'host': 'Hans',
    'phone': '+1 (555) 123-4567',
    'channelUrl': 'https://t.me/luminora',
}


class Clock(object):

    def __init__(self, now):
        self.now = now

    def __call__(self):
        return self.now

    def advance(self, ms):
        self.now += ms


@pytest.fixture(autouse=True)
def reset_cache():
    cache.clear()
    yield
    cache.clear()


@pytest.fixture(autouse=True)
def media_root(settings, tmp_path):
    settings.MEDIA_ROOT = str(tmp_path / 'uploads')
    return settings.MEDIA_ROOT


@pytest.fixture
def clock(monkeypatch):
    c = Clock(1760000000000)
    monkeypatch.setattr(utils, 'now_ms', c)
    return c


@pytest.fixture
def make_client():
    from rest_framework.test import APIClient

    def _make(ip=CREATOR_IP, user_agent=BROWSER_UA, **headers):
        return APIClient(HTTP_USER_AGENT=user_agent, REMOTE_ADDR=ip, **headers)
    return _make


@pytest.fixture
def client(make_client):
    return make_client()


@pytest.fixture
def giveaway(db, clock):
    from giveaway import lifecycle

    return lifecycle.create_giveaway({**GIVEAWAY_DATA, 'endTime': clock.now + 60000}, creator_ip=CREATOR_IP)


@pytest.fixture
def giveaway_data(clock):
    return {**GIVEAWAY_DATA, 'endTime': clock.now + 60000}
