from dataclasses import replace

from conftest import BROWSER_UA, OTHER_UA
from api.fingerprint import (
    FINGERPRINT_HEADER,
    STORAGE_KEY,
    ClientSignals,
    client_fingerprint,
    fingerprint_from_headers,
    fingerprint_headers,
    get_stored_fingerprint,
    user_agent_families,
)


HEADERS = {
    'User-Agent': BROWSER_UA,
    'Accept': 'application/json',
    'Accept-Language': 'en-US,en;q=0.9',
    'Accept-Encoding': 'gzip, deflate, br',
    'Connection': 'keep-alive',
}

SIGNALS = ClientSignals(
    canvas='data:image/png;base64,AAAA',
    screen_width=1920,
    screen_height=1080,
    color_depth=24,
    timezone='Europe/Berlin',
    language='de-DE',
    platform='Linux x86_64',
    user_agent=BROWSER_UA,
    cookie_enabled=True,
    webgl_vendor='Intel',
    webgl_renderer='Mesa',
    audio=list(range(40)),
)


def test_server_fingerprint_is_stable():
    fp = fingerprint_from_headers(HEADERS)
    assert fp == fingerprint_from_headers(dict(HEADERS))
    assert len(fp) == 64
    assert '_' not in fp


def test_server_fingerprint_depends_on_headers():
    fp = fingerprint_from_headers(HEADERS)
    assert fp != fingerprint_from_headers({**HEADERS, 'User-Agent': OTHER_UA})
    assert fp != fingerprint_from_headers({**HEADERS, 'Accept-Language': 'fr-FR'})
    # Headers outside the fingerprinted set are ignored.
    assert fp == fingerprint_from_headers({**HEADERS, 'Cookie': 'a=b'})


def test_server_fingerprint_tolerates_missing_headers():
    assert len(fingerprint_from_headers({})) == 64


def test_user_agent_families():
    browser, platform = user_agent_families(BROWSER_UA)
    assert '"Chrome"' in browser
    assert '"Linux"' in platform
    assert user_agent_families(OTHER_UA) != (browser, platform)


def test_client_fingerprint():
    fp = client_fingerprint(SIGNALS)
    assert len(fp) == 32
    assert fp == client_fingerprint(replace(SIGNALS))
    assert fp != client_fingerprint(replace(SIGNALS, timezone='UTC'))


def test_client_fingerprint_uses_first_audio_samples():
    longer = replace(SIGNALS, audio=list(range(40)) + [99])
    assert client_fingerprint(longer) == client_fingerprint(SIGNALS)


def test_screen():
    assert SIGNALS.screen == '1920x1080x24'


def test_stored_fingerprint_is_computed_once():
    calls = []

    def collect():
        calls.append(1)
        return SIGNALS

    storage = {}
    fp = get_stored_fingerprint(storage, collect)
    assert storage[STORAGE_KEY] == fp
    assert get_stored_fingerprint(storage, collect) == fp
    assert len(calls) == 1

    assert fingerprint_headers(storage, collect) == {FINGERPRINT_HEADER: fp}
    assert len(calls) == 1


def test_stored_fingerprint_is_reused():
    storage = {STORAGE_KEY: 'cached'}
    assert get_stored_fingerprint(storage, lambda: SIGNALS) == 'cached'
