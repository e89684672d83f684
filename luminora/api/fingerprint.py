"""
Device fingerprints.

Two independent implementations of the same capability live here: the server
side one hashes request headers, the client side one hashes browser signals
collected by a frontend. They are never compared with each other, only
equality within the same side matters.
"""
import hashlib
import json
from dataclasses import dataclass, field
from typing import List, Optional

import cachetools
from user_agents import parse as parse_user_agent


FINGERPRINT_HEADER = 'X-Device-Fingerprint'
STORAGE_KEY = 'deviceFingerprint'

SERVER_HEADERS = ('User-Agent', 'Accept', 'Accept-Language', 'Accept-Encoding', 'Connection')


@cachetools.cached(cachetools.LRUCache(maxsize=1024))
def user_agent_families(user_agent):
    ua = parse_user_agent(user_agent)
    browser = {'family': ua.browser.family, 'version': ua.browser.version_string}
    platform = {'family': ua.os.family, 'version': ua.os.version_string}
    return json.dumps(browser, sort_keys=True), json.dumps(platform, sort_keys=True)


def fingerprint_from_headers(headers):
    values = [headers.get(name) or '' for name in SERVER_HEADERS]
    browser, platform = user_agent_families(values[0])
    m = hashlib.sha256()
    for value in values + [browser, platform]:
        m.update(value.encode())
    return m.hexdigest()


def server_fingerprint(request):
    return fingerprint_from_headers(request.headers)


@dataclass(frozen=True)
class ClientSignals:
    canvas: str = ''
    screen_width: int = 0
    screen_height: int = 0
    color_depth: int = 0
    timezone: str = ''
    language: str = ''
    platform: str = ''
    user_agent: str = ''
    cookie_enabled: bool = False
    do_not_track: Optional[str] = None
    webgl_vendor: str = ''
    webgl_renderer: str = ''
    audio: List[int] = field(default_factory=list)

    @property
    def screen(self):
        return f'{self.screen_width}x{self.screen_height}x{self.color_depth}'


def client_fingerprint(signals):
    combined = '|'.join([
        signals.canvas,
        signals.screen,
        signals.timezone,
        signals.language,
        signals.platform,
        signals.user_agent,
        'true' if signals.cookie_enabled else 'false',
        signals.do_not_track or 'null',
        signals.webgl_vendor + signals.webgl_renderer,
        ','.join(str(i) for i in signals.audio[:30]),
    ])
    return hashlib.sha256(combined.encode()).hexdigest()[:32]


def get_stored_fingerprint(storage, collect):
    """
    Return the fingerprint cached for this device, computing it only once.
    """
    stored = storage.get(STORAGE_KEY)
    if stored:
        return stored
    fingerprint = client_fingerprint(collect())
    storage[STORAGE_KEY] = fingerprint
    return fingerprint


def fingerprint_headers(storage, collect):
    return {FINGERPRINT_HEADER: get_stored_fingerprint(storage, collect)}
