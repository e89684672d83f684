from rest_framework.throttling import SimpleRateThrottle

from .utils import get_client_ip


class ClientIPRateThrottle(SimpleRateThrottle):
    """
    Counts requests per client address, the way the proxy reports it.
    """

    def get_cache_key(self, request, view):
        return self.cache_format % {
            'scope': self.scope,
            'ident': get_client_ip(request),
        }


class GeneralRateThrottle(ClientIPRateThrottle):
    scope = 'general'


class StrictRateThrottle(ClientIPRateThrottle):
    scope = 'strict'
