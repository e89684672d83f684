import logging
import re

from rest_framework import permissions

from .exceptions import Blocked
from .models import BlockedIP
from .utils import get_client_ip, proxy_header_count


logger = logging.getLogger('api.permissions')

BOT_USER_AGENTS = [
    re.compile(pattern, re.IGNORECASE) for pattern in (
        'bot', 'crawler', 'spider', 'scraper', 'curl', 'wget', 'python',
        'java', 'php', 'node', 'axios', 'fetch', 'postman', 'insomnia',
    )
]

MIN_USER_AGENT_LENGTH = 10
MAX_PROXY_HEADERS = 2


class IsNotBlocked(permissions.BasePermission):

    def has_permission(self, request, view):
        if BlockedIP.objects.filter(ip=get_client_ip(request)).exists():
            raise Blocked()
        return True


class IsNotBot(permissions.BasePermission):
    message = 'Invalid request.'

    def has_permission(self, request, view):
        ip = get_client_ip(request)
        user_agent = request.headers.get('User-Agent', '')

        if any(pattern.search(user_agent) for pattern in BOT_USER_AGENTS):
            logger.warning('Bot detected: %s - %s', ip, user_agent)
            self.message = 'Bot access not allowed.'
            return False

        if len(user_agent) < MIN_USER_AGENT_LENGTH:
            logger.warning('Suspicious request: %s - no or short User-Agent', ip)
            self.message = 'Invalid request.'
            return False

        if proxy_header_count(request) > MAX_PROXY_HEADERS:
            logger.warning('Suspicious proxy headers: %s', ip)
            self.message = 'Suspicious request.'
            return False

        return True
