import hmac
import logging

from django.conf import settings
from django.core.exceptions import ValidationError
from django.core.validators import validate_ipv46_address


logger = logging.getLogger('api.utils')

PROXY_HEADERS = ('x-forwarded-for', 'x-real-ip', 'x-cluster-client-ip', 'cf-connecting-ip')


def get_client_ip(request):
    if settings.TRUST_PROXY:
        forwarded = request.META.get('HTTP_X_FORWARDED_FOR')
        if forwarded:
            ip = forwarded.split(',')[0].strip()
            try:
                validate_ipv46_address(ip)
                return ip
            except ValidationError:
                logger.warning('Ignoring malformed X-Forwarded-For: %.100s', forwarded)
    return request.META.get('REMOTE_ADDR', '')


def proxy_header_count(request):
    return sum(1 for header in PROXY_HEADERS if request.headers.get(header))


def check_admin_token(token):
    expected = settings.ADMIN_TOKEN
    if not expected or not token:
        return False
    return hmac.compare_digest(str(token).encode(), expected.encode())
