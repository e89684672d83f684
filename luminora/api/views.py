import logging

from django.http import HttpResponse, JsonResponse
from drf_yasg.utils import swagger_auto_schema
from rest_framework.response import Response
from rest_framework.views import APIView

from giveaway import utils as giveaway_utils
from giveaway.models import Giveaway, Participant
from giveaway.serializers import GlobalLeaderboardSerializer
from luminora import __version__
from referral.models import Referral

from .exceptions import Forbidden
from .models import BlockedIP
from .serializers import BlockIPSerializer, HealthSerializer, StatsSerializer
from .utils import check_admin_token


logger = logging.getLogger('api.views')

GLOBAL_LEADERBOARD_SIZE = 100


def home(request):
    return HttpResponse('Luminora backend is live!', content_type='text/plain')


def not_found(request, exception=None):
    return JsonResponse({'error': 'Endpoint not found.', 'kind': 'not_found'}, status=404)


def server_error(request):
    return JsonResponse({'error': 'Internal server error.', 'kind': 'internal_error'}, status=500)


class HealthView(APIView):

    @swagger_auto_schema(responses={200: HealthSerializer(many=False)})
    def get(self, request, format=None):
        return Response({
            'status': 'OK',
            'timestamp': giveaway_utils.now_ms(),
            'service': 'LUMINORA Giveaway Platform',
            'version': __version__,
        })


class StatsView(APIView):

    @swagger_auto_schema(responses={200: StatsSerializer(many=False)})
    def get(self, request, format=None):
        now = giveaway_utils.now_ms()
        total = Giveaway.objects.count()
        # Ended means now > end_time, so everything ending at or after now is active.
        active = Giveaway.objects.filter(end_time__gte=now).count()

        pi = StatsSerializer(data={
            'totalGiveaways': total,
            'totalParticipants': Participant.objects.count(),
            'activeGiveaways': active,
            'endedGiveaways': total - active,
            'totalReferrals': Referral.objects.count(),
        })
        pi.is_valid()
        return Response(pi.data)


class GlobalLeaderboardView(APIView):
    """
    Best referrers across every giveaway.
    """

    @swagger_auto_schema(responses={200: GlobalLeaderboardSerializer(many=True)})
    def get(self, request, format=None):
        participants = Participant.objects.select_related('giveaway').order_by(
            '-ref_count', 'joined_at', 'id',
        )[:GLOBAL_LEADERBOARD_SIZE]
        s = GlobalLeaderboardSerializer(participants, many=True, context={'request': request})
        return Response(s.data)


class BlockIPView(APIView):

    @swagger_auto_schema(request_body=BlockIPSerializer)
    def post(self, request):
        if not check_admin_token(request.data.get('token')):
            raise Forbidden('Unauthorized.')

        s = BlockIPSerializer(data=request.data)
        s.is_valid(raise_exception=True)

        ip = s.validated_data['ip']
        _, created = BlockedIP.objects.get_or_create(ip=ip)
        if created:
            logger.warning('Blocked IP %s', ip)
        return Response({'success': True})
