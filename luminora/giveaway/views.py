import io
import logging

import qrcode
import qrcode.image.svg
from django.conf import settings
from django.http import HttpResponse, HttpResponseRedirect
from django.shortcuts import render
from drf_yasg.utils import swagger_auto_schema
from rest_framework import generics
from rest_framework.response import Response
from rest_framework.views import APIView

from api.exceptions import NotFound
from api.fingerprint import server_fingerprint
from api.throttling import GeneralRateThrottle, StrictRateThrottle
from api.utils import get_client_ip
from referral.utils import credit_referral

from . import lifecycle, utils
from .models import Giveaway
from .serializers import (
    CountdownSerializer,
    CreateResultSerializer,
    GiveawayCreateSerializer,
    GiveawayDetailSerializer,
    GiveawaySerializer,
    JoinResultSerializer,
    JoinSerializer,
    ParticipantSerializer,
    absolute_url,
)


logger = logging.getLogger('giveaway.views')

LEADERBOARD_SIZE = 50


class ChannelRedirect(HttpResponseRedirect):

    @property
    def allowed_schemes(self):
        return settings.CHANNEL_URL_SCHEMES


class GiveawayCreateView(APIView):
    throttle_classes = [GeneralRateThrottle, StrictRateThrottle]

    @swagger_auto_schema(request_body=GiveawayCreateSerializer, responses={200: CreateResultSerializer})
    def post(self, request):
        giveaway = lifecycle.create_giveaway(request.data, creator_ip=get_client_ip(request))
        return Response({'success': True, 'id': giveaway.id})


class GiveawayJoinView(APIView):
    throttle_classes = [GeneralRateThrottle, StrictRateThrottle]

    @swagger_auto_schema(request_body=JoinSerializer, responses={200: JoinResultSerializer})
    def post(self, request, pk):
        participant = lifecycle.join_giveaway(
            pk,
            request.data,
            ip=get_client_ip(request),
            fingerprint=server_fingerprint(request),
        )
        return Response({
            'success': True,
            'userId': participant.id,
            'refLink': lifecycle.referral_link(request, pk, participant.id),
            'avatar': absolute_url(participant.avatar, request),
        })


class GiveawayDeleteView(APIView):
    throttle_classes = [GeneralRateThrottle, StrictRateThrottle]

    def delete(self, request, pk):
        lifecycle.delete_giveaway(pk, requester_ip=get_client_ip(request))
        return Response({'success': True})


class GiveawayListView(generics.ListAPIView):
    serializer_class = GiveawaySerializer
    filterset_fields = ['status', 'host']
    ordering_fields = ['end_time', 'created_at']
    ordering = ['-created_at']

    def get_queryset(self):
        return lifecycle.list_giveaways()


class MyGiveawaysView(GiveawayListView):
    filterset_fields = ['status']

    def get_queryset(self):
        return lifecycle.list_by_creator(get_client_ip(self.request))


class GiveawayDetailView(APIView):

    @swagger_auto_schema(responses={200: GiveawayDetailSerializer})
    def get(self, request, pk):
        giveaway = lifecycle.get_giveaway(pk)
        return Response(GiveawayDetailSerializer(giveaway, context={'request': request}).data)


class LeaderboardView(APIView):
    """
    Top participants of a giveaway, most referrals first.
    """

    @swagger_auto_schema(responses={200: ParticipantSerializer(many=True)})
    def get(self, request, pk):
        giveaway = lifecycle.get_giveaway(pk)
        participants = utils.rank(giveaway.participants.all())[:LEADERBOARD_SIZE]
        return Response(ParticipantSerializer(participants, many=True, context={'request': request}).data)


class CountdownView(APIView):

    @swagger_auto_schema(responses={200: CountdownSerializer})
    def get(self, request, pk):
        giveaway = lifecycle.get_giveaway(pk)
        now = utils.now_ms()
        return Response({
            'remaining': utils.remaining_ms(giveaway.end_time, now),
            'isEnded': utils.is_ended(giveaway.end_time, now),
        })


class QRCodeView(APIView):
    """
    QR Code of a participant's referral link.
    """

    def get(self, request, pk, participant):
        giveaway = lifecycle.get_giveaway(pk)
        if not giveaway.participants.filter(pk=participant).exists():
            raise NotFound('Participant not found.')

        factory = qrcode.image.svg.SvgPathImage
        img = qrcode.make(
            lifecycle.referral_link(request, giveaway.id, participant),
            image_factory=factory,
        )
        stream = io.BytesIO()
        img.save(stream)
        img = stream.getvalue()
        stream.close()
        return HttpResponse(img, content_type='image/svg+xml')


class GiveawayRedirectView(APIView):
    """
    Public referral link: credits the referrer and sends the visitor on to the
    giveaway channel.
    """

    throttle_classes = []
    swagger_schema = None

    def get(self, request, pk):
        giveaway = Giveaway.objects.filter(pk=pk).first()
        if giveaway is None:
            return render(request, 'giveaway/not_found.html', status=404)

        if giveaway.is_ended:
            winner = giveaway.winner
            return render(request, 'giveaway/ended.html', {
                'giveaway': giveaway,
                'winner': winner,
                'winner_avatar': absolute_url(winner.avatar, request) if winner else None,
            })

        ref = request.query_params.get('ref')
        if ref:
            try:
                credit_referral(giveaway, ref, get_client_ip(request), server_fingerprint(request))
            except Exception:
                logger.error('Referral tracking failed for giveaway %s', pk, exc_info=True)

        return ChannelRedirect(giveaway.channel_url)

