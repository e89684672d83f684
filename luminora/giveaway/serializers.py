import datetime
import os
from urllib.parse import urlsplit

from django.conf import settings
from django.core.exceptions import ValidationError as DjangoValidationError
from django.core.validators import URLValidator
from django.utils import timezone
from django.utils.dateparse import parse_datetime
from rest_framework import serializers

from api.exceptions import PayloadTooLarge
from . import utils
from .models import Giveaway, Participant


PHONE_REGEX = r'^\+?[\d\s\-\(\)]{10,}$'

REQUIRED = {
    'required': 'All fields are required.',
    'blank': 'All fields are required.',
    'null': 'All fields are required.',
}

NAME_TOO_SHORT = 'Name must be at least 2 characters long.'

# 9999-12-31T23:59:59.999Z
MAX_TIMESTAMP = 253402300799999


def absolute_url(url, request):
    if request is None or url.startswith(('http://', 'https://')):
        return url
    return request.build_absolute_uri(url)


class TimestampField(serializers.Field):
    """
    Epoch milliseconds, given either as a number or an ISO-8601 string.
    """
    default_error_messages = {
        'invalid': 'End time must be a timestamp in milliseconds or an ISO-8601 date.',
    }

    def to_internal_value(self, data):
        if isinstance(data, bool):
            self.fail('invalid')
        if not isinstance(data, (int, float, str)):
            self.fail('invalid')

        value = data.strip() if isinstance(data, str) else data
        try:
            return self.check_range(int(float(value)))
        except (ValueError, OverflowError):
            if not isinstance(data, str):
                self.fail('invalid')

        try:
            parsed = parse_datetime(value)
        except ValueError:
            parsed = None
        if parsed is None:
            self.fail('invalid')
        if timezone.is_naive(parsed):
            parsed = parsed.replace(tzinfo=datetime.timezone.utc)
        return self.check_range(int(parsed.timestamp() * 1000))

    def check_range(self, value):
        if not 0 <= value <= MAX_TIMESTAMP:
            self.fail('invalid')
        return value

    def to_representation(self, value):
        return value


class ChannelURLField(serializers.CharField):
    """
    Web links are fully validated; app links such as ``tg://resolve?domain=...``
    only need an allowed scheme and a host part.
    """
    default_error_messages = {
        'invalid': 'Enter a valid URL.',
    }
    web_schemes = ['http', 'https']

    def to_internal_value(self, data):
        value = super().to_internal_value(data)
        try:
            parts = urlsplit(value)
        except ValueError:
            self.fail('invalid')

        scheme = parts.scheme.lower()
        if scheme not in settings.CHANNEL_URL_SCHEMES or not parts.netloc or any(c.isspace() for c in value):
            self.fail('invalid')
        if scheme in self.web_schemes:
            try:
                URLValidator(schemes=self.web_schemes)(value)
            except DjangoValidationError:
                self.fail('invalid')
        return value


class GiveawayCreateSerializer(serializers.Serializer):
    title = serializers.CharField(max_length=200, error_messages=REQUIRED)
    host = serializers.CharField(max_length=200, error_messages=REQUIRED)
    phone = serializers.RegexField(
        PHONE_REGEX,
        max_length=50,
        error_messages={**REQUIRED, 'invalid': 'Invalid phone number format.'},
    )
    channelUrl = ChannelURLField(
        source='channel_url',
        max_length=500,
        error_messages={**REQUIRED, 'invalid': 'Invalid channel URL.'},
    )
    endTime = TimestampField(source='end_time', error_messages=REQUIRED)


class JoinSerializer(serializers.Serializer):
    name = serializers.CharField(
        max_length=100,
        error_messages={'required': NAME_TOO_SHORT, 'blank': NAME_TOO_SHORT, 'null': NAME_TOO_SHORT},
    )
    avatar = serializers.FileField(required=False, allow_null=True)

    def validate_name(self, value):
        if len(value) < 2:
            raise serializers.ValidationError(NAME_TOO_SHORT)
        return value

    def validate_avatar(self, value):
        if value is None:
            return value
        if value.size > settings.AVATAR_MAX_SIZE:
            raise PayloadTooLarge(
                f'File too large. Maximum size is {settings.AVATAR_MAX_SIZE // (1024 * 1024)}MB.'
            )
        ext = os.path.splitext(value.name)[1].lower()
        content_type = getattr(value, 'content_type', None) or ''
        if ext not in settings.AVATAR_EXTENSIONS or not content_type.startswith('image/'):
            raise serializers.ValidationError('Only image files are allowed.')
        return value


class ParticipantSerializer(serializers.ModelSerializer):
    avatar = serializers.SerializerMethodField()
    refCount = serializers.IntegerField(source='ref_count', read_only=True)
    joinedAt = serializers.IntegerField(source='joined_at', read_only=True)

    class Meta:
        model = Participant
        fields = ['id', 'name', 'avatar', 'refCount', 'joinedAt']

    def get_avatar(self, instance):
        return absolute_url(instance.avatar, self.context.get('request'))


class GlobalLeaderboardSerializer(ParticipantSerializer):
    giveawayTitle = serializers.CharField(source='giveaway.title', read_only=True)
    giveawayId = serializers.CharField(source='giveaway_id', read_only=True)

    class Meta(ParticipantSerializer.Meta):
        fields = ParticipantSerializer.Meta.fields + ['giveawayTitle', 'giveawayId']


class GiveawaySerializer(serializers.ModelSerializer):
    channelUrl = serializers.CharField(source='channel_url', read_only=True)
    endTime = serializers.IntegerField(source='end_time', read_only=True)
    createdAt = serializers.IntegerField(source='created_at', read_only=True)
    participantCount = serializers.SerializerMethodField('get_participant_count')
    isEnded = serializers.BooleanField(source='is_ended', read_only=True)
    winner = serializers.SerializerMethodField()

    class Meta:
        model = Giveaway
        fields = [
            'id',
            'title',
            'host',
            'phone',
            'channelUrl',
            'endTime',
            'createdAt',
            'status',
            'participantCount',
            'isEnded',
            'winner',
        ]

    def get_participant_count(self, instance):
        return instance.participants.count()

    def get_winner(self, instance):
        winner = instance.winner
        if winner is None:
            return None
        return ParticipantSerializer(winner, context=self.context).data


class GiveawayDetailSerializer(GiveawaySerializer):
    participants = serializers.SerializerMethodField()

    class Meta(GiveawaySerializer.Meta):
        fields = GiveawaySerializer.Meta.fields + ['participants']

    def get_participants(self, instance):
        participants = utils.rank(instance.participants.all())
        return ParticipantSerializer(participants, many=True, context=self.context).data


class CountdownSerializer(serializers.Serializer):
    remaining = serializers.IntegerField()
    isEnded = serializers.BooleanField()


class CreateResultSerializer(serializers.Serializer):
    success = serializers.BooleanField()
    id = serializers.CharField()


class JoinResultSerializer(serializers.Serializer):
    success = serializers.BooleanField()
    userId = serializers.CharField()
    refLink = serializers.CharField()
    avatar = serializers.CharField()
