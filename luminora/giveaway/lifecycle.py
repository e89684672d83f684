import logging
import os
import random
from urllib.parse import urlencode

from django.conf import settings
from django.core.files.storage import default_storage
from django.db import IntegrityError, transaction
from django.urls import reverse

from api.exceptions import Conflict, Forbidden, NotFound, ValidationError
from . import utils
from .models import Giveaway, Participant, new_id
from .serializers import GiveawayCreateSerializer, JoinSerializer


logger = logging.getLogger('giveaway.lifecycle')


def create_giveaway(data, creator_ip):
    s = GiveawayCreateSerializer(data=data)
    s.is_valid(raise_exception=True)

    now = utils.now_ms()
    if s.validated_data['end_time'] <= now:
        raise ValidationError('End time must be in the future.')

    giveaway = Giveaway.objects.create(
        created_at=now,
        creator_ip=creator_ip,
        status=Giveaway.STATUS_ACTIVE,
        **s.validated_data,
    )
    logger.info('Giveaway %s created by %s, ends at %d', giveaway.id, creator_ip, giveaway.end_time)
    return giveaway


def get_giveaway(giveaway_id):
    try:
        return Giveaway.objects.get(pk=giveaway_id)
    except Giveaway.DoesNotExist:
        raise NotFound()


def list_giveaways():
    return Giveaway.objects.all()


def list_by_creator(requester_ip):
    return Giveaway.objects.filter(creator_ip=requester_ip)


def delete_giveaway(giveaway_id, requester_ip):
    with transaction.atomic():
        giveaway = Giveaway.objects.select_for_update().filter(pk=giveaway_id).first()
        if giveaway is None:
            raise NotFound()
        if giveaway.creator_ip != requester_ip:
            raise Forbidden('Only the creator can delete this giveaway.')

        uploads = [p.avatar for p in giveaway.participants.all() if p.avatar.startswith(settings.MEDIA_URL)]
        giveaway.delete()
        transaction.on_commit(lambda: remove_avatars(uploads))

    logger.info('Giveaway %s deleted by %s', giveaway_id, requester_ip)


def join_giveaway(giveaway_id, data, ip, fingerprint):
    giveaway = get_giveaway(giveaway_id)
    if giveaway.is_ended:
        raise ValidationError('Giveaway has ended.')

    s = JoinSerializer(data=data)
    s.is_valid(raise_exception=True)

    name = s.validated_data['name']
    key = utils.name_key(name)
    if Participant.objects.filter(giveaway=giveaway, name_key=key, device_fingerprint=fingerprint).exists():
        raise Conflict('You have already joined this giveaway.')

    upload = s.validated_data.get('avatar')
    if upload:
        avatar = store_avatar(upload)
    else:
        avatar = random.choice(settings.AVATAR_POOL)

    try:
        with transaction.atomic():
            participant = Participant.objects.create(
                giveaway=giveaway,
                name=name,
                name_key=key,
                avatar=avatar,
                ref_count=0,
                joined_at=utils.now_ms(),
                ip=ip,
                device_fingerprint=fingerprint,
            )
    except IntegrityError:
        if upload:
            remove_avatars([avatar])
        raise Conflict('You have already joined this giveaway.')

    logger.info('Participant %s joined giveaway %s', participant.id, giveaway.id)
    return participant


def store_avatar(upload):
    ext = os.path.splitext(upload.name)[1].lower()
    name = default_storage.save(f'avatars/{new_id()}{ext}', upload)
    return default_storage.url(name)


def remove_avatars(urls):
    for url in urls:
        name = url[len(settings.MEDIA_URL):]
        try:
            default_storage.delete(name)
        except OSError:
            logger.error('Failed to remove avatar %s', name, exc_info=True)


def referral_link(request, giveaway_id, participant_id):
    path = reverse('giveaway-redirect', kwargs={'pk': giveaway_id})
    if settings.REFERRAL_BASE_URL:
        url = settings.REFERRAL_BASE_URL.rstrip('/') + path
    else:
        url = request.build_absolute_uri(path)
    return f'{url}?{urlencode({"ref": participant_id})}'
