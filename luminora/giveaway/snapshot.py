"""
Whole-collection JSON snapshots.

The layout is the one of the previous flat-file store: four files holding
giveaways keyed by id, participants and referral keys keyed by giveaway and
participant id, and a plain list of blocked IPs.
"""
import json
import logging
import os

from django.db import transaction

from api.models import BlockedIP
from referral.models import Referral
from . import utils
from .models import Giveaway, Participant


logger = logging.getLogger('giveaway.snapshot')

GIVEAWAYS_FILE = 'giveaways.json'
PARTICIPANTS_FILE = 'participants.json'
REFERRALS_FILE = 'referrals.json'
BLOCKED_IPS_FILE = 'blocked_ips.json'


def read_json(path, default):
    if not os.path.exists(path):
        return default
    with open(path, 'r') as f:
        return json.load(f)


def write_json(path, data):
    tmp = f'{path}.tmp'
    with open(tmp, 'w') as f:
        json.dump(data, f, indent=2)
    os.replace(tmp, path)


def dump_snapshot(directory):
    os.makedirs(directory, exist_ok=True)

    giveaways = {}
    participants = {}
    referrals = {}
    for g in Giveaway.objects.order_by('created_at'):
        giveaways[g.id] = {
            'id': g.id,
            'title': g.title,
            'host': g.host,
            'phone': g.phone,
            'channelUrl': g.channel_url,
            'endTime': g.end_time,
            'createdAt': g.created_at,
            'creatorIp': g.creator_ip,
            'status': g.status,
        }
        participants[g.id] = {}
        referrals[g.id] = {}

    for p in Participant.objects.order_by('joined_at', 'id'):
        participants[p.giveaway_id][p.id] = {
            'id': p.id,
            'name': p.name,
            'avatar': p.avatar,
            'refCount': p.ref_count,
            'joinedAt': p.joined_at,
            'ip': p.ip,
            'deviceFingerprint': p.device_fingerprint,
        }
        referrals[p.giveaway_id][p.id] = []

    for r in Referral.objects.order_by('id'):
        referrals[r.giveaway_id][r.participant_id].append(r.key)

    blocked_ips = list(BlockedIP.objects.order_by('id').values_list('ip', flat=True))

    write_json(os.path.join(directory, GIVEAWAYS_FILE), giveaways)
    write_json(os.path.join(directory, PARTICIPANTS_FILE), participants)
    write_json(os.path.join(directory, REFERRALS_FILE), referrals)
    write_json(os.path.join(directory, BLOCKED_IPS_FILE), blocked_ips)

    return {
        'giveaways': len(giveaways),
        'participants': sum(len(i) for i in participants.values()),
        'referrals': sum(len(keys) for i in referrals.values() for keys in i.values()),
        'blocked_ips': len(blocked_ips),
    }


def load_snapshot(directory):
    """
    Import a snapshot, merging it into the current database.

    Referral keys already credited within a giveaway are skipped and every
    reference count is recomputed from the keys that were kept.
    """
    giveaways = read_json(os.path.join(directory, GIVEAWAYS_FILE), {})
    participants = read_json(os.path.join(directory, PARTICIPANTS_FILE), {})
    referrals = read_json(os.path.join(directory, REFERRALS_FILE), {})
    blocked_ips = read_json(os.path.join(directory, BLOCKED_IPS_FILE), [])

    stats = {'giveaways': 0, 'participants': 0, 'referrals': 0, 'skipped': 0, 'blocked_ips': 0}
    now = utils.now_ms()

    with transaction.atomic():
        for gid, g in giveaways.items():
            giveaway, _ = Giveaway.objects.update_or_create(pk=gid, defaults={
                'title': g['title'],
                'host': g['host'],
                'phone': g['phone'],
                'channel_url': g['channelUrl'],
                'end_time': int(g['endTime']),
                'created_at': int(g.get('createdAt') or now),
                'creator_ip': g.get('creatorIp') or '',
                'status': g.get('status') or Giveaway.STATUS_ACTIVE,
            })
            stats['giveaways'] += 1

            for pid, p in (participants.get(gid) or {}).items():
                name = p['name'].strip()
                fingerprint = p.get('deviceFingerprint') or ''
                duplicate = Participant.objects.filter(
                    giveaway=giveaway,
                    name_key=utils.name_key(name),
                    device_fingerprint=fingerprint,
                ).exclude(pk=pid)
                if duplicate.exists():
                    logger.warning('Skipping duplicate participant %s in giveaway %s', pid, gid)
                    stats['skipped'] += 1
                    continue

                participant, _ = Participant.objects.update_or_create(pk=pid, defaults={
                    'giveaway': giveaway,
                    'name': name,
                    'name_key': utils.name_key(name),
                    'avatar': p.get('avatar') or '',
                    'joined_at': int(p.get('joinedAt') or now),
                    'ip': p.get('ip') or '',
                    'device_fingerprint': fingerprint,
                })
                stats['participants'] += 1

                for key in dict.fromkeys((referrals.get(gid) or {}).get(pid) or []):
                    if Referral.objects.filter(giveaway=giveaway, key=key).exists():
                        stats['skipped'] += 1
                        continue
                    Referral.objects.create(giveaway=giveaway, participant=participant, key=key, created_at=now)
                    stats['referrals'] += 1

                participant.ref_count = participant.referrals.count()
                participant.save(update_fields=['ref_count'])

        for ip in blocked_ips:
            _, created = BlockedIP.objects.get_or_create(ip=ip)
            stats['blocked_ips'] += int(created)

    return stats
