"""
Derived giveaway state.

Everything here is a pure function of stored values and the current clock, so
every serializer, page and command computes ended flags, remaining time and
winners the same way.
"""
import time


def now_ms():
    return int(time.time() * 1000)


def is_ended(end_time, now=None):
    if now is None:
        now = now_ms()
    return now > end_time


def remaining_ms(end_time, now=None):
    if now is None:
        now = now_ms()
    return max(0, end_time - now)


def rank_key(participant):
    # Most referrals first, earliest join breaks ties.
    return (-participant.ref_count, participant.joined_at, participant.id)


def rank(participants):
    return sorted(participants, key=rank_key)


def pick_winner(participants):
    ranked = rank(participants)
    return ranked[0] if ranked else None


def name_key(name):
    return name.strip().casefold()
