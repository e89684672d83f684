import pytest

from giveaway import lifecycle
from referral.models import Referral
from referral.utils import attribution_key, credit_referral


ALICE_FP = 'a' * 64
VISITOR_FP = 'b' * 64


@pytest.fixture
def alice(giveaway):
    return lifecycle.join_giveaway(giveaway.id, {'name': 'Alice'}, ip='10.0.0.5', fingerprint=ALICE_FP)


@pytest.fixture
def bob(giveaway):
    return lifecycle.join_giveaway(giveaway.id, {'name': 'Bob'}, ip='10.0.0.6', fingerprint='c' * 64)


def test_attribution_key():
    assert attribution_key('1.2.3.4', 'abc') == '1.2.3.4_abc'


@pytest.mark.django_db
def test_credit_referral(giveaway, alice):
    assert credit_referral(giveaway, alice.id, '10.0.0.9', VISITOR_FP)

    alice.refresh_from_db()
    assert alice.ref_count == 1
    assert list(alice.referrals.values_list('key', flat=True)) == [f'10.0.0.9_{VISITOR_FP}']


@pytest.mark.django_db
def test_repeated_visits_count_once(giveaway, alice):
    assert credit_referral(giveaway, alice.id, '10.0.0.9', VISITOR_FP)
    for _ in range(3):
        assert not credit_referral(giveaway, alice.id, '10.0.0.9', VISITOR_FP)

    alice.refresh_from_db()
    assert alice.ref_count == 1
    assert Referral.objects.count() == 1


@pytest.mark.django_db
def test_distinct_visitors_are_counted(giveaway, alice):
    assert credit_referral(giveaway, alice.id, '10.0.0.9', VISITOR_FP)
    assert credit_referral(giveaway, alice.id, '10.0.0.10', VISITOR_FP)
    assert credit_referral(giveaway, alice.id, '10.0.0.9', 'd' * 64)

    alice.refresh_from_db()
    assert alice.ref_count == 3
    assert alice.ref_count == alice.referrals.count()


@pytest.mark.django_db
def test_visitor_is_credited_once_per_giveaway(giveaway, alice, bob):
    assert credit_referral(giveaway, alice.id, '10.0.0.9', VISITOR_FP)
    assert not credit_referral(giveaway, bob.id, '10.0.0.9', VISITOR_FP)

    bob.refresh_from_db()
    assert bob.ref_count == 0


@pytest.mark.django_db
def test_same_visitor_counts_in_another_giveaway(giveaway, giveaway_data, alice):
    other = lifecycle.create_giveaway(giveaway_data, creator_ip='10.0.0.2')
    carol = lifecycle.join_giveaway(other.id, {'name': 'Carol'}, ip='10.0.0.7', fingerprint=ALICE_FP)

    assert credit_referral(giveaway, alice.id, '10.0.0.9', VISITOR_FP)
    assert credit_referral(other, carol.id, '10.0.0.9', VISITOR_FP)


@pytest.mark.django_db
def test_unknown_or_empty_referrer(giveaway, alice, giveaway_data):
    assert not credit_referral(giveaway, '', '10.0.0.9', VISITOR_FP)
    assert not credit_referral(giveaway, None, '10.0.0.9', VISITOR_FP)
    assert not credit_referral(giveaway, 'missing', '10.0.0.9', VISITOR_FP)

    # A participant of another giveaway is unknown here.
    other = lifecycle.create_giveaway(giveaway_data, creator_ip='10.0.0.2')
    assert not credit_referral(other, alice.id, '10.0.0.9', VISITOR_FP)

    assert not Referral.objects.exists()


@pytest.mark.django_db
def test_ended_giveaway_is_frozen(giveaway, alice, clock):
    assert credit_referral(giveaway, alice.id, '10.0.0.9', VISITOR_FP)

    clock.advance(60001)
    assert not credit_referral(giveaway, alice.id, '10.0.0.10', VISITOR_FP)

    alice.refresh_from_db()
    assert alice.ref_count == 1


@pytest.mark.django_db
def test_self_referral_is_credited(giveaway, alice):
    # Nothing distinguishes a participant visiting their own link.
    assert credit_referral(giveaway, alice.id, '10.0.0.5', ALICE_FP)
