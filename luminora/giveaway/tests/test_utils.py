from types import SimpleNamespace

from giveaway import utils


def participant(pid, ref_count, joined_at):
    return SimpleNamespace(id=pid, ref_count=ref_count, joined_at=joined_at)


def test_is_ended_only_after_end_time():
    assert not utils.is_ended(1000, now=999)
    assert not utils.is_ended(1000, now=1000)
    assert utils.is_ended(1000, now=1001)


def test_remaining_never_negative():
    assert utils.remaining_ms(1000, now=400) == 600
    assert utils.remaining_ms(1000, now=1000) == 0
    assert utils.remaining_ms(1000, now=5000) == 0


def test_winner_tie_broken_by_earliest_join():
    a = participant('a', 3, 100)
    b = participant('b', 5, 300)
    c = participant('c', 5, 200)
    assert utils.pick_winner([a, b, c]) is c
    assert utils.pick_winner([b, a, c]) is c


def test_winner_is_independent_of_input_order():
    people = [participant(str(i), i % 4, 1000 - i) for i in range(12)]
    expected = utils.pick_winner(people)
    assert utils.pick_winner(list(reversed(people))) is expected
    assert expected.ref_count == 3


def test_no_winner_without_participants():
    assert utils.pick_winner([]) is None


def test_rank_orders_by_referrals_then_join_time():
    a = participant('a', 1, 10)
    b = participant('b', 4, 30)
    c = participant('c', 4, 20)
    assert [p.id for p in utils.rank([a, b, c])] == ['c', 'b', 'a']


def test_name_key_ignores_case_and_surrounding_space():
    assert utils.name_key('Alice') == utils.name_key('  ALICE ')
    assert utils.name_key('Alice') != utils.name_key('Alicia')
