import pytest

from paxi.ballot import Ballot, ballot_from_string, leader_id, new_ballot, next_ballot
from paxi.identity import ID, new_id


def test_ballot_next_twice():
    n = 0
    ident = new_id(2, 1)
    b = new_ballot(n, ident)
    b = b.next(ident)
    b = b.next(ident)
    assert b.n() == n + 2
    assert b.id() == ident


def test_ballot_string():
    assert str(new_ballot(3, new_id(1, 2))) == "3.1.2"


def test_ballot_from_string():
    assert ballot_from_string("3.1.2") == new_ballot(3, ID("1.2"))


@pytest.mark.parametrize("n,zone,node", [(0, 1, 1), (5, 2, 3), (1000, 7, 9)])
def test_ballot_string_round_trip(n, zone, node):
    b = new_ballot(n, new_id(zone, node))
    assert ballot_from_string(str(b)) == b


def test_ballot_from_string_without_id():
    b = ballot_from_string("4")
    assert b.n() == 4
    assert b.id() == new_id(0, 0)


def test_ballot_from_string_rejects_bad_counter():
    with pytest.raises(ValueError):
        ballot_from_string("x.1.1")


def test_ballots_order_by_counter_first():
    low = new_ballot(1, new_id(9, 9))
    high = new_ballot(2, new_id(1, 1))
    assert low < high


def test_ballot_is_an_int():
    b = new_ballot(1, new_id(1, 1))
    assert int(b) == (1 << 32) | (1 << 16) | 1
    assert isinstance(b, Ballot)


def test_next_ballot_integer_form():
    ident = new_id(2, 3)
    assert next_ballot(int(new_ballot(5, ident)), ident) == int(new_ballot(6, ident))


def test_next_ballot_changes_owner():
    first = new_ballot(5, new_id(1, 1))
    moved = next_ballot(int(first), new_id(4, 2))
    assert leader_id(moved) == new_id(4, 2)
    assert Ballot(moved).n() == 6


def test_leader_id():
    assert leader_id(int(new_ballot(4, new_id(3, 7)))) == new_id(3, 7)