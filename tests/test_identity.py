import pytest

from paxi.identity import ID, id_sort_key, new_id


def test_new_id_format():
    assert new_id(2, 1) == "2.1"


@pytest.mark.parametrize("zone,node", [(0, 0), (1, 1), (2, 7), (12, 345)])
def test_new_id_round_trip(zone, node):
    ident = new_id(zone, node)
    assert ident.zone() == zone
    assert ident.node() == node


def test_new_id_drops_sign():
    assert new_id(-3, -4) == new_id(3, 4)


def test_id_without_dot():
    ident = ID("7")
    assert ident.zone() == 0
    assert ident.node() == 7


def test_id_with_garbage_parts():
    ident = ID("x.y")
    assert ident.zone() == 0
    assert ident.node() == 0


def test_signed_part_is_rejected():
    assert ID("+1.2").zone() == 0
    assert ID("1.-2").node() == 0


def test_id_is_a_string():
    assert ID("1.1") == "1.1"
    assert {ID("1.1"): True}["1.1"] is True


def test_sort_key_orders_by_zone_then_node():
    ids = [ID("2.1"), ID("1.10"), ID("1.2")]
    assert sorted(ids, key=id_sort_key) == [ID("1.2"), ID("1.10"), ID("2.1")]


def test_sort_key_accepts_plain_strings():
    assert id_sort_key("3.5") == (3, 5)