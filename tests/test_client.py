import base64
import json

import pytest
import responses

from paxi.client import ChainClient, HTTPClient, RequestFailed
from paxi.config import Config
from paxi.identity import ID

URLS = {
    ID("1.1"): "http://127.0.0.1:8081",
    ID("1.2"): "http://127.0.0.1:8082",
    ID("2.1"): "http://127.0.0.1:8083",
}


def make_config():
    return Config(
        addrs={ident: f"tcp://127.0.0.1:{1734 + i}" for i, ident in enumerate(URLS)},
        http_addrs=dict(URLS),
    )


@pytest.fixture
def mock():
    with responses.RequestsMock(assert_all_requests_are_fired=False) as rsps:
        yield rsps


def test_counts_nodes_and_local_nodes():
    client = HTTPClient("1.1", make_config())
    assert client.n == 3
    assert client.local_n == 2


def test_get_url_for_node():
    client = HTTPClient("1.1", make_config())
    assert client.get_url("1.2", 7) == URLS[ID("1.2")] + "/7"


def test_get_url_without_node_picks_a_known_node():
    client = HTTPClient("", make_config())
    assert client.get_url("", 7) in {url + "/7" for url in URLS.values()}


def test_get_sends_headers_and_returns_body(mock):
    mock.add(responses.GET, URLS[ID("1.1")] + "/5", body=b"hello", headers={"Id": "1.1"})
    client = HTTPClient("1.1", make_config())
    assert client.get(5) == b"hello"
    request = mock.calls[0].request
    assert request.headers["Id"] == "1.1"
    assert request.headers["Cid"] == str(client.cid)


def test_rest_get_returns_headers(mock):
    mock.add(responses.GET, URLS[ID("1.2")] + "/5", body=b"x", headers={"Id": "1.2"})
    client = HTTPClient("1.1", make_config())
    value, meta = client.rest_get("1.2", 5)
    assert value == b"x"
    assert meta["Id"] == "1.2"


def test_put_sends_body(mock):
    mock.add(responses.PUT, URLS[ID("1.1")] + "/3", body=b"")
    client = HTTPClient("1.1", make_config())
    client.put(3, b"v1")
    assert mock.calls[0].request.method == "PUT"
    assert mock.calls[0].request.body == b"v1"


def test_failure_raises(mock):
    mock.add(responses.GET, URLS[ID("1.1")] + "/5", status=500)
    client = HTTPClient("1.1", make_config())
    with pytest.raises(RequestFailed) as excinfo:
        client.get(5)
    assert excinfo.value.status == 500


def test_json_put_posts_command(mock):
    mock.add(responses.POST, URLS[ID("1.1")], body=b"old")
    client = HTTPClient("1.1", make_config())
    assert client.json_put(3, b"new") == b"old"
    payload = json.loads(mock.calls[0].request.body)
    assert payload["Key"] == 3
    assert base64.b64decode(payload["Value"]) == b"new"
    assert payload["ClientID"] == "1.1"


def test_json_get_sends_null_value(mock):
    mock.add(responses.POST, URLS[ID("1.1")], body=b"v")
    client = HTTPClient("1.1", make_config())
    assert client.json_get(3) == b"v"
    assert json.loads(mock.calls[0].request.body)["Value"] is None


def test_quorum_get_reads_majority(mock):
    for url in URLS.values():
        mock.add(responses.GET, url + "/4", body=b"same")
    client = HTTPClient("1.1", make_config())
    values, metas = client.quorum_get(4)
    assert values == [b"same"] * (client.n // 2 + 1)
    assert len(metas) == len(values)
    assert len(mock.calls) == client.n // 2 + 1


def test_multi_get_leaves_out_failures(mock):
    mock.add(responses.GET, URLS[ID("1.1")] + "/4", body=b"ok")
    mock.add(responses.GET, URLS[ID("1.2")] + "/4", status=500)
    client = HTTPClient("1.1", make_config())
    values, _ = client.multi_get(2, 4)
    assert values == [b"ok"]


def test_quorum_put_writes(mock):
    for url in URLS.values():
        mock.add(responses.PUT, url + "/4", body=b"")
    client = HTTPClient("1.1", make_config())
    client.quorum_put(4, b"z")
    assert len(mock.calls) == client.n // 2
    assert all(call.request.body == b"z" for call in mock.calls)


def test_local_quorum_get_stays_in_zone(mock):
    for url in URLS.values():
        mock.add(responses.GET, url + "/4", body=b"v")
    client = HTTPClient("1.1", make_config())
    values, _ = client.local_quorum_get(4)
    assert len(values) == client.local_n // 2
    assert all(call.request.url.startswith("http://127.0.0.1:808") for call in mock.calls)
    assert URLS[ID("2.1")] not in {call.request.url.rsplit("/", 1)[0] for call in mock.calls}


def encoded(*values):
    return json.dumps([base64.b64encode(v).decode("ascii") for v in values])


def test_consensus_agrees(mock):
    for url in URLS.values():
        mock.add(responses.GET, url + "/history", body=encoded(b"a", b"b"))
    client = HTTPClient("1.1", make_config())
    assert client.consensus(9) is True
    assert mock.calls[0].request.url.endswith("/history?key=9")


def test_consensus_accepts_shorter_prefix(mock):
    mock.add(responses.GET, URLS[ID("1.1")] + "/history", body=encoded(b"a", b"b"))
    mock.add(responses.GET, URLS[ID("1.2")] + "/history", body=encoded(b"a"))
    mock.add(responses.GET, URLS[ID("2.1")] + "/history", body="null")
    assert HTTPClient("1.1", make_config()).consensus(9) is True


def test_consensus_disagrees(mock):
    mock.add(responses.GET, URLS[ID("1.1")] + "/history", body=encoded(b"a", b"b"))
    mock.add(responses.GET, URLS[ID("1.2")] + "/history", body=encoded(b"a", b"c"))
    mock.add(responses.GET, URLS[ID("2.1")] + "/history", body=encoded(b"a"))
    assert HTTPClient("1.1", make_config()).consensus(9) is False


def test_crash_url(mock):
    mock.add(responses.GET, URLS[ID("1.2")] + "/crash")
    HTTPClient("1.1", make_config()).crash("1.2", 3)
    assert mock.calls[0].request.url == URLS[ID("1.2")] + "/crash?t=3"


def test_drop_url(mock):
    mock.add(responses.GET, URLS[ID("1.1")] + "/drop")
    HTTPClient("1.1", make_config()).drop("1.1", "2.1", 4)
    assert mock.calls[0].request.url == URLS[ID("1.1")] + "/drop?id=2.1&t=4"


def test_partition_drops_from_every_other_node(mock):
    for url in URLS.values():
        mock.add(responses.GET, url + "/drop")
    HTTPClient("1.1", make_config()).partition(5, "2.1")
    urls = sorted(call.request.url for call in mock.calls)
    assert urls == sorted(
        URLS[ident] + "/drop?id=2.1&t=5" for ident in (ID("1.1"), ID("1.2"))
    )


def test_chain_client_head_and_tail(mock):
    mock.add(responses.GET, URLS[ID("2.1")] + "/1", body=b"tail")
    mock.add(responses.PUT, URLS[ID("1.1")] + "/1", body=b"")
    client = ChainClient(make_config())
    assert client.head == ID("1.1")
    assert client.tail == ID("2.1")
    assert client.get(1) == b"tail"
    client.put(1, b"w")
    assert mock.calls[1].request.url == URLS[ID("1.1")] + "/1"
    assert mock.calls[1].request.body == b"w"


def test_chain_client_needs_nodes():
    with pytest.raises(ValueError):
        ChainClient(Config())