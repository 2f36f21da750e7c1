import httpx
import pytest

from xmlrpc_api.api.dispatch import handle_request
from xmlrpc_api.client.transport import XmlRpcClient, send_request
from xmlrpc_api.config.schema import Config
from xmlrpc_api.protocol import Fault, Request
from xmlrpc_api.utils.exceptions import RequestError

URL = "http://betty.userland.com/RPC2"


def _rpc_transport(method_map, seen=None, **kwargs):
    """MockTransport that dispatches the posted body like a real endpoint."""

    def _handler(request: httpx.Request) -> httpx.Response:
        if seen is not None:
            seen.append(request)
        response = handle_request(request.content, method_map, **kwargs)
        return httpx.Response(200, content=response.to_bytes(), headers={"Content-Type": "text/xml"})

    return httpx.MockTransport(_handler)


def test_send_request_returns_response(method_map, controller):
    seen = []
    transport = _rpc_transport(method_map, seen, target=controller)
    response = send_request(URL, "examples.getStateName", [41], transport=transport)
    assert response.value == "South Dakota"
    assert seen[0].method == "POST"
    assert seen[0].headers["content-type"] == "text/xml"
    assert Request(seen[0].content).params == [41]


def test_send_request_without_params(method_map):
    seen = []
    send_request(URL, "add", transport=_rpc_transport(method_map, seen))
    assert seen[0].content == b"<methodCall><methodName>add</methodName><params/></methodCall>"


def test_send_request_returns_fault_response(method_map):
    response = send_request(URL, "crash", ["OHNOES!"], transport=_rpc_transport(method_map))
    assert response.is_valid is False
    assert response.error() == "Error: OHNOES! (0)"


def test_send_request_http_error_raises():
    transport = httpx.MockTransport(lambda request: httpx.Response(500, text="boom"))
    with pytest.raises(RequestError) as exc_info:
        send_request(URL, "add", [1, 2], transport=transport)
    assert str(exc_info.value) == "HTTP Response: 500 Internal Server Error"
    assert exc_info.value.status_code == 500


def test_send_request_network_error_raises():
    def _refuse(request):
        raise httpx.ConnectError("connection refused", request=request)

    with pytest.raises(RequestError) as exc_info:
        send_request(URL, "add", [1, 2], transport=httpx.MockTransport(_refuse))
    assert "network error" in str(exc_info.value)


def test_send_request_timeout_raises():
    def _slow(request):
        raise httpx.ReadTimeout("timed out", request=request)

    with pytest.raises(RequestError) as exc_info:
        send_request(URL, "add", [1, 2], transport=httpx.MockTransport(_slow))
    assert "timeout" in str(exc_info.value)


def test_client_call_returns_value_or_raises_fault(method_map):
    client = XmlRpcClient(URL, transport=_rpc_transport(method_map))
    assert client.call("add", 1, 2) == 3
    with pytest.raises(Fault) as exc_info:
        client.call("subtract", 1, 2)
    assert exc_info.value.fault_code == -2


def test_client_from_config(method_map):
    cfg = Config()
    cfg.client.url = URL
    cfg.client.timeout = 5.0
    client = XmlRpcClient.from_config(cfg, transport=_rpc_transport(method_map))
    assert client.url == URL
    assert client.timeout == 5.0
    assert client.send_request("add", [2, 3]).value == 5
