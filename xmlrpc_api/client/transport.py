"""HTTP client for invoking remote XML-RPC methods."""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any

import httpx
from loguru import logger

from xmlrpc_api.codec.values import Value
from xmlrpc_api.config.schema import Config
from xmlrpc_api.protocol.request import Request
from xmlrpc_api.protocol.response import Response
from xmlrpc_api.utils.exceptions import RequestError

DEFAULT_TIMEOUT = 20.0
XML_HEADERS = {"Content-Type": "text/xml"}


def send_request(
    url: str,
    method_name: str,
    params: Sequence[Any] = (),
    *,
    timeout: float | None = DEFAULT_TIMEOUT,
    indent: int = 0,
    headers: dict[str, str] | None = None,
    transport: httpx.BaseTransport | None = None,
) -> Response:
    """
    Invoke ``method_name`` on the XML-RPC service at ``url``.

    Builds the request, POSTs it as ``text/xml`` and returns the decoded
    Response. If no parameters are given the method is assumed to take none.
    XML-RPC faults come back inside the Response; a non-success HTTP status
    or a network failure raises RequestError.
    """
    request = Request(method_name=method_name, params=params, indent=indent)
    req_headers = dict(XML_HEADERS)
    if headers:
        req_headers.update(headers)
    logger.debug("XML-RPC call {} -> {}", method_name, url)
    try:
        with httpx.Client(timeout=timeout, transport=transport) as client:
            resp = client.post(url, content=request.to_bytes(), headers=req_headers)
    except httpx.TimeoutException as exc:
        raise RequestError(f"HTTP timeout: POST {url}") from exc
    except httpx.RequestError as exc:
        raise RequestError(f"HTTP network error: POST {url}: {exc}") from exc

    if not resp.is_success:
        raise RequestError(f"HTTP Response: {resp.status_code} {resp.reason_phrase}", status_code=resp.status_code)
    return Response(resp.content)


class XmlRpcClient:
    """Client bound to one XML-RPC endpoint."""

    def __init__(
        self,
        url: str,
        *,
        timeout: float | None = DEFAULT_TIMEOUT,
        indent: int = 0,
        transport: httpx.BaseTransport | None = None,
    ):
        self.url = url
        self.timeout = timeout
        self.indent = indent
        self._transport = transport

    @classmethod
    def from_config(cls, config: Config, *, transport: httpx.BaseTransport | None = None) -> XmlRpcClient:
        return cls(
            config.client.url,
            timeout=config.client.timeout,
            indent=config.codec.indent,
            transport=transport,
        )

    def send_request(self, method_name: str, params: Sequence[Any] = ()) -> Response:
        return send_request(
            self.url,
            method_name,
            params,
            timeout=self.timeout,
            indent=self.indent,
            transport=self._transport,
        )

    def call(self, method_name: str, *params: Any) -> Value:
        """Invoke a method and return its value; raises the Fault when the service returns one."""
        return self.send_request(method_name, params).raise_for_fault().value
