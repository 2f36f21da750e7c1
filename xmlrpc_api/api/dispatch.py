"""Dispatch inbound XML-RPC requests to handler functions."""

from __future__ import annotations

import inspect
from collections.abc import Iterator, Mapping
from typing import Any, Callable

from lxml import etree
from loguru import logger

from xmlrpc_api.api.error_boundary import fault_for_exception, unknown_method_fault, xml_safe_text
from xmlrpc_api.protocol.fault import Fault
from xmlrpc_api.protocol.request import Request
from xmlrpc_api.protocol.response import Response
from xmlrpc_api.utils.exceptions import XmlRpcValueError

Handler = Callable[..., Any]
# A handler's return value, or the exception it raised.
Outcome = tuple[Any, Exception | None]
MethodMap = Mapping[str, "Handler | str"]
RequestInput = Request | str | bytes | etree._ElementTree | etree._Element


class MethodRegistry(Mapping[str, Handler]):
    """
    Whitelist of callable XML-RPC methods.

    Usage:
        rpc = MethodRegistry()

        @rpc.register("examples.getStateName")
        def get_state_name(index):
            ...
    """

    def __init__(self, methods: Mapping[str, Handler] | None = None):
        self._methods: dict[str, Handler] = dict(methods or {})

    def add(self, name: str, func: Handler) -> Handler:
        if not callable(func):
            raise TypeError(f"XML-RPC method {name!r} is not callable")
        self._methods[name] = func
        return func

    def register(self, name: str | Handler | None = None) -> Any:
        """Register a function under ``name`` (defaults to the function's name)."""
        if callable(name):
            return self.add(name.__name__, name)

        def decorator(func: Handler) -> Handler:
            return self.add(name or func.__name__, func)

        return decorator

    def __getitem__(self, name: str) -> Handler:
        return self._methods[name]

    def __iter__(self) -> Iterator[str]:
        return iter(self._methods)

    def __len__(self) -> int:
        return len(self._methods)


def _decode(request: RequestInput) -> Request:
    if isinstance(request, Request):
        return request
    if isinstance(request, (etree._ElementTree, etree._Element)):
        return Request(doc=request)
    return Request(request)


def _resolve_handler(method_map: MethodMap, method: str | None, target: Any) -> Handler | None:
    if method is None:
        return None
    entry = method_map.get(method)
    if entry is None:
        return None
    if isinstance(entry, str):
        # Names map onto methods of ``target``, e.g. "examples.getStateName" -> "get_state_name".
        handler = getattr(target, entry, None) if target is not None else None
        return handler if callable(handler) else None
    return entry


def _fault_response(fault: Fault, indent: int) -> Response:
    try:
        return Response(fault=fault, indent=indent)
    except XmlRpcValueError:
        return Response(fault=Fault(fault.fault_code, xml_safe_text(fault.fault_string)), indent=indent)


def _classify(method: str | None, exc: Exception, include_traceback: bool, redact: bool) -> Fault:
    return fault_for_exception(
        method=method,
        exc=exc,
        log_info=logger.info,
        log_warning=logger.warning,
        log_exception=lambda fmt, *args: logger.opt(exception=exc).error(fmt, *args),
        include_traceback=include_traceback,
        redact=redact,
    )


def _prepare(
    request: RequestInput,
    method_map: MethodMap,
    target: Any,
    include_traceback: bool,
    redact: bool,
) -> tuple[str | None, Handler | None, list[Any], Fault | None]:
    """Decode the request and look up its handler; returns a fault when that fails."""
    method: str | None = None
    try:
        rpc = _decode(request)
        method = rpc.method_name
        handler = _resolve_handler(method_map, method, target)
        if handler is None:
            return method, None, [], unknown_method_fault(method=method, log_info=logger.info)
        return method, handler, rpc.params, None
    except Exception as exc:
        return method, None, [], _classify(method, exc, include_traceback, redact)


def _respond(
    method: str | None,
    outcome: Outcome,
    *,
    include_traceback: bool,
    redact: bool,
    indent: int,
) -> Response:
    value, error = outcome
    if error is None:
        try:
            return Response(value=value, indent=indent)
        except Exception as exc:
            error = exc
    return _fault_response(_classify(method, error, include_traceback, redact), indent)


def handle_request(
    request: RequestInput,
    method_map: MethodMap,
    *,
    target: Any = None,
    include_traceback: bool = False,
    redact: bool = False,
    indent: int = 0,
) -> Response:
    """
    Dispatch an XML-RPC request and return the Response.

    The request's method name is looked up in ``method_map``; the mapping
    doubles as a whitelist. Entries are callables, or attribute names
    resolved on ``target`` for method names that are not valid Python
    identifiers. The handler is called with the request parameters
    positionally.

    Never raises: unknown methods become fault -2, value errors fault -1,
    Faults raised by the handler are returned unchanged, and any other
    exception becomes fault 0 with the error text (plus the traceback when
    ``include_traceback`` is set).
    """
    method, handler, params, fault = _prepare(request, method_map, target, include_traceback, redact)
    if fault is not None:
        return _fault_response(fault, indent)
    logger.debug("XML-RPC dispatch method={} params={}", method, len(params))
    try:
        outcome: Outcome = (handler(*params), None)
    except Exception as exc:
        outcome = (None, exc)
    return _respond(method, outcome, include_traceback=include_traceback, redact=redact, indent=indent)


async def handle_request_async(
    request: RequestInput,
    method_map: MethodMap,
    *,
    target: Any = None,
    include_traceback: bool = False,
    redact: bool = False,
    indent: int = 0,
) -> Response:
    """Like handle_request, awaiting handlers that return awaitables."""
    method, handler, params, fault = _prepare(request, method_map, target, include_traceback, redact)
    if fault is not None:
        return _fault_response(fault, indent)
    logger.debug("XML-RPC dispatch method={} params={}", method, len(params))
    try:
        result = handler(*params)
        if inspect.isawaitable(result):
            result = await result
        outcome: Outcome = (result, None)
    except Exception as exc:
        outcome = (None, exc)
    return _respond(method, outcome, include_traceback=include_traceback, redact=redact, indent=indent)
