"""FastAPI adapter serving XML-RPC over HTTP POST."""

from __future__ import annotations

from typing import Any, Literal

from fastapi import FastAPI, Request
from fastapi.responses import PlainTextResponse, Response as HttpResponse
from lxml import etree
from loguru import logger

from xmlrpc_api.api.dispatch import MethodMap, handle_request_async
from xmlrpc_api.api.error_boundary import classify_http_status
from xmlrpc_api.codec.document import parse_document
from xmlrpc_api.config.schema import Config
from xmlrpc_api.protocol.request import Request as RpcRequest
from xmlrpc_api.utils.exceptions import XmlRpcValueError

XML_MEDIA_TYPE = "text/xml"
PayloadKind = Literal["methodCall", "xml", "invalid"]


def _read_payload(body: bytes | str) -> tuple[PayloadKind, etree._ElementTree | None]:
    try:
        document = parse_document(body)
    except XmlRpcValueError:
        return "invalid", None
    return ("methodCall" if document.getroot().tag == "methodCall" else "xml"), document


def classify_payload(body: bytes | str) -> PayloadKind:
    """Decide whether a body is an XML-RPC methodCall, some other XML document, or not XML."""
    return _read_payload(body)[0]


def create_app(
    method_map: MethodMap,
    *,
    target: Any = None,
    config: Config | None = None,
) -> FastAPI:
    """
    Build an ASGI app exposing ``method_map`` at ``config.server.path``.

    POST bodies whose root element is ``methodCall`` are dispatched and
    answered with ``200 text/xml``; any other payload gets a 400.
    """
    cfg = config or Config()
    app = FastAPI(
        title="XML-RPC API",
        description="XML-RPC endpoint",
        version="1.0.0",
    )

    @app.post(cfg.server.path)
    async def rpc_endpoint(request: Request) -> HttpResponse:
        body = await request.body()
        kind, document = _read_payload(body)
        if kind != "methodCall":
            logger.info("Rejected non-XML-RPC payload ({}, {} bytes)", kind, len(body))
            return PlainTextResponse("Expected an XML-RPC methodCall document", status_code=classify_http_status(kind))
        response = await handle_request_async(
            RpcRequest(doc=document),
            method_map,
            target=target,
            include_traceback=cfg.dispatch.include_traceback,
            redact=cfg.dispatch.redact_fault_strings,
            indent=cfg.codec.indent,
        )
        return HttpResponse(content=response.to_bytes(), media_type=XML_MEDIA_TYPE)

    @app.get("/health")
    async def health() -> dict[str, Any]:
        """Health check endpoint."""
        return {"ok": True, "service": "xmlrpc-api", "methods": sorted(method_map)}

    return app


def run_server(method_map: MethodMap, *, target: Any = None, config: Config | None = None) -> None:
    """Serve ``method_map`` with uvicorn on the configured host and port."""
    import uvicorn

    cfg = config or Config()
    app = create_app(method_map, target=target, config=cfg)
    logger.info("Serving XML-RPC on http://{}:{}{}", cfg.server.host, cfg.server.port, cfg.server.path)
    uvicorn.run(app, host=cfg.server.host, port=cfg.server.port, log_level=cfg.logging.level.lower())


__all__ = ["XML_MEDIA_TYPE", "classify_payload", "create_app", "run_server"]
