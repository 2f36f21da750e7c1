"""Server-side XML-RPC dispatch."""

from xmlrpc_api.api.dispatch import MethodRegistry, handle_request, handle_request_async

__all__ = ["MethodRegistry", "handle_request", "handle_request_async"]
