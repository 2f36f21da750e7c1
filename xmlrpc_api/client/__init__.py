"""Client-side XML-RPC invocation."""

from xmlrpc_api.client.transport import XmlRpcClient, send_request

__all__ = ["XmlRpcClient", "send_request"]
