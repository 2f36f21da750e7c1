"""
xmlrpc_api - XML-RPC value marshalling, messages and dispatch.
"""

from loguru import logger

from xmlrpc_api.api.dispatch import MethodRegistry, handle_request, handle_request_async
from xmlrpc_api.client.transport import XmlRpcClient, send_request
from xmlrpc_api.codec.values import Base64, build_value, parse_value
from xmlrpc_api.protocol import Fault, Message, Request, Response
from xmlrpc_api.utils.exceptions import RequestError, XmlRpcError, XmlRpcValueError

__version__ = "0.1.0"

# Library logging stays quiet until an application (or the CLI) enables it.
logger.disable("xmlrpc_api")

__all__ = [
    "Base64",
    "Fault",
    "Message",
    "MethodRegistry",
    "Request",
    "RequestError",
    "Response",
    "XmlRpcClient",
    "XmlRpcError",
    "XmlRpcValueError",
    "build_value",
    "handle_request",
    "handle_request_async",
    "parse_value",
    "send_request",
    "__version__",
]
