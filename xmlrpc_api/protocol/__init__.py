"""XML-RPC message protocol: requests, responses and faults."""

from xmlrpc_api.protocol.fault import Fault
from xmlrpc_api.protocol.message import Message
from xmlrpc_api.protocol.request import Request
from xmlrpc_api.protocol.response import Response

__all__ = ["Fault", "Message", "Request", "Response"]
