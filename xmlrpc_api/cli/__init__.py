"""Command-line interface for xmlrpc_api."""
