"""
Entry point for running xmlrpc_api as a module: python -m xmlrpc_api
"""

from xmlrpc_api.cli.commands import app

if __name__ == "__main__":
    app()
