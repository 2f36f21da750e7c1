"""Tests for the xmlrpc-api command line."""

import os

import httpx
import pytest
from loguru import logger
from typer.testing import CliRunner

from xmlrpc_api import __version__
from xmlrpc_api.api.dispatch import handle_request
from xmlrpc_api.cli import commands
from xmlrpc_api.cli.commands import app
from xmlrpc_api.cli.shared.logging_utils import ensure_rotating_log_file
from xmlrpc_api.cli.shared.values import load_method_map, load_object, parse_cli_value
from xmlrpc_api.client.transport import XmlRpcClient
from xmlrpc_api.protocol import Fault, Response

runner = CliRunner()


@pytest.fixture(autouse=True)
def _reset_logging():
    yield
    logger.remove()
    logger.disable("xmlrpc_api")


@pytest.fixture
def config_args(tmp_path):
    return ["--config", str(tmp_path / "config.json")]


def test_version():
    result = runner.invoke(app, ["--version"])
    assert result.exit_code == 0
    assert __version__ in result.output


def test_encode(config_args):
    result = runner.invoke(app, [*config_args, "encode", "add", "1", "2"])
    assert result.exit_code == 0
    assert result.output.strip() == (
        "<methodCall><methodName>add</methodName><params>"
        "<param><value><int>1</int></value></param>"
        "<param><value><int>2</int></value></param>"
        "</params></methodCall>"
    )


def test_encode_indented(config_args):
    result = runner.invoke(app, [*config_args, "encode", "examples.getStateName", "41", "--indent", "2"])
    assert result.exit_code == 0
    assert result.output.startswith("<methodCall>\n  <methodName>examples.getStateName</methodName>")


def test_decode_request(tmp_path, config_args):
    path = tmp_path / "call.xml"
    path.write_text(
        "<methodCall><methodName>examples.getStateName</methodName>"
        "<params><param><value><int>41</int></value></param></params></methodCall>",
        encoding="utf-8",
    )
    result = runner.invoke(app, [*config_args, "decode", str(path)])
    assert result.exit_code == 0
    assert "examples.getStateName" in result.output
    assert "41" in result.output


def test_decode_response_and_fault(tmp_path, config_args):
    ok = tmp_path / "ok.xml"
    ok.write_text(Response(value="South Dakota").xml, encoding="utf-8")
    result = runner.invoke(app, [*config_args, "decode", str(ok)])
    assert result.exit_code == 0
    assert "South Dakota" in result.output

    bad = tmp_path / "fault.xml"
    bad.write_text(Response(fault=Fault(4, "Too many parameters.")).xml, encoding="utf-8")
    result = runner.invoke(app, [*config_args, "decode", str(bad)])
    assert result.exit_code == 0
    assert "Too many parameters. (4)" in result.output


def test_decode_rejects_other_documents(tmp_path, config_args):
    other = tmp_path / "other.xml"
    other.write_text("<html/>", encoding="utf-8")
    assert runner.invoke(app, [*config_args, "decode", str(other)]).exit_code == 1

    broken = tmp_path / "broken.xml"
    broken.write_text("<methodCall>", encoding="utf-8")
    assert runner.invoke(app, [*config_args, "decode", str(broken)]).exit_code == 2


def test_call_prints_result_and_fault(monkeypatch, config_args, method_map):
    transport = httpx.MockTransport(
        lambda request: httpx.Response(200, content=handle_request(request.content, method_map).to_bytes())
    )

    class _MockedClient(XmlRpcClient):
        def __init__(self, url, **kwargs):
            kwargs["transport"] = transport
            super().__init__(url, **kwargs)

    monkeypatch.setattr(commands, "XmlRpcClient", _MockedClient)

    result = runner.invoke(app, [*config_args, "call", "add", "1", "2"])
    assert result.exit_code == 0
    assert "3" in result.output

    result = runner.invoke(app, [*config_args, "call", "crash", "OHNOES!"])
    assert result.exit_code == 1
    assert "Fault 0" in result.output


def test_call_http_error(monkeypatch, config_args):
    transport = httpx.MockTransport(lambda request: httpx.Response(503))

    class _MockedClient(XmlRpcClient):
        def __init__(self, url, **kwargs):
            kwargs["transport"] = transport
            super().__init__(url, **kwargs)

    monkeypatch.setattr(commands, "XmlRpcClient", _MockedClient)
    result = runner.invoke(app, [*config_args, "call", "add", "1", "2"])
    assert result.exit_code == 2
    assert "HTTP Response: 503" in result.output


def test_parse_cli_value():
    assert parse_cli_value("41") == 41
    assert parse_cli_value("1.5") == 1.5
    assert parse_cli_value('{"a": [1, "b"]}') == {"a": [1, "b"]}
    assert parse_cli_value("True") is True
    assert parse_cli_value("South Dakota") == "South Dakota"
    assert parse_cli_value("") == ""


def test_load_object_and_method_map():
    assert load_object("collections:OrderedDict").__name__ == "OrderedDict"
    assert load_method_map("os:environ") is os.environ
    with pytest.raises(ValueError):
        load_object("no-colon")
    with pytest.raises(ValueError):
        load_object("collections:missing")
    with pytest.raises(ValueError):
        load_method_map("collections:OrderedDict")


def test_ensure_rotating_log_file(tmp_path):
    path = ensure_rotating_log_file(tmp_path / "logs" / "xmlrpc.log")
    assert path.parent.is_dir()
    assert ensure_rotating_log_file(path) == path
