from xmlrpc_api.protocol.fault import Fault
from xmlrpc_api.utils.exceptions import (
    RequestError,
    XmlRpcError,
    XmlRpcValueError,
    fault_code_for_exception,
    format_exception_text,
    sanitize_error_message,
)


def test_error_hierarchy():
    assert issubclass(XmlRpcValueError, XmlRpcError)
    assert issubclass(XmlRpcValueError, ValueError)
    assert issubclass(RequestError, XmlRpcError)
    assert issubclass(Fault, XmlRpcError)


def test_error_to_dict():
    err = RequestError("HTTP Response: 500 Internal Server Error", status_code=500)
    assert err.to_dict() == {
        "error": "REQUEST_ERROR",
        "message": "HTTP Response: 500 Internal Server Error",
        "details": {"status_code": 500},
    }
    assert XmlRpcValueError("bad", tag="int").to_dict()["details"] == {"tag": "int"}


def test_fault_code_for_exception():
    assert fault_code_for_exception(Fault(4, "x")) == 4
    assert fault_code_for_exception(XmlRpcValueError("x")) == -1
    assert fault_code_for_exception(ValueError("x")) == 0
    assert fault_code_for_exception(RuntimeError("x")) == 0


def test_sanitize_error_message():
    assert sanitize_error_message("api_key=sk-123 failed") == "[REDACTED] failed"
    assert "Bearer" not in sanitize_error_message("header Bearer abc.def")
    assert sanitize_error_message("nothing secret") == "nothing secret"


def test_format_exception_text():
    assert format_exception_text(RuntimeError("boom")) == "boom"
    assert format_exception_text(RuntimeError("password: hunter2"), redact=True) == "[REDACTED]"
