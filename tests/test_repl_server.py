import json

import pytest

from mclisp.interpreter import Interpreter
from mclisp.repl_server import ReplServer


@pytest.fixture
def server(interp):
    return ReplServer(host="127.0.0.1", port=0, interp=interp)


def request(server, **payload):
    return server.handle_request(json.dumps(payload).encode("utf-8"))


def test_eval_request(server):
    assert request(server, cmd="eval", code="(car (quote (a b)))") == {"ok": True, "result": "a "}


def test_definitions_persist_between_requests(server):
    assert request(server, cmd="eval", code="(defun TEST (x y) (atom x))") == {"ok": True, "result": "()"}
    assert request(server, cmd="eval", code="(TEST a b)") == {"ok": True, "result": "true "}


def test_str_request_line(server):
    resp = server.handle_request('{"cmd": "eval", "code": "(quote (a (b)))"}')
    assert resp == {"ok": True, "result": "(a (b ) )"}


def test_parse_error_is_reported(server):
    resp = request(server, cmd="eval", code="(car (quote (A B)")
    assert resp["ok"] is False
    assert resp["error"].startswith("UnbalancedParentheses")


def test_nesting_past_host_stack_is_reported():
    server = ReplServer(host="127.0.0.1", port=0, interp=Interpreter(max_depth=10 ** 6, strict=False))
    resp = request(server, cmd="eval", code="(" * 200_000 + ")" * 200_000)
    assert resp["ok"] is False
    assert resp["error"].startswith("RecursionDepthExceeded")
    assert request(server, cmd="eval", code="(atom a)") == {"ok": True, "result": "true "}


def test_deep_result_is_rendered():
    server = ReplServer(host="127.0.0.1", port=0, interp=Interpreter(max_depth=10 ** 6, strict=False))
    resp = request(server, cmd="eval", code="(" * 3000 + ")" * 3000)
    assert resp == {"ok": True, "result": "(" * 3000 + ")" + " )" * 2999}


def test_unknown_command(server):
    assert request(server, cmd="exec", code="a") == {"ok": False, "error": "Unknown cmd: exec"}


@pytest.mark.parametrize("line", [b"not json", b"[1, 2]", b"\xff\xfe"])
def test_invalid_request(server, line):
    resp = server.handle_request(line)
    assert resp["ok"] is False
    assert resp["error"].startswith("Invalid request")


def test_code_must_be_a_string(server):
    resp = request(server, cmd="eval", code=42)
    assert resp["ok"] is False


def test_missing_code_evaluates_to_nil(server):
    assert request(server, cmd="eval") == {"ok": True, "result": "()"}


def test_address_defaults_from_environment(monkeypatch, interp):
    monkeypatch.setenv("MCLISP_REPL_HOST", "localhost")
    monkeypatch.setenv("MCLISP_REPL_PORT", "9100")
    server = ReplServer(interp=interp)
    assert (server.host, server.port) == ("localhost", 9100)
