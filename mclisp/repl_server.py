from __future__ import annotations

"""
Simple TCP REPL server for mclisp.

Protocol: JSON per line over TCP.
- Request: {"cmd": "eval", "code": "(car (quote (a b)))"}
- Response: {"ok": true, "result": "a "} or {"ok": false, "error": <message>}

One Interpreter is kept for the lifetime of the server so that defun
definitions persist across requests and connections.
"""

import json
import logging
import os
import socket
import threading
from typing import Optional, Tuple

from mclisp import config
from mclisp.errors import McLispError
from mclisp.interpreter import Interpreter
from mclisp.types.sexpr import to_string

logger = logging.getLogger(__name__)


class ReplServer:
    def __init__(
        self,
        host: Optional[str] = None,
        port: Optional[int] = None,
        interp: Optional[Interpreter] = None,
    ):
        default_host, default_port = config.get_repl_address()
        self.host = host or default_host
        self.port = port if port is not None else default_port
        self.interp = interp or Interpreter()
        # Environments are not thread-safe; clients are served one request at a time
        self._lock = threading.Lock()

    def handle_request(self, line: bytes | str) -> dict:
        """Decode one request line and return the response object."""
        try:
            if isinstance(line, bytes):
                line = line.decode("utf-8")
            req = json.loads(line)
            if not isinstance(req, dict):
                raise ValueError("request must be a JSON object")
        except ValueError as ex:
            return {"ok": False, "error": f"Invalid request: {ex}"}

        if req.get("cmd") != "eval":
            return {"ok": False, "error": f"Unknown cmd: {req.get('cmd')}"}

        code = req.get("code", "")
        if not isinstance(code, str):
            return {"ok": False, "error": "Invalid request: code must be a string"}
        try:
            with self._lock:
                result = self.interp.eval(code)
        except McLispError as ex:
            return {"ok": False, "error": f"{type(ex).__name__}: {ex}"}
        return {"ok": True, "result": to_string(result)}

    def serve_forever(self):
        with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as s:
            s.setsockopt(socket.SOL_SOCKET, socket.SO_REUSEADDR, 1)
            s.bind((self.host, self.port))
            s.listen(5)
            logger.info("mclisp REPL listening on %s:%d", self.host, self.port)
            while True:
                conn, addr = s.accept()
                threading.Thread(target=self._handle_client, args=(conn, addr), daemon=True).start()

    def _handle_client(self, conn: socket.socket, addr: Tuple[str, int]):
        logger.info("client connected from %s:%d", *addr)
        with conn:
            buf = b""
            while True:
                data = conn.recv(4096)
                if not data:
                    break
                buf += data
                while b"\n" in buf:
                    line, buf = buf.split(b"\n", 1)
                    line = line.strip()
                    if not line:
                        continue
                    resp = self.handle_request(line)
                    conn.sendall((json.dumps(resp) + "\n").encode("utf-8"))
        logger.info("client %s:%d disconnected", *addr)


def _log_level() -> int:
    level = getattr(logging, os.environ.get("LOGLEVEL", "").upper(), None)
    if isinstance(level, int):
        return level
    return logging.WARNING


def main() -> None:
    logging.basicConfig(level=_log_level(), format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    ReplServer().serve_forever()


if __name__ == "__main__":
    main()
