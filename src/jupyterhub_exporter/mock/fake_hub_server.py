"""
Fake JupyterHub API for trying the exporter without a hub.

    python -m jupyterhub_exporter.mock.fake_hub_server
    jupyterhub-exporter --host http://localhost:8888/hub/api --token secret
"""

from __future__ import annotations

import json
from datetime import datetime, timedelta, timezone
from http.server import BaseHTTPRequestHandler, HTTPServer
from typing import Optional

USERS_PATH = "/hub/api/users"


def _stamp(moment: datetime) -> str:
    return moment.strftime("%Y-%m-%dT%H:%M:%S.%fZ")


def sample_users() -> list:
    """A small hub: two running servers, one stopped."""
    now = datetime.now(timezone.utc)
    return [
        {"kind": "user", "name": "alice", "admin": True,
         "server": "/user/alice/", "last_activity": _stamp(now - timedelta(minutes=3))},
        {"kind": "user", "name": "bob", "admin": False,
         "server": "/user/bob/", "last_activity": _stamp(now - timedelta(hours=5))},
        {"kind": "user", "name": "carol", "admin": False,
         "server": None, "last_activity": _stamp(now - timedelta(days=2))},
    ]


class _HubHandler(BaseHTTPRequestHandler):
    # Raw body served at /hub/api/users; None means build sample_users()
    payload: Optional[bytes] = None
    # When set, requests without "Authorization: token <token>" get 403
    token: Optional[str] = None

    def do_GET(self):
        if self.path.split("?", 1)[0] != USERS_PATH:
            self._reply(404, b'{"status": 404, "message": "Not Found"}')
            return

        if self.token and self.headers.get("Authorization") != f"token {self.token}":
            self._reply(403, b'{"status": 403, "message": "Forbidden"}')
            return

        body = self.payload if self.payload is not None else json.dumps(sample_users()).encode()
        self._reply(200, body)

    def _reply(self, status: int, body: bytes):
        self.send_response(status)
        self.send_header("Content-Type", "application/json")
        self.send_header("Content-Length", str(len(body)))
        self.end_headers()
        self.wfile.write(body)

    def log_message(self, format, *args):
        pass  # Suppress request logging noise


def make_fake_hub(
    host: str = "127.0.0.1",
    port: int = 8888,
    payload: Optional[bytes] = None,
    token: Optional[str] = None,
) -> HTTPServer:
    handler = type("FakeHubHandler", (_HubHandler,), {"payload": payload, "token": token})
    return HTTPServer((host, port), handler)


def run_fake_server(host: str = "127.0.0.1", port: int = 8888, token: Optional[str] = "secret"):
    server = make_fake_hub(host, port, token=token)
    print(f"Fake JupyterHub API running at http://{host}:{port}{USERS_PATH}")
    print("Press Ctrl+C to stop.\n")
    try:
        server.serve_forever()
    except KeyboardInterrupt:
        pass
    server.server_close()
    print("\nServer stopped.")


if __name__ == "__main__":
    run_fake_server()
