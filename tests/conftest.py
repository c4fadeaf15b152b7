import socket
import threading

import pytest

from jupyterhub_exporter.mock.fake_hub_server import make_fake_hub


@pytest.fixture
def fake_hub():
    """Start fake hub APIs on free ports; returns a factory giving the API base URL."""
    servers = []

    def _start(payload=None, token=None) -> str:
        server = make_fake_hub("127.0.0.1", 0, payload=payload, token=token)
        thread = threading.Thread(target=server.serve_forever, daemon=True)
        thread.start()
        servers.append(server)
        host, port = server.server_address[:2]
        return f"http://{host}:{port}/hub/api"

    yield _start

    for server in servers:
        server.shutdown()
        server.server_close()


@pytest.fixture
def unused_url() -> str:
    """A hub URL nothing is listening on."""
    sock = socket.socket()
    sock.bind(("127.0.0.1", 0))
    port = sock.getsockname()[1]
    sock.close()
    return f"http://127.0.0.1:{port}/hub/api"
