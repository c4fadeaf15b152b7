"""
HTTP endpoint for Prometheus.

    GET /metrics    exposition text, rebuilt from the hub on every request
    GET /<other>    small HTML page pointing at /metrics

Each request runs on its own thread. The collector keeps no state, so
concurrent scrapes don't need any locking.
"""

from __future__ import annotations

import logging
from http.server import BaseHTTPRequestHandler, ThreadingHTTPServer

from prometheus_client import CONTENT_TYPE_LATEST, CollectorRegistry, generate_latest

from jupyterhub_exporter.collector.active_users import ActiveUserCollector
from jupyterhub_exporter.config import METRICS_PATH, ExporterConfig

log = logging.getLogger(__name__)

LANDING_PAGE = f"""<html>
<head><title>Jupyterhub Exporter</title></head>
<body>
<h1>Jupyterhub Exporter</h1>
<p><a href="{METRICS_PATH}">Metrics</a></p>
</body>
</html>
""".encode()


class _ExporterHandler(BaseHTTPRequestHandler):
    registry: CollectorRegistry

    def do_GET(self):
        if self.path.split("?", 1)[0] == METRICS_PATH:
            self._reply(generate_latest(self.registry), CONTENT_TYPE_LATEST)
        else:
            self._reply(LANDING_PAGE, "text/html; charset=utf-8")

    def _reply(self, body: bytes, content_type: str):
        self.send_response(200)
        self.send_header("Content-Type", content_type)
        self.send_header("Content-Length", str(len(body)))
        self.end_headers()
        self.wfile.write(body)

    def log_message(self, format, *args):
        log.debug("%s - %s", self.address_string(), format % args)


def make_server(config: ExporterConfig, registry: CollectorRegistry) -> ThreadingHTTPServer:
    """Bind the exporter's HTTP server without starting it."""
    handler = type("ExporterHandler", (_ExporterHandler,), {"registry": registry})
    return ThreadingHTTPServer((config.listen_address, config.port), handler)


def serve(config: ExporterConfig):
    """Register the collector and serve until interrupted."""
    collector = ActiveUserCollector(config)
    registry = CollectorRegistry()
    registry.register(collector)

    server = make_server(config, registry)
    host, port = server.server_address[:2]
    log.info("serving %s on http://%s:%d%s", collector.name(), host, port, METRICS_PATH)
    try:
        server.serve_forever()
    except KeyboardInterrupt:
        pass
    finally:
        server.server_close()
        collector.close()
        log.info("server stopped")
