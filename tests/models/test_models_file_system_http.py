import json
import os
import threading
import unittest
from http.server import BaseHTTPRequestHandler, ThreadingHTTPServer
from unittest.mock import patch
from urllib.parse import unquote, urlsplit

from bcapi.auth import MemoryTokenStore, SiteHelper
from bcapi.controller import HttpTransport
from bcapi.models import RootFolder

SITE_TOKEN = "site-token"
STORAGE_PREFIX = "/api/v2/admin/sites/current/storage"


class _StorageHandler(BaseHTTPRequestHandler):
    """Keep-alive HTTP/1.1 storage endpoint backed by server.files."""

    protocol_version = "HTTP/1.1"

    def log_message(self, format, *args):  # noqa: A002
        pass

    def do_PUT(self):
        body = self.rfile.read(int(self.headers.get("Content-Length") or 0))
        path, query = self._target()
        if not self._authorized():
            return
        if query == "meta":
            self._send(405, b"")
            return
        with self.server.lock:
            self.server.files[path] = body
        self._send(200, b"")

    def do_GET(self):
        path, query = self._target()
        if not self._authorized():
            return
        with self.server.lock:
            content = self.server.files.get(path)
        if content is None:
            self._send(404, b'{"message": "not found"}')
        elif query == "meta":
            self._send(200, json.dumps({"size": len(content)}).encode("utf-8"))
        else:
            self._send(200, content)

    def _target(self):
        parts = urlsplit(self.path)
        return unquote(parts.path)[len(STORAGE_PREFIX):], parts.query

    def _authorized(self):
        if self.headers.get("Authorization") == SITE_TOKEN:
            return True
        self._send(401, b'{"message": "bad token"}')
        return False

    def _send(self, status, body):
        self.send_response(status)
        self.send_header("Content-Type", "application/octet-stream")
        self.send_header("Content-Length", str(len(body)))
        self.end_headers()
        self.wfile.write(body)


class TestFileSystemOverHttp(unittest.TestCase):
    """Runs the default transport (real httplib2.Http objects) against a local server."""

    def setUp(self) -> None:
        # httplib2 reads proxy settings from the environment.
        env = patch.dict(os.environ, {"no_proxy": "127.0.0.1", "NO_PROXY": "127.0.0.1"})
        env.start()
        self.addCleanup(env.stop)

        self.server = ThreadingHTTPServer(("127.0.0.1", 0), _StorageHandler)
        self.server.daemon_threads = True
        self.server.files = {}
        self.server.lock = threading.Lock()
        thread = threading.Thread(target=self.server.serve_forever, daemon=True)
        thread.start()
        self.addCleanup(self.server.server_close)
        self.addCleanup(self.server.shutdown)

        host, port = self.server.server_address[:2]
        site = SiteHelper(
            MemoryTokenStore({"siteToken": SITE_TOKEN}),
            root_url=f"http://{host}:{port}",
        )
        self.transport = HttpTransport(site)
        self.addCleanup(self.transport.close)
        self.root = RootFolder(transport=self.transport)

    def test_upload_then_download(self) -> None:
        f = self.root.folder("docs").file("a.txt")
        f.upload_and_fetch("hello").result(timeout=10)
        self.assertEqual(f.size, 5)
        self.assertEqual(f.download().result(timeout=10), b"hello")

    def test_concurrent_downloads_of_distinct_files(self) -> None:
        files = [self.root.file(f"concurrent_{i:02d}") for i in range(40)]
        for i, f in enumerate(files):
            f.upload(f"content {i}").result(timeout=10)

        futures = [f.download() for f in files]
        results = [future.result(timeout=10) for future in futures]

        self.assertEqual(results, [f"content {i}".encode("utf-8") for i in range(40)])

    def test_concurrent_uploads_and_fetches(self) -> None:
        files = [self.root.file(f"parallel_{i:02d}") for i in range(20)]
        futures = [f.upload_and_fetch("x" * i) for i, f in enumerate(files)]
        for future in futures:
            future.result(timeout=10)

        self.assertEqual([f.size for f in files], list(range(20)))
        self.assertEqual(len(self.server.files), 20)


if __name__ == "__main__":
    unittest.main()
