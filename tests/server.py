"""
A local aiohttp application serving a manifest and images for the async tests.
"""

import json
import tempfile
import unittest
from pathlib import Path

from aiohttp import web
from aiohttp.test_utils import TestServer

JPEG_BYTES = b"\xff\xd8\xff\xe0" + b"jpeg-body" * 2000
PNG_BYTES = b"\x89PNG\r\n\x1a\n" + b"png-body" * 10


class ImageServerTestCase(unittest.IsolatedAsyncioTestCase):
    """
    Starts a real HTTP server with these routes:

    - /manifest: returns ``self.manifest`` (a dict, or raw bytes) with
      ``self.manifest_status``
    - /img/{name}: returns ``self.images[name]``, or 404
    - /truncated.jpg: announces a larger body than it sends, then drops the
      connection
    """

    async def asyncSetUp(self):
        self.manifest: dict | bytes = {"data": {}}
        self.manifest_status = 200
        self.images = {"x.jpg": JPEG_BYTES, "y.png": PNG_BYTES, "noext": b"raw"}
        self.requested: list[str] = []

        app = web.Application()
        app.router.add_get("/manifest", self._manifest)
        app.router.add_get("/img/{name}", self._image)
        app.router.add_get("/truncated.jpg", self._truncated)
        self.server = TestServer(app)
        await self.server.start_server()

        self._tmp = tempfile.TemporaryDirectory()
        self.tmp_path = Path(self._tmp.name)

    async def asyncTearDown(self):
        await self.server.close()
        self._tmp.cleanup()

    def url(self, path: str) -> str:
        return str(self.server.make_url(path))

    async def _manifest(self, request: web.Request) -> web.Response:
        self.requested.append(request.path_qs)
        body = self.manifest
        if isinstance(body, dict):
            body = json.dumps(body).encode()
        return web.Response(
            body=body, status=self.manifest_status, content_type="application/json"
        )

    async def _image(self, request: web.Request) -> web.Response:
        self.requested.append(request.path_qs)
        name = request.match_info["name"]
        if name not in self.images:
            raise web.HTTPNotFound()
        return web.Response(body=self.images[name], content_type="image/jpeg")

    async def _truncated(self, request: web.Request) -> web.StreamResponse:
        self.requested.append(request.path_qs)
        response = web.StreamResponse()
        response.content_length = 100_000
        await response.prepare(request)
        await response.write(b"x" * 1024)
        request.transport.close()
        return response
