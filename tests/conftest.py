"""Pytest fixtures for videouploader tests."""
import json
import os
import tempfile
from pathlib import Path

import pytest

from videouploader.core.api import TransportResponse, UploadError, ErrorKind


class StubTransport:
    """
    Scripted stand-in for HttpTransport.

    Returns queued responses in order and records every call. A queued
    exception is raised instead of returned.
    """

    def __init__(self):
        self.responses = []
        self.calls = []

    def queue(self, *items):
        self.responses.extend(items)
        return self

    async def post(self, url, headers=None, data=None, json_body=None):
        self.calls.append({'method': 'POST', 'url': url, 'headers': dict(headers or {}), 'data': data})
        return self._next()

    async def get(self, url, headers=None):
        self.calls.append({'method': 'GET', 'url': url, 'headers': dict(headers or {}), 'data': None})
        return self._next()

    async def close(self):
        pass

    def _next(self):
        if not self.responses:
            raise AssertionError("StubTransport has no queued response")
        item = self.responses.pop(0)
        if isinstance(item, BaseException):
            raise item
        return item


def video_body(video_id="vi4blUQJFrYWbaG44NChkH27", hls=None, **extra):
    """JSON text of a video object as returned by the upload endpoint."""
    body = {
        'videoId': video_id,
        'title': 'clip.mp4',
        'public': True,
        'panoramic': False,
        'mp4Support': True,
        'createdAt': '2026-03-01T10:00:00Z',
        'tags': [],
        'metadata': [],
        'source': {'type': 'upload', 'uri': f'/videos/{video_id}/source'},
        'assets': {
            'player': f'https://embed.api.video/vod/{video_id}',
            'hls': hls if hls is not None else f'https://vod.api.video/vod/{video_id}/hls/manifest.m3u8',
        },
    }
    body.update(extra)
    return json.dumps(body)


@pytest.fixture
def stub_transport():
    """Empty scripted transport."""
    return StubTransport()


@pytest.fixture
def ok_response():
    """Factory for 201 responses carrying a video object."""
    def make(video_id="vi4blUQJFrYWbaG44NChkH27", **kwargs):
        return TransportResponse(status=201, text=video_body(video_id, **kwargs))
    return make


@pytest.fixture
def error_response():
    """Factory for error responses with a problem+json body."""
    def make(status, title="Error", reason=None):
        body = {'type': 'https://docs.api.video/reference/error', 'title': title, 'status': status}
        if reason:
            body['reason'] = reason
        return TransportResponse(status=status, text=json.dumps(body))
    return make


@pytest.fixture
def http_error():
    """Factory for UploadError instances with an HTTP status."""
    def make(status):
        return UploadError(ErrorKind.HTTP_ERROR, status=status)
    return make


@pytest.fixture
def make_file():
    """Factory creating temporary files of a given size."""
    paths = []

    def make(size, name="clip.mp4"):
        directory = tempfile.mkdtemp()
        path = Path(directory) / name
        with open(path, 'wb') as f:
            f.write(bytes(i % 251 for i in range(min(size, 4096))) * (size // 4096 + 1))
            f.truncate(size)
        paths.append(path)
        return path

    yield make

    for path in paths:
        if path.exists():
            os.unlink(path)
        os.rmdir(path.parent)
