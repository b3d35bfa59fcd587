"""Tests for credentials and token refresh."""
import base64
import json

import pytest

from videouploader.core.exceptions import ConfigurationError
from videouploader.core.api import TransportResponse, UploadError
from videouploader.core.api.auth import (
    Origin,
    UploadTokenCredentials,
    AccessTokenCredentials,
    ApiKeyCredentials,
    CredentialManager,
    resolve_credentials,
)

BASE_URL = 'https://ws.api.video'


class TestResolveCredentials:
    """Test suite for resolve_credentials."""
    
    def test_upload_token(self):
        """Test upload token mode."""
        credentials = resolve_credentials(upload_token="to1tcmSFHeYY5KzyhOqVKMKb")
        
        assert isinstance(credentials, UploadTokenCredentials)
        assert credentials.video_id is None
        assert credentials.upload_endpoint(BASE_URL) == "https://ws.api.video/upload?token=to1tcmSFHeYY5KzyhOqVKMKb"
        assert credentials.build_headers() == {}
    
    def test_upload_token_with_video_id(self):
        """Test upload token mode keeps a known video id."""
        credentials = resolve_credentials(upload_token="tok", video_id="vi123")
        
        assert credentials.video_id == "vi123"
        assert credentials.upload_endpoint(BASE_URL) == "https://ws.api.video/upload?token=tok"
    
    def test_access_token(self):
        """Test access token mode."""
        credentials = resolve_credentials(access_token="abc", video_id="vi123")
        
        assert isinstance(credentials, AccessTokenCredentials)
        assert credentials.upload_endpoint(BASE_URL) == "https://ws.api.video/videos/vi123/source"
        assert credentials.build_headers() == {'Authorization': 'Bearer abc'}
        assert not credentials.can_refresh
    
    def test_access_token_with_refresh(self):
        """Test refreshable access token."""
        credentials = resolve_credentials(access_token="abc", refresh_token="def", video_id="vi123")
        
        assert credentials.can_refresh
    
    def test_api_key(self):
        """Test API key mode uses Basic auth with an empty password."""
        credentials = resolve_credentials(api_key="KEY", video_id="vi123")
        expected = base64.b64encode(b"KEY:").decode()
        
        assert isinstance(credentials, ApiKeyCredentials)
        assert credentials.build_headers() == {'Authorization': f"Basic {expected}"}
        assert credentials.upload_endpoint(BASE_URL) == "https://ws.api.video/videos/vi123/source"
    
    @pytest.mark.parametrize("kwargs", [
        {'access_token': 'abc'},
        {'api_key': 'KEY'},
        {'access_token': 'abc', 'video_id': ''},
    ])
    def test_video_id_required(self, kwargs):
        """Test source endpoint modes require a video id."""
        with pytest.raises(ConfigurationError, match="'video_id' is missing"):
            resolve_credentials(**kwargs)
    
    def test_none_supplied(self):
        """Test missing credentials."""
        with pytest.raises(ConfigurationError, match="You must provide"):
            resolve_credentials()
    
    def test_none_supplied_allowed(self):
        """Test missing credentials when uploads are skipped."""
        assert resolve_credentials(allow_missing=True) is None
    
    @pytest.mark.parametrize("kwargs", [
        {'upload_token': 'tok', 'api_key': 'KEY'},
        {'upload_token': 'tok', 'access_token': 'abc'},
        {'access_token': 'abc', 'api_key': 'KEY'},
        {'upload_token': 'tok', 'access_token': 'abc', 'api_key': 'KEY'},
    ])
    def test_modes_are_exclusive(self, kwargs):
        """Test several credentials are rejected."""
        with pytest.raises(ConfigurationError, match="Only one of"):
            resolve_credentials(video_id="vi123", **kwargs)
    
    def test_refresh_token_requires_access_token(self):
        """Test orphan refresh token."""
        with pytest.raises(ConfigurationError, match="refresh_token"):
            resolve_credentials(api_key="KEY", refresh_token="def", video_id="vi123")


class TestOrigin:
    """Test suite for Origin."""
    
    def test_valid(self):
        """Test valid values pass and render as name:version."""
        origin = Origin("my-app_2", "1.22.333")
        origin.validate('application')
        
        assert origin.header_value() == "my-app_2:1.22.333"
    
    @pytest.mark.parametrize("version", ["1", "1.2", "123.456.789"])
    def test_valid_versions(self, version):
        """Test accepted version patterns."""
        Origin("sdk", version).validate('sdk')
    
    @pytest.mark.parametrize("name", ["bad name", "a" * 51, "app!"])
    def test_invalid_name(self, name):
        """Test rejected names."""
        with pytest.raises(ConfigurationError, match="Invalid application name value"):
            Origin(name, "1.0").validate('application')
    
    @pytest.mark.parametrize("version", ["1.2.3.4", "1000", "v1", "1."])
    def test_invalid_version(self, version):
        """Test rejected versions."""
        with pytest.raises(ConfigurationError, match="Invalid sdk version value"):
            Origin("sdk", version).validate('sdk')
    
    def test_missing_values(self):
        """Test empty name or version."""
        with pytest.raises(ConfigurationError, match="application name is required"):
            Origin("", "1.0").validate('application')
        with pytest.raises(ConfigurationError, match="sdk version is required"):
            Origin("x", "").validate('sdk')


class TestCredentialManager:
    """Test suite for CredentialManager."""
    
    @pytest.fixture
    def credentials(self):
        """Create refreshable credentials."""
        return AccessTokenCredentials("old-access", "vi123", refresh_token="old-refresh")
    
    @pytest.fixture
    def manager(self, credentials, stub_transport):
        """Create credential manager on the stub transport."""
        return CredentialManager(
            credentials,
            stub_transport,
            BASE_URL,
            {'AV-Origin-Client': 'python-uploader:1.0.0'}
        )
    
    def test_headers(self, manager):
        """Test session headers merged with Authorization."""
        assert manager.headers() == {
            'AV-Origin-Client': 'python-uploader:1.0.0',
            'Authorization': 'Bearer old-access',
        }
    
    def test_endpoints(self, manager):
        """Test upload and refresh URLs."""
        assert manager.upload_endpoint == "https://ws.api.video/videos/vi123/source"
        assert manager.refresh_url == "https://ws.api.video/auth/refresh"
    
    @pytest.mark.asyncio
    async def test_refresh_swaps_both_tokens(self, manager, credentials, stub_transport):
        """Test successful refresh."""
        stub_transport.queue(TransportResponse(
            status=200,
            text=json.dumps({'access_token': 'new-access', 'refresh_token': 'new-refresh'})
        ))
        
        await manager.refresh()
        
        assert credentials.access_token == 'new-access'
        assert credentials.refresh_token == 'new-refresh'
        assert manager.headers()['Authorization'] == 'Bearer new-access'
        
        call = stub_transport.calls[0]
        assert call['url'] == "https://ws.api.video/auth/refresh"
        assert call['headers']['Content-Type'] == 'application/json'
        assert call['headers']['AV-Origin-Client'] == 'python-uploader:1.0.0'
        assert 'Authorization' not in call['headers']
        assert json.loads(call['data']) == {'refreshToken': 'old-refresh'}
    
    @pytest.mark.asyncio
    async def test_refresh_rejected(self, manager, credentials, stub_transport, error_response):
        """Test refresh failure leaves tokens unchanged."""
        stub_transport.queue(error_response(400, title="Invalid refresh token"))
        
        with pytest.raises(UploadError) as exc_info:
            await manager.refresh()
        
        assert exc_info.value.status == 400
        assert credentials.access_token == 'old-access'
        assert credentials.refresh_token == 'old-refresh'
    
    @pytest.mark.asyncio
    async def test_refresh_missing_tokens(self, manager, credentials, stub_transport):
        """Test a success response without both tokens."""
        stub_transport.queue(TransportResponse(status=200, text=json.dumps({'access_token': 'x'})))
        
        with pytest.raises(UploadError):
            await manager.refresh()
        
        assert credentials.access_token == 'old-access'
    
    @pytest.mark.asyncio
    async def test_refresh_not_supported(self, stub_transport):
        """Test non-refreshable credentials."""
        manager = CredentialManager(ApiKeyCredentials("KEY", "vi123"), stub_transport, BASE_URL)
        
        assert not manager.can_refresh
        with pytest.raises(RuntimeError):
            await manager.refresh()
        assert stub_transport.calls == []
