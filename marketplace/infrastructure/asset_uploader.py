"""Cloudinary Uploader — signed image uploads over httpx.

Invariants:
    - Credentials come from an explicit CloudinaryConfig built at startup
    - Every failure (transport, non-2xx, non-JSON body) is mapped to UploadError
    - No retry: a failed upload aborts the calling operation

Design Decisions:
    - Image sent as a base64 data URI in the `file` field (Cloudinary accepts it as-is)
    - Signature = sha1 of the sorted signed params plus api_secret (Cloudinary signing scheme)
    - httpx.AsyncClient injectable so tests can use httpx.MockTransport
"""

import base64
import hashlib
import logging
import time
from dataclasses import dataclass

import httpx

from marketplace.core.errors import UploadError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CloudinaryConfig:
    """Hosting-service credentials, passed to the uploader at startup."""
    cloud_name: str
    api_key: str
    api_secret: str
    folder: str | None = None
    base_url: str = "https://api.cloudinary.com/v1_1"
    timeout_seconds: float = 30.0

    @property
    def upload_url(self) -> str:
        return f"{self.base_url.rstrip('/')}/{self.cloud_name}/image/upload"


def to_data_uri(data: bytes, mime_type: str) -> str:
    return f"data:{mime_type};base64,{base64.b64encode(data).decode('ascii')}"


def sign_params(params: dict[str, str], api_secret: str) -> str:
    """Cloudinary request signature over the signed (non-file) params."""
    payload = "&".join(
        f"{key}={params[key]}" for key in sorted(params) if params[key] != ""
    )
    return hashlib.sha1((payload + api_secret).encode("utf-8")).hexdigest()


class CloudinaryUploader:
    """Uploads bytes to Cloudinary and returns the full response metadata."""

    def __init__(
        self, config: CloudinaryConfig, client: httpx.AsyncClient | None = None,
    ):
        self.config = config
        self._client = client or httpx.AsyncClient(timeout=config.timeout_seconds)

    async def upload(self, data: bytes, mime_type: str) -> dict:
        signed: dict[str, str] = {"timestamp": str(int(time.time()))}
        if self.config.folder:
            signed["folder"] = self.config.folder
        form = {
            **signed,
            "api_key": self.config.api_key,
            "signature": sign_params(signed, self.config.api_secret),
            "file": to_data_uri(data, mime_type),
        }

        try:
            response = await self._client.post(self.config.upload_url, data=form)
        except httpx.HTTPError as e:
            logger.error(f"Cloudinary transport error: {e}")
            raise UploadError(str(e) or type(e).__name__)

        if response.is_error:
            logger.error(
                f"Cloudinary rejected upload: {response.text[:200]}",
                extra={"status_code": response.status_code},
            )
            raise UploadError(
                _error_message(response), status_code=response.status_code,
            )

        try:
            body = response.json()
        except ValueError:
            raise UploadError("invalid response body", status_code=response.status_code)
        if not isinstance(body, dict):
            raise UploadError("invalid response body", status_code=response.status_code)

        logger.info(f"Uploaded image {body.get('public_id')}")
        return body

    async def aclose(self) -> None:
        await self._client.aclose()


def _error_message(response: httpx.Response) -> str:
    try:
        message = response.json().get("error", {}).get("message")
    except (ValueError, AttributeError):
        message = None
    return message or f"HTTP {response.status_code}"


# Singleton (initialized on startup)
uploader: CloudinaryUploader | None = None


def init_uploader(config: CloudinaryConfig) -> None:
    global uploader
    uploader = CloudinaryUploader(config)


def get_uploader() -> CloudinaryUploader:
    """FastAPI dependency for the asset uploader."""
    if not uploader:
        raise RuntimeError("Asset uploader not initialized")
    return uploader
