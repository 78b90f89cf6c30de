"""
Blob Storage Client - Vercel Blob REST API Integration

Treats the store as an opaque key-value object store with four operations:
list (paginated by cursor), put, delete, and get-by-URL.

- Exponential backoff retry on rate limits and server errors
- Exhaustive listing that follows the pagination cursor
- Failures surfaced as BlobStoreError
"""

import requests
import time
import logging
from typing import Dict, Iterable, List, Optional, Union
from dataclasses import dataclass

from shared.config import Settings, get_settings

logger = logging.getLogger(__name__)


class BlobStoreError(Exception):
    """Blob storage request failed"""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code


@dataclass
class BlobObject:
    """Stored object metadata"""
    url: str
    pathname: str
    size: int = 0
    uploaded_at: Optional[str] = None
    download_url: Optional[str] = None

    @property
    def name(self) -> str:
        """Final path segment of the pathname"""
        return self.pathname.split('/')[-1]

    @classmethod
    def from_api(cls, data: Dict) -> "BlobObject":
        return cls(
            url=data['url'],
            pathname=data['pathname'],
            size=int(data.get('size') or 0),
            uploaded_at=data.get('uploadedAt'),
            download_url=data.get('downloadUrl'),
        )


@dataclass
class BlobListPage:
    """One page of a listing"""
    blobs: List[BlobObject]
    cursor: Optional[str] = None
    has_more: bool = False


class BlobClient:
    """
    Client for the Vercel Blob REST API

    Usage:
        client = BlobClient(token=settings.blob_read_write_token)
        for blob in client.list_all(prefix="icap-papers/"):
            print(blob.pathname)
    """

    BASE_URL = "https://blob.vercel-storage.com"
    API_VERSION = "7"

    def __init__(
        self,
        token: Optional[str],
        base_url: Optional[str] = None,
        api_version: Optional[str] = None,
        timeout: int = 30,
        max_retries: int = 3,
        backoff: float = 1.0,
        session: Optional[requests.Session] = None
    ):
        """
        Initialize blob client

        Args:
            token: Blob read/write token
            base_url: API endpoint override
            api_version: Value of the x-api-version header
            timeout: Request timeout in seconds
            max_retries: Maximum attempts per request
            backoff: Base delay in seconds for exponential backoff
            session: requests session (a new one by default)
        """
        if not token:
            raise ValueError(
                "Blob token required. Set BLOB_READ_WRITE_TOKEN environment variable or pass token parameter."
            )

        self.token = token
        self.base_url = (base_url or self.BASE_URL).rstrip('/')
        self.api_version = api_version or self.API_VERSION
        self.timeout = timeout
        self.max_retries = max(1, max_retries)
        self.backoff = backoff
        self.session = session or requests.Session()

    # ===== Operations =====

    def list(
        self,
        prefix: Optional[str] = None,
        limit: int = 1000,
        cursor: Optional[str] = None
    ) -> BlobListPage:
        """
        List one page of blobs

        Args:
            prefix: Only return pathnames starting with this prefix
            limit: Page size (API maximum is 1000)
            cursor: Cursor returned by the previous page

        Returns:
            BlobListPage with blobs and the next cursor
        """
        params = {'limit': limit}
        if prefix:
            params['prefix'] = prefix
        if cursor:
            params['cursor'] = cursor

        data = self._request('GET', self.base_url, params=params).json()
        return BlobListPage(
            blobs=[BlobObject.from_api(item) for item in data.get('blobs', [])],
            cursor=data.get('cursor') or None,
            has_more=bool(data.get('hasMore')),
        )

    def list_all(self, prefix: Optional[str] = None, limit: int = 1000) -> List[BlobObject]:
        """List every blob under a prefix, following the cursor until exhausted"""
        blobs: List[BlobObject] = []
        cursor = None
        pages = 0
        while True:
            page = self.list(prefix=prefix, limit=limit, cursor=cursor)
            blobs.extend(page.blobs)
            pages += 1
            cursor = page.cursor
            if not cursor:
                break

        logger.info(f"📦 Listed {len(blobs)} blobs under '{prefix or ''}' ({pages} page(s))")
        return blobs

    def put(
        self,
        pathname: str,
        body: Union[bytes, str],
        content_type: Optional[str] = None,
        add_random_suffix: bool = False,
        allow_overwrite: bool = True,
        cache_control_max_age: Optional[int] = None
    ) -> BlobObject:
        """
        Store an object under a pathname

        Returns:
            BlobObject describing the stored object
        """
        headers = {
            'x-add-random-suffix': '1' if add_random_suffix else '0',
            'x-allow-overwrite': '1' if allow_overwrite else '0',
        }
        if content_type:
            headers['x-content-type'] = content_type
        if cache_control_max_age is not None:
            headers['x-cache-control-max-age'] = str(cache_control_max_age)

        if isinstance(body, str):
            body = body.encode('utf-8')

        data = self._request(
            'PUT',
            f"{self.base_url}/",
            params={'pathname': pathname},
            headers=headers,
            data=body,
        ).json()

        logger.info(f"⬆️ Stored blob: {data.get('pathname', pathname)}")
        return BlobObject(
            url=data['url'],
            pathname=data.get('pathname', pathname),
            size=len(body),
            download_url=data.get('downloadUrl'),
        )

    def delete(self, urls: Union[str, Iterable[str]]) -> None:
        """Delete one or more blobs by URL"""
        if isinstance(urls, str):
            urls = [urls]
        urls = list(urls)
        if not urls:
            return

        self._request('POST', f"{self.base_url}/delete", json={'urls': urls})
        logger.info(f"🗑️ Deleted {len(urls)} blob(s)")

    def get_by_url(self, url: str, cache_bust: bool = True) -> bytes:
        """Download a blob's content from its public URL"""
        params = {'t': str(int(time.time() * 1000))} if cache_bust else None
        return self._request('GET', url, params=params, authenticated=False).content

    def get_json(self, url: str):
        """Download and decode a JSON blob"""
        params = {'t': str(int(time.time() * 1000))}
        response = self._request('GET', url, params=params, authenticated=False)
        try:
            return response.json()
        except ValueError as e:
            raise BlobStoreError(f"Blob at {url} is not valid JSON") from e

    # ===== Transport =====

    def _headers(self, extra: Optional[Dict[str, str]] = None) -> Dict[str, str]:
        headers = {
            'authorization': f"Bearer {self.token}",
            'x-api-version': self.api_version,
        }
        if extra:
            headers.update(extra)
        return headers

    def _request(
        self,
        method: str,
        url: str,
        headers: Optional[Dict[str, str]] = None,
        authenticated: bool = True,
        **kwargs
    ) -> requests.Response:
        """Send a request with retry on 429 / 5xx and connection errors"""
        if authenticated:
            headers = self._headers(headers)

        last_exception: Optional[Exception] = None
        for attempt in range(self.max_retries):
            try:
                response = self.session.request(
                    method,
                    url,
                    headers=headers,
                    timeout=self.timeout,
                    **kwargs
                )
                response.raise_for_status()
                return response

            except requests.exceptions.HTTPError as e:
                status_code = e.response.status_code if e.response is not None else None

                if status_code in (401, 403):
                    logger.error("❌ Blob storage authentication failed - check token")
                    raise BlobStoreError("Invalid blob storage token", status_code) from e

                if status_code == 429 or (status_code is not None and status_code >= 500):
                    wait_time = self.backoff * (2 ** attempt)
                    logger.warning(
                        f"⚠️ Blob storage returned HTTP {status_code}, retrying in {wait_time}s "
                        f"(attempt {attempt + 1}/{self.max_retries})"
                    )
                    last_exception = e
                    if attempt < self.max_retries - 1:
                        time.sleep(wait_time)
                    continue

                raise BlobStoreError(
                    f"Blob storage request failed: {method} {url} -> HTTP {status_code}",
                    status_code
                ) from e

            except (requests.exceptions.ConnectionError, requests.exceptions.Timeout) as e:
                wait_time = self.backoff * (2 ** attempt)
                logger.warning(
                    f"⚠️ Blob storage connection error: {e}, retrying in {wait_time}s "
                    f"(attempt {attempt + 1}/{self.max_retries})"
                )
                last_exception = e
                if attempt < self.max_retries - 1:
                    time.sleep(wait_time)

            except requests.exceptions.RequestException as e:
                raise BlobStoreError(f"Blob storage request failed: {e}") from e

        status_code = None
        if isinstance(last_exception, requests.exceptions.HTTPError) and last_exception.response is not None:
            status_code = last_exception.response.status_code
        raise BlobStoreError(
            f"Blob storage request failed after {self.max_retries} attempts: {last_exception}",
            status_code
        ) from last_exception


def create_blob_client(token: Optional[str] = None, settings: Optional[Settings] = None) -> BlobClient:
    """
    Build a BlobClient from application settings

    Args:
        token: Token override (default: settings.blob_read_write_token)
        settings: Settings instance (default: cached settings)
    """
    settings = settings or get_settings()

    return BlobClient(
        token=token or settings.blob_read_write_token,
        base_url=settings.blob_api_url,
        api_version=settings.blob_api_version,
        timeout=settings.request_timeout,
        max_retries=settings.max_retries,
    )
