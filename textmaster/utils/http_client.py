"""
TextMaster API クライアント

Document の永続化に必要な最小限のエンドポイントのみを扱う
"""
import hashlib
import logging
from datetime import datetime, timezone
from typing import Optional

import httpx

from textmaster.config import settings
from textmaster.exceptions import APIException, APIRateLimitException
from textmaster.utils.retry import sync_retry

logger = logging.getLogger(__name__)

DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def sign(api_secret: str, date: str) -> str:
    """SIGNATURE ヘッダー値（sha1(secret + date)）"""
    return hashlib.sha1(f"{api_secret}{date}".encode("utf-8")).hexdigest()


class TextmasterClient:
    """TextMaster REST API の同期クライアント"""

    def __init__(
        self,
        api_key: Optional[str] = None,
        api_secret: Optional[str] = None,
        base_url: Optional[str] = None,
        timeout: Optional[float] = None,
        max_retries: Optional[int] = None,
        retry_base_delay: Optional[float] = None,
        http_client: Optional[httpx.Client] = None
    ):
        self.api_key = api_key if api_key is not None else settings.TEXTMASTER_API_KEY
        self.api_secret = (
            api_secret if api_secret is not None else settings.TEXTMASTER_API_SECRET
        )
        self.base_url = (base_url or settings.api_base_url).rstrip("/")
        self.max_retries = (
            max_retries if max_retries is not None else settings.TEXTMASTER_MAX_RETRIES
        )
        self.retry_base_delay = (
            retry_base_delay if retry_base_delay is not None
            else settings.TEXTMASTER_RETRY_BASE_DELAY
        )

        self._owns_http_client = http_client is None
        self.http = http_client or httpx.Client(
            timeout=timeout if timeout is not None else settings.TEXTMASTER_TIMEOUT
        )

        # リトライ回数はインスタンスごとに異なるためここでラップする
        self._send_idempotent = sync_retry(
            max_retries=self.max_retries,
            base_delay=self.retry_base_delay,
            exceptions=(_RetryableAPIException,)
        )(self._send_once)
        # 非冪等なリクエストは 429（未処理が確実）のみリトライする
        self._send_non_idempotent = sync_retry(
            max_retries=self.max_retries,
            base_delay=self.retry_base_delay,
            exceptions=()
        )(self._send_once)

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        self.close()

    def close(self):
        if self._owns_http_client:
            self.http.close()

    # ------------------------------------------------------------------
    # 汎用リクエスト
    # ------------------------------------------------------------------

    def get(self, path: str) -> dict:
        return self._send("GET", path)

    def post(self, path: str, json: Optional[dict] = None) -> dict:
        # POST は作成系のため、5xx・通信エラーではリトライしない
        return self._send("POST", path, json, idempotent=False)

    def put(self, path: str, json: Optional[dict] = None) -> dict:
        return self._send("PUT", path, json)

    # ------------------------------------------------------------------
    # Document エンドポイント
    # ------------------------------------------------------------------

    def create_document(self, project_id: str, payload: dict) -> dict:
        return self.post(f"clients/projects/{project_id}/documents", payload)

    def update_document(self, project_id: str, document_id: str, payload: dict) -> dict:
        return self.put(
            f"clients/projects/{project_id}/documents/{document_id}", payload
        )

    def get_document(self, project_id: str, document_id: str) -> dict:
        return self.get(f"clients/projects/{project_id}/documents/{document_id}")

    def complete_document(
        self,
        project_id: str,
        document_id: str,
        satisfaction: Optional[str] = None,
        message: Optional[str] = None
    ) -> dict:
        body = {}
        if satisfaction is not None:
            body["satisfaction"] = satisfaction
        if message is not None:
            body["message"] = message
        return self.put(
            f"clients/projects/{project_id}/documents/{document_id}/complete",
            body
        )

    # ------------------------------------------------------------------
    # 内部処理
    # ------------------------------------------------------------------

    def auth_headers(self, now: Optional[datetime] = None) -> dict:
        """認証ヘッダー"""
        date = (now or datetime.now(timezone.utc)).strftime(DATE_FORMAT)
        return {
            "APIKEY": self.api_key,
            "DATE": date,
            "SIGNATURE": sign(self.api_secret, date),
            "Accept": "application/json",
        }

    def _send(
        self,
        method: str,
        path: str,
        json: Optional[dict] = None,
        idempotent: bool = True
    ) -> dict:
        if idempotent:
            return self._send_idempotent(method, path, json)
        return self._send_non_idempotent(method, path, json)

    def _send_once(self, method: str, path: str, json: Optional[dict] = None) -> dict:
        url = f"{self.base_url}/{path.lstrip('/')}"
        logger.debug(f"{method} {url}")

        try:
            response = self.http.request(
                method, url, json=json, headers=self.auth_headers()
            )
        except httpx.TransportError as e:
            raise _RetryableAPIException(
                f"Request to {url} failed: {str(e)}",
                details={"method": method, "url": url}
            ) from e

        if response.status_code == 429:
            raise APIRateLimitException(
                "TextMaster API rate limit exceeded",
                retry_after=_parse_retry_after(response),
                details={"method": method, "url": url}
            )

        if response.status_code >= 400:
            error_class = (
                _RetryableAPIException if response.status_code >= 500
                else APIException
            )
            raise error_class(
                f"TextMaster API returned {response.status_code} "
                f"for {method} {url}",
                status_code=response.status_code,
                details={"body": response.text}
            )

        if not response.content:
            return {}
        return response.json()


class _RetryableAPIException(APIException):
    """リトライ対象のAPI例外（5xx・通信エラー）"""
    pass


def _parse_retry_after(response: httpx.Response) -> Optional[float]:
    value = response.headers.get("Retry-After")
    try:
        return float(value) if value is not None else None
    except ValueError:
        return None
