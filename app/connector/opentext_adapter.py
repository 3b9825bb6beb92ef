import re
import time
from collections.abc import Sequence
from datetime import datetime
from typing import Any, ClassVar

import httpx

from app.connector.base import BaseSourceConnector
from app.connector.demo_data import demo_batch, demo_document_content, demo_metadata
from app.connector.exceptions import ConnectorAuthError
from app.documents.dates import parse_timestamp
from app.documents.models import (
    DocumentBatch,
    DocumentMetadata,
    DocumentReference,
    DocumentType,
    utc_now,
)
from app.logging.logger import Log

_EMPLOYEE_ID_RES = (
    re.compile(r"emp[_-]?(\d+)", re.IGNORECASE),
    re.compile(r"employee[_-]?(\d+)", re.IGNORECASE),
)
_ID_CARD_RE = re.compile(r"(?<![a-z])id(?![a-z])|identity")


def infer_document_type(filename: str) -> DocumentType:
    """Guess the document category from its file name."""
    name = filename.lower()
    if "passport" in name:
        return DocumentType.PASSPORT
    if "permit" in name or "work_auth" in name:
        return DocumentType.WORK_PERMIT
    if "cert" in name:
        return DocumentType.CERTIFICATION
    if "contract" in name or "employment" in name:
        return DocumentType.EMPLOYMENT_CONTRACT
    if "visa" in name:
        return DocumentType.VISA
    if _ID_CARD_RE.search(name):
        return DocumentType.ID_CARD
    return DocumentType.UNKNOWN


def extract_employee_id(filename: str) -> str | None:
    for pattern in _EMPLOYEE_ID_RES:
        match = pattern.search(filename)
        if match:
            return f"EMP-{match.group(1)}"
    return None


class OpenTextConnector(BaseSourceConnector):
    """Source adapter for the OpenText Content Server REST API (v2)."""

    CATEGORY_IDS: ClassVar[dict[DocumentType, str]] = {
        DocumentType.PASSPORT: "12345",
        DocumentType.WORK_PERMIT: "12346",
        DocumentType.CERTIFICATION: "12347",
        DocumentType.EMPLOYMENT_CONTRACT: "12348",
        DocumentType.VISA: "12349",
    }
    DEFAULT_CATEGORY_ID: ClassVar[str] = "12350"
    TOKEN_LIFETIME_SECONDS: ClassVar[int] = 2 * 60 * 60
    LIST_EXPAND: ClassVar[str] = (
        "properties{original_id,create_date,modify_date,name,mime_type,size}"
    )

    def __init__(
        self,
        *,
        base_url: str,
        username: str,
        password: str,
        page_size: int = 50,
        timeout_seconds: int = 30,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        self._base_url = base_url.rstrip("/")
        self._username = username
        self._password = password
        self._page_size = page_size
        self._owns_client = client is None
        self._client = client or httpx.AsyncClient(timeout=timeout_seconds)
        self._token: str | None = None
        self._token_expiry: float = 0.0
        self._demo_mode = False

    @property
    def demo_mode(self) -> bool:
        """True when the last authentication fell back to a simulated session."""
        return self._demo_mode

    def is_token_valid(self) -> bool:
        return self._token is not None and time.time() < self._token_expiry

    async def authenticate(self) -> str:
        if self.is_token_valid() and self._token is not None:
            return self._token
        return await self._refresh_token()

    async def _refresh_token(self) -> str:
        Log.info("Authenticating with OpenText DMS")
        try:
            response = await self._client.post(
                f"{self._base_url}/api/v2/authentication/sessions",
                data={"username": self._username, "password": self._password},
                headers={"Accept": "application/json"},
            )
        except httpx.HTTPError as exc:
            Log.warning(f"OpenText DMS not available, using demo mode: {exc}")
            return self._use_demo_token()

        if response.is_error:
            Log.warning(
                f"OpenText DMS authentication returned {response.status_code}, using demo mode"
            )
            return self._use_demo_token()

        try:
            data = response.json()
            ticket = str(data["ticket"])
            expires_in = int(data.get("expires_in") or self.TOKEN_LIFETIME_SECONDS)
        except (ValueError, KeyError, TypeError) as exc:
            Log.warning(f"Unexpected OpenText authentication payload, using demo mode: {exc}")
            return self._use_demo_token()

        self._token = ticket
        self._token_expiry = time.time() + expires_in
        self._demo_mode = False
        Log.info("OpenText DMS authentication successful")
        return ticket

    def _use_demo_token(self) -> str:
        self._token = f"demo_token_{int(time.time() * 1000)}"
        self._token_expiry = time.time() + self.TOKEN_LIFETIME_SECONDS
        self._demo_mode = True
        return self._token

    async def _get(
        self,
        path: str,
        params: list[tuple[str, str]] | None = None,
    ) -> httpx.Response:
        """GET with the session token, re-authenticating once on 401."""
        await self.authenticate()
        url = f"{self._base_url}{path}"
        response = await self._client.get(url, params=params, headers=self._auth_headers())
        if response.status_code != 401:
            return response

        Log.warning(f"OpenText DMS rejected session for {path}, re-authenticating")
        await self._refresh_token()
        response = await self._client.get(url, params=params, headers=self._auth_headers())
        if response.status_code == 401:
            raise ConnectorAuthError(f"OpenText DMS rejected credentials for {path}")
        return response

    def _auth_headers(self) -> dict[str, str]:
        return {"Authorization": f"Bearer {self._token}", "Accept": "application/json"}

    async def list_batch(
        self,
        since: datetime | None,
        type_filter: Sequence[DocumentType],
        cursor: int | None = None,
    ) -> DocumentBatch:
        page = cursor or 1
        params = [
            ("limit", str(self._page_size)),
            ("page", str(page)),
            ("expand", self.LIST_EXPAND),
        ]
        if since is not None:
            params.append(("where", f"modify_date>'{since.isoformat()}'"))
        if type_filter:
            categories = " OR ".join(
                f"categories:{{{self.category_id(doc_type)}}}" for doc_type in type_filter
            )
            params.append(("where", categories))

        Log.info(f"Fetching documents page {page} from OpenText DMS")
        try:
            response = await self._get("/api/v2/nodes/-1/nodes", params=params)
            response.raise_for_status()
            data = response.json()
        except (httpx.HTTPError, ValueError) as exc:
            Log.warning(f"Error fetching from OpenText DMS, returning demo data: {exc}")
            return demo_batch()

        nodes = data.get("results") or []
        documents = [self._to_reference(node) for node in nodes]
        paging = (data.get("collection") or {}).get("paging") or {}
        current = paging.get("page")
        total_pages = paging.get("page_total")
        has_more = (
            isinstance(current, int) and isinstance(total_pages, int) and current < total_pages
        )
        return DocumentBatch(
            documents=documents,
            has_more=has_more,
            total_count=int(paging.get("total_count") or len(documents)),
            next_cursor=current + 1 if has_more and isinstance(current, int) else None,
        )

    async def download(self, document_id: str) -> bytes:
        Log.info(f"Downloading document {document_id} from OpenText DMS")
        try:
            response = await self._get(f"/api/v2/nodes/{document_id}/content")
            response.raise_for_status()
        except httpx.HTTPError as exc:
            Log.info(f"Demo mode: simulating download for document {document_id}: {exc}")
            return demo_document_content(document_id)
        return response.content

    async def get_metadata(self, document_id: str) -> DocumentMetadata:
        try:
            response = await self._get(
                f"/api/v2/nodes/{document_id}", params=[("expand", "properties")]
            )
            response.raise_for_status()
            data = response.json()
        except (httpx.HTTPError, ValueError) as exc:
            Log.info(f"Demo mode: returning demo metadata for {document_id}: {exc}")
            return demo_metadata(document_id)
        return self._to_metadata(document_id, data)

    async def health_check(self) -> dict[str, object]:
        try:
            response = await self._client.get(f"{self._base_url}/api/v2/pulse", timeout=5)
        except httpx.HTTPError:
            return {
                "status": "demo_mode",
                "authenticated": True,
                "message": "Using demo data - OpenText DMS not available",
            }
        return {
            "status": "healthy" if response.is_success else "unhealthy",
            "authenticated": self.is_token_valid() and not self._demo_mode,
        }

    async def aclose(self) -> None:
        if self._owns_client:
            await self._client.aclose()

    @classmethod
    def category_id(cls, doc_type: DocumentType) -> str:
        return cls.CATEGORY_IDS.get(doc_type, cls.DEFAULT_CATEGORY_ID)

    def _to_reference(self, node: dict[str, Any]) -> DocumentReference:
        props = (node.get("data") or {}).get("properties") or {}
        node_id = str(props.get("id") or node.get("id"))
        name = props.get("name") or f"Document_{node_id}"
        return DocumentReference(
            id=node_id,
            name=name,
            source_type=infer_document_type(name),
            size_bytes=int(props.get("size") or 0),
            mime_type=props.get("mime_type") or "application/pdf",
            created_at=parse_timestamp(props.get("create_date")) or utc_now(),
            modified_at=parse_timestamp(props.get("modify_date")) or utc_now(),
            employee_id=extract_employee_id(name),
            department=self._department(props),
            url=f"{self._base_url}/api/v2/nodes/{node_id}/content",
            version=int(props.get("version_number") or 1),
        )

    @staticmethod
    def _department(props: dict[str, Any]) -> str | None:
        if props.get("department"):
            return str(props["department"])
        custom = props.get("custom_attributes") or {}
        value = custom.get("department") if isinstance(custom, dict) else None
        return str(value) if value else None

    @staticmethod
    def _to_metadata(document_id: str, data: dict[str, Any]) -> DocumentMetadata:
        props = (data.get("data") or {}).get("properties") or {}
        name = props.get("name") or ""
        return DocumentMetadata(
            document_id=str(props.get("id") or document_id),
            document_type=infer_document_type(name),
            name=name,
            size_bytes=int(props.get("size") or 0),
            mime_type=props.get("mime_type") or "application/pdf",
            created_at=parse_timestamp(props.get("create_date")),
            modified_at=parse_timestamp(props.get("modify_date")),
            created_by=_optional_str(props.get("create_user_id")),
            modified_by=_optional_str(props.get("modify_user_id")),
            version=int(props.get("version_number") or 1),
            categories=list(props.get("categories") or []),
            custom_attributes=dict(props.get("custom_attributes") or {}),
        )


def _optional_str(value: object) -> str | None:
    return None if value is None else str(value)
