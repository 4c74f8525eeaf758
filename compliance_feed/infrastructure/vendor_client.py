"""Client for the marketplace API serving vendor profiles and documents."""

from __future__ import annotations

import logging
import math
from typing import Any, Protocol

import httpx

from compliance_feed.config import get_settings
from compliance_feed.domain.entities import (
    SessionContext,
    UploadedDocument,
    VendorDocument,
    VendorProfile,
)
from compliance_feed.utils import parse_iso_datetime

logger = logging.getLogger(__name__)

PROFILE_PATH = "/vendor/profile"
DOCUMENTS_PATH = "/document/vendor-documents"


class VendorServiceError(RuntimeError):
    """Raised when the vendor API cannot be reached or returns an error."""


class VendorDirectory(Protocol):
    """Read-only source of vendor compliance data."""

    async def fetch_vendor_profile(self, context: SessionContext) -> VendorProfile:
        ...

    async def fetch_vendor_documents(
        self, context: SessionContext
    ) -> list[VendorDocument]:
        ...


class VendorApiClient:
    """HTTP implementation of :class:`VendorDirectory`."""

    def __init__(
        self,
        base_url: str | None = None,
        *,
        timeout: float | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        settings = get_settings()
        self.base_url = (base_url or settings.vendor_api_base_url).rstrip("/")
        self.timeout = timeout if timeout is not None else settings.vendor_api_timeout_seconds
        self._transport = transport

    async def fetch_vendor_profile(self, context: SessionContext) -> VendorProfile:
        body = await self._get_json(PROFILE_PATH, context)
        data = body.get("data")
        vendor = data.get("vendor") if isinstance(data, dict) else None
        if not isinstance(vendor, dict):
            raise VendorServiceError("Vendor profile response has no vendor")
        try:
            score = float(vendor.get("overallComplianceScore") or 0)
        except (TypeError, ValueError) as exc:
            raise VendorServiceError("Vendor profile has an invalid compliance score") from exc
        if not math.isfinite(score):
            raise VendorServiceError("Vendor profile has an invalid compliance score")
        return VendorProfile(overall_compliance_score=score)

    async def fetch_vendor_documents(
        self, context: SessionContext
    ) -> list[VendorDocument]:
        body = await self._get_json(DOCUMENTS_PATH, context)
        documents = body.get("documents") or []
        if not isinstance(documents, list):
            raise VendorServiceError("Vendor documents response is not a list")
        try:
            return [
                parse_vendor_document(item)
                for item in documents
                if isinstance(item, dict)
            ]
        except (TypeError, AttributeError, ValueError) as exc:
            logger.warning("Malformed vendor document payload: %s", exc)
            raise VendorServiceError("Vendor documents response is malformed") from exc

    async def _get_json(self, path: str, context: SessionContext) -> dict[str, Any]:
        headers = {"Accept": "application/json"}
        if context.access_token:
            headers["Authorization"] = f"Bearer {context.access_token}"

        url = f"{self.base_url}{path}"
        try:
            async with httpx.AsyncClient(
                timeout=self.timeout, transport=self._transport
            ) as client:
                response = await client.get(url, headers=headers)
                response.raise_for_status()
                body = response.json()
        except httpx.TimeoutException as exc:
            logger.warning("Vendor API timeout on %s", path)
            raise VendorServiceError(f"Vendor API timeout on {path}") from exc
        except httpx.HTTPStatusError as exc:
            logger.warning(
                "Vendor API error %s on %s", exc.response.status_code, path
            )
            raise VendorServiceError(
                f"Vendor API error {exc.response.status_code} on {path}"
            ) from exc
        except (httpx.HTTPError, ValueError) as exc:
            logger.warning("Vendor API request to %s failed: %s", path, exc)
            raise VendorServiceError(f"Vendor API request to {path} failed") from exc

        if not isinstance(body, dict):
            raise VendorServiceError(f"Unexpected payload from {path}")
        return body


def parse_vendor_document(data: dict[str, Any]) -> VendorDocument:
    """Convert one entry of the documents endpoint into a :class:`VendorDocument`."""

    uploads = data.get("uploadedDocuments") or []
    return VendorDocument(
        id=str(data.get("id")),
        name=str(data.get("name") or ""),
        uploaded_documents=tuple(
            UploadedDocument(
                verification_status=upload.get("verificationStatus"),
                uploaded_at=parse_iso_datetime(upload.get("uploadedAt")),
            )
            for upload in uploads
            if isinstance(upload, dict)
        ),
    )


__all__ = [
    "VendorApiClient",
    "VendorDirectory",
    "VendorServiceError",
    "parse_vendor_document",
]
