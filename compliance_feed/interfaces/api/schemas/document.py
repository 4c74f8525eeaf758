"""Pydantic models for the document status polling endpoints."""

from __future__ import annotations

from pydantic import BaseModel, Field

from compliance_feed.domain.entities import DocumentStatus


class DocumentStatusEntry(BaseModel):
    """One document of a snapshot supplied by the client."""

    document_id: str = Field(..., min_length=1)
    verification_status: str | None = None
    name: str = ""

    def to_entity(self) -> DocumentStatus:
        return DocumentStatus(
            document_id=self.document_id,
            verification_status=self.verification_status,
            name=self.name,
        )


class PollingStartRequest(BaseModel):
    """Optional snapshot the client already holds when it requests polling."""

    baseline: list[DocumentStatusEntry] | None = None


class PollingStatusRead(BaseModel):
    state: str
    started: bool | None = None


__all__ = ["DocumentStatusEntry", "PollingStartRequest", "PollingStatusRead"]
