"""Domain entities describing vendor compliance documents as observed remotely."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime

VERIFICATION_STATUS_PENDING = "PENDING"
VERIFICATION_STATUS_PENDING_MANUAL_REVIEW = "PENDING_MANUAL_REVIEW"
VERIFICATION_STATUS_VERIFIED = "VERIFIED"
VERIFICATION_STATUS_REJECTED = "REJECTED"

NON_TERMINAL_STATUSES = frozenset(
    {VERIFICATION_STATUS_PENDING, VERIFICATION_STATUS_PENDING_MANUAL_REVIEW}
)


@dataclass(frozen=True)
class UploadedDocument:
    """One upload of a compliance document and its verification outcome."""

    verification_status: str | None
    uploaded_at: datetime | None = None


@dataclass(frozen=True)
class VendorDocument:
    """Compliance document requirement together with its uploads."""

    id: str
    name: str
    uploaded_documents: tuple[UploadedDocument, ...] = field(default_factory=tuple)

    @property
    def current_status(self) -> str | None:
        """Status of the most recent upload, or ``None`` when nothing was uploaded."""

        if not self.uploaded_documents:
            return None
        dated = [upload for upload in self.uploaded_documents if upload.uploaded_at]
        if dated:
            return max(dated, key=lambda upload: upload.uploaded_at).verification_status
        return self.uploaded_documents[0].verification_status

    def has_upload_with_status(self, *statuses: str) -> bool:
        return any(
            upload.verification_status in statuses for upload in self.uploaded_documents
        )


@dataclass(frozen=True)
class VendorProfile:
    """Subset of the vendor profile the notification engine reads."""

    overall_compliance_score: float


@dataclass(frozen=True)
class DocumentStatus:
    """Snapshot entry pairing a document with its verification status."""

    document_id: str
    verification_status: str | None
    name: str = ""

    @property
    def is_pending(self) -> bool:
        return self.verification_status in NON_TERMINAL_STATUSES


@dataclass(frozen=True)
class StatusTransition:
    """Verification status change detected between two snapshots."""

    document_id: str
    name: str
    previous_status: str | None
    new_status: str | None


def build_snapshot(documents: list[VendorDocument]) -> list[DocumentStatus]:
    """Reduce ``documents`` to the snapshot consumed by the status detector."""

    return [
        DocumentStatus(
            document_id=document.id,
            verification_status=document.current_status,
            name=document.name,
        )
        for document in documents
    ]


__all__ = [
    "DocumentStatus",
    "NON_TERMINAL_STATUSES",
    "StatusTransition",
    "UploadedDocument",
    "VERIFICATION_STATUS_PENDING",
    "VERIFICATION_STATUS_PENDING_MANUAL_REVIEW",
    "VERIFICATION_STATUS_REJECTED",
    "VERIFICATION_STATUS_VERIFIED",
    "VendorDocument",
    "VendorProfile",
    "build_snapshot",
]
