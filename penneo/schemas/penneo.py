"""Penneo API entities."""

from __future__ import annotations

import base64
from datetime import datetime
from typing import TYPE_CHECKING, Any, ClassVar

from pydantic import Field

from penneo.schemas.entity import Entity

if TYPE_CHECKING:
    from penneo.connector.ports import Connector


# ------------------------------------------------------------------
# Case files
# ------------------------------------------------------------------

class CaseFile(Entity):
    """A signing case grouping documents and signers."""

    sendable_fields: ClassVar[tuple[str, ...]] = (
        "title",
        "meta_data",
        "send_at",
        "expire_at",
        "visibility_mode",
        "sensitive_data",
        "language",
        "reference",
        "case_file_type_id",
    )

    title: str | None = Field(default=None, description="Case file title")
    meta_data: str | None = Field(default=None, description="Free-form metadata for integrators")
    send_at: datetime | None = Field(default=None, description="Scheduled send time")
    expire_at: datetime | None = Field(default=None, description="Signing deadline")
    visibility_mode: int | None = Field(default=None, description="Who may see other signers")
    sensitive_data: bool | None = Field(default=None, description="Hide content in notifications")
    language: str | None = Field(default=None, description="Language code for emails")
    reference: str | None = Field(default=None, description="External reference")
    case_file_type_id: int | None = Field(default=None, description="Case file type")
    status: int | None = Field(default=None, description="Server-side workflow status")
    sign_iteration: int | None = Field(default=None, description="Current signing round")
    created: datetime | None = Field(default=None, description="Creation timestamp")
    activated: datetime | None = Field(default=None, description="Activation timestamp")

    def send(self, connector: Connector) -> bool:
        return connector.perform_action(self, "send")

    def activate(self, connector: Connector) -> bool:
        return connector.perform_action(self, "activate")

    def get_documents(self, connector: Connector) -> list[Document]:
        return connector.get_linked_entities(self, Document)

    def get_signers(self, connector: Connector) -> list[Signer]:
        return connector.get_linked_entities(self, Signer)


# ------------------------------------------------------------------
# Documents
# ------------------------------------------------------------------

class Document(Entity):
    """A PDF attached to a case file."""

    sendable_fields: ClassVar[tuple[str, ...]] = (
        "title",
        "meta_data",
        "case_file_id",
        "type",
        "pdf_file",
        "opts",
    )

    title: str | None = Field(default=None, description="Document title")
    meta_data: str | None = Field(default=None, description="Free-form metadata for integrators")
    case_file_id: int | None = Field(default=None, description="Owning case file")
    type: str | None = Field(default=None, description="'signable' or 'attachment'")
    pdf_file: str | None = Field(default=None, description="Base64 encoded PDF content")
    opts: dict[str, Any] | None = Field(default=None, description="Document options")
    document_id: str | None = Field(default=None, description="Public document identifier")
    status: int | None = Field(default=None, description="Server-side document status")
    created: datetime | None = Field(default=None, description="Creation timestamp")
    modified: datetime | None = Field(default=None, description="Last modification timestamp")
    completed: datetime | None = Field(default=None, description="Completion timestamp")

    def set_pdf(self, content: bytes) -> None:
        self.pdf_file = base64.b64encode(content).decode("ascii")

    def get_pdf(self, connector: Connector) -> bytes:
        return connector.get_file_assets(self, "pdf")


# ------------------------------------------------------------------
# Signers
# ------------------------------------------------------------------

class Signer(Entity):
    """A person who signs documents in a case file."""

    sendable_fields: ClassVar[tuple[str, ...]] = (
        "name",
        "social_security_number_plain",
        "vatin",
        "on_behalf_of",
        "store_as_contact",
    )

    name: str | None = Field(default=None, description="Signer display name")
    social_security_number_plain: str | None = Field(default=None, description="National id")
    vatin: str | None = Field(default=None, description="VAT identification number")
    on_behalf_of: str | None = Field(default=None, description="Company represented")
    store_as_contact: bool | None = Field(default=None, description="Save signer as contact")

    def get_signing_request(self, connector: Connector) -> SigningRequest | None:
        requests = connector.get_linked_entities(self, SigningRequest)
        return requests[0] if requests else None


class SigningRequest(Entity):
    """Delivery settings and state of the request sent to a signer."""

    sendable_fields: ClassVar[tuple[str, ...]] = (
        "email",
        "email_subject",
        "email_text",
        "reminder_interval",
        "access_control",
        "success_url",
        "fail_url",
    )

    email: str | None = Field(default=None, description="Recipient address")
    email_subject: str | None = Field(default=None, description="Invitation subject")
    email_text: str | None = Field(default=None, description="Invitation body")
    reminder_interval: int | None = Field(default=None, description="Days between reminders")
    access_control: bool | None = Field(default=None, description="Require identification")
    success_url: str | None = Field(default=None, description="Redirect after signing")
    fail_url: str | None = Field(default=None, description="Redirect after rejection")
    status: int | None = Field(default=None, description="Server-side request status")

    def get_link(self, connector: Connector) -> str:
        return connector.get_text_assets(self, "link")


class SignatureLine(Entity):
    """A signature slot on a document, optionally bound to a signer."""

    sendable_fields: ClassVar[tuple[str, ...]] = ("role", "conditions", "sign_order")

    role: str | None = Field(default=None, description="Role printed under the signature")
    conditions: str | None = Field(default=None, description="Conditions of signing")
    sign_order: int | None = Field(default=None, description="Signing round")
    signed_at: datetime | None = Field(default=None, description="Signature timestamp")

    def set_signer(self, connector: Connector, signer: Signer) -> bool:
        return connector.link_entity(self, signer)


# ------------------------------------------------------------------
# Folders
# ------------------------------------------------------------------

class Folder(Entity):
    """A named group of case files."""

    sendable_fields: ClassVar[tuple[str, ...]] = ("title",)

    title: str | None = Field(default=None, description="Folder title")

    def add_case_file(self, connector: Connector, case_file: CaseFile) -> bool:
        return connector.link_entity(self, case_file)

    def remove_case_file(self, connector: Connector, case_file: CaseFile) -> bool:
        return connector.unlink_entity(self, case_file)

    def get_case_files(self, connector: Connector) -> list[CaseFile]:
        return connector.get_linked_entities(self, CaseFile)


DEFAULT_RESOURCES: dict[type[Entity], str] = {
    CaseFile: "casefiles",
    Document: "documents",
    Signer: "signers",
    SigningRequest: "signingrequests",
    SignatureLine: "signaturelines",
    Folder: "folders",
}

DEFAULT_NESTED_RESOURCES: dict[tuple[type[Entity], type[Entity]], str] = {
    (CaseFile, Document): "documents",
    (CaseFile, Signer): "signers",
    (Document, SignatureLine): "signaturelines",
    (Signer, SigningRequest): "signingrequests",
    (SignatureLine, Signer): "signers",
    (Folder, CaseFile): "casefiles",
}


__all__ = [
    "DEFAULT_NESTED_RESOURCES",
    "DEFAULT_RESOURCES",
    "CaseFile",
    "Document",
    "Folder",
    "SignatureLine",
    "Signer",
    "SigningRequest",
]
