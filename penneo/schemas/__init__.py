"""Entity schemas."""

from penneo.schemas.entity import Entity
from penneo.schemas.penneo import (
    CaseFile,
    Document,
    Folder,
    SignatureLine,
    Signer,
    SigningRequest,
)

__all__ = [
    "CaseFile",
    "Document",
    "Entity",
    "Folder",
    "SignatureLine",
    "Signer",
    "SigningRequest",
]
