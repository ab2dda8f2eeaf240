"""Resource models for the sign client."""

from .base import Resource, Snapshot, WireObject, register_resource, resource_class
from .enums import (
    SignatureColor,
    SignerDecisionType,
    SignerRole,
    SignRequestStatus,
    WireEnum,
)
from .file import File, FileSnapshot, FileVersion
from .folder import Folder, FolderSnapshot
from .params import OptionalParams
from .sign_request import (
    SignerDecision,
    SignRequest,
    SignRequestCreateParams,
    SignRequestFile,
    SignRequestPrefillTag,
    SignRequestRequiredAttachment,
    SignRequestSigner,
    SignRequestSignFiles,
    SignRequestSnapshot,
)

__all__ = [
    # Framework
    "Resource",
    "Snapshot",
    "WireObject",
    "OptionalParams",
    "register_resource",
    "resource_class",
    # Enums
    "WireEnum",
    "SignRequestStatus",
    "SignatureColor",
    "SignerRole",
    "SignerDecisionType",
    # Files and folders
    "File",
    "FileSnapshot",
    "FileVersion",
    "Folder",
    "FolderSnapshot",
    # Sign requests
    "SignRequest",
    "SignRequestSnapshot",
    "SignRequestCreateParams",
    "SignRequestFile",
    "SignRequestSigner",
    "SignerDecision",
    "SignRequestRequiredAttachment",
    "SignRequestPrefillTag",
    "SignRequestSignFiles",
]
