"""Client-side resource model for a remote e-signature API."""

from .clients.connection import APIResponse, Connection, RequestsConnection
from .config.app import ClientConfig
from .models import (
    File,
    Folder,
    SignRequest,
    SignRequestCreateParams,
    SignRequestFile,
    SignRequestSigner,
    SignRequestStatus,
)
from .pagination.iterator import PagedIterator, PageFormat

__all__ = [
    "APIResponse",
    "ClientConfig",
    "Connection",
    "RequestsConnection",
    "File",
    "Folder",
    "SignRequest",
    "SignRequestCreateParams",
    "SignRequestFile",
    "SignRequestSigner",
    "SignRequestStatus",
    "PagedIterator",
    "PageFormat",
]
