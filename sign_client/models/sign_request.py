"""Sign request resource.

Sign requests are used to prepare documents for signing and send them to
signers. Their status changes only through server-side events; the client
observes it with fetch and list.
"""

from datetime import date, datetime
from typing import Any, ClassVar, Dict, List, Optional, Sequence, Tuple, Union

from aws_lambda_powertools.logging import Logger
from pydantic import BaseModel, Field

from ..clients.connection import Connection, send_json_request, send_request
from ..exceptions import CallerContractError
from ..pagination.iterator import PagedIterator
from ..utils.url_template import QueryStringBuilder, URLTemplate
from .base import Resource, Snapshot, WireObject, as_resource, register_resource
from .enums import SignatureColor, SignerDecisionType, SignerRole, SignRequestStatus
from .fields import (
    FieldConverter,
    as_boolean,
    as_date,
    as_enum,
    as_integer,
    as_list,
    as_object,
    as_string,
    as_timestamp,
)
from .params import OptionalParams

logger = Logger()

RESEND_ACCEPTED = 202


class SignerDecision(WireObject):
    """Final decision of a signer."""

    field_converters: ClassVar[Dict[str, FieldConverter]] = {
        "type": as_enum(SignerDecisionType),
        "finalized_at": as_timestamp,
    }

    type: Optional[SignerDecisionType] = None
    finalized_at: Optional[datetime] = None


class SignRequestSigner(WireObject):
    """A signer of a sign request.

    Built by the caller for create requests, and parsed from responses, where
    the server adds viewing and decision details.
    """

    field_converters: ClassVar[Dict[str, FieldConverter]] = {
        "email": as_string,
        "role": as_enum(SignerRole),
        "is_in_person": as_boolean,
        "order": as_integer,
        "embed_url_external_user_id": as_string,
        "redirect_url": as_string,
        "declined_redirect_url": as_string,
        "has_viewed_document": as_boolean,
        "signer_decision": as_object(SignerDecision),
        "embed_url": as_string,
    }

    email: Optional[str] = Field(None, description="Email address of the signer")
    role: Optional[SignerRole] = Field(None, description="Role of the signer")
    is_in_person: Optional[bool] = Field(None, description="Signs in person")
    order: Optional[int] = Field(None, description="Signing order")
    embed_url_external_user_id: Optional[str] = Field(
        None, description="External user ID for embedded signing"
    )
    redirect_url: Optional[str] = Field(None, description="Redirect after signing")
    declined_redirect_url: Optional[str] = Field(
        None, description="Redirect after declining"
    )
    has_viewed_document: Optional[bool] = Field(
        None, description="Whether the signer opened the document"
    )
    signer_decision: Optional[SignerDecision] = Field(
        None, description="Final decision of the signer"
    )
    embed_url: Optional[str] = Field(None, description="URL for embedded signing")


class SignRequestRequiredAttachment(WireObject):
    """An attachment signers are required to upload."""

    field_converters: ClassVar[Dict[str, FieldConverter]] = {
        "name": as_string,
        "description": as_string,
    }

    name: Optional[str] = None
    description: Optional[str] = None


class SignRequestPrefillTag(WireObject):
    """A value filled into a document tag before signing."""

    field_converters: ClassVar[Dict[str, FieldConverter]] = {
        "document_tag_id": as_string,
        "text_value": as_string,
        "checkbox_value": as_boolean,
        "date_value": as_date,
    }

    document_tag_id: Optional[str] = None
    text_value: Optional[str] = None
    checkbox_value: Optional[bool] = None
    date_value: Optional[date] = None


class SignRequestSignFiles(WireObject):
    """Copies of the source files that signing events occur on."""

    field_converters: ClassVar[Dict[str, FieldConverter]] = {
        "files": as_list(as_resource("file")),
        "is_ready_for_download": as_boolean,
    }

    files: Optional[Tuple[Snapshot, ...]] = Field(None, description="File snapshots")
    is_ready_for_download: Optional[bool] = Field(
        None, description="False while a change to the document is processing"
    )


class SignRequestFile(BaseModel):
    """Source file reference sent when creating a sign request."""

    file_id: str = Field(..., min_length=1, description="ID of the file")
    file_version_id: Optional[str] = Field(
        None, description="Specific version of the file"
    )

    def to_json(self) -> Dict[str, Any]:
        document: Dict[str, Any] = {"id": self.file_id, "type": "file"}
        if self.file_version_id is not None:
            document["file_version"] = {
                "id": self.file_version_id,
                "type": "file_version",
            }
        return document


class SignRequestSnapshot(Snapshot):
    """Information about a sign request."""

    field_converters: ClassVar[Dict[str, FieldConverter]] = {
        "is_document_preparation_needed": as_boolean,
        "redirect_url": as_string,
        "declined_redirect_url": as_string,
        "required_attachments": as_list(as_object(SignRequestRequiredAttachment)),
        "are_attachments_enabled": as_boolean,
        "are_text_signatures_enabled": as_boolean,
        "is_text_enabled": as_boolean,
        "are_dates_enabled": as_boolean,
        "are_emails_disabled": as_boolean,
        "signature_color": as_enum(SignatureColor),
        "is_phone_verification_required_to_view": as_boolean,
        "email_subject": as_string,
        "email_message": as_string,
        "are_reminders_enabled": as_boolean,
        "signers": as_list(as_object(SignRequestSigner)),
        "source_files": as_list(as_resource("file")),
        "parent_folder": as_resource("folder"),
        "name": as_string,
        "prefill_tags": as_list(as_object(SignRequestPrefillTag)),
        "days_valid": as_integer,
        "external_id": as_string,
        "prepare_url": as_string,
        "signing_log": as_resource("file"),
        "status": as_enum(SignRequestStatus),
        "sign_files": as_object(SignRequestSignFiles),
        "auto_expire_at": as_timestamp,
        "created_at": as_timestamp,
        "updated_at": as_timestamp,
    }

    is_document_preparation_needed: Optional[bool] = None
    redirect_url: Optional[str] = None
    declined_redirect_url: Optional[str] = None
    required_attachments: Optional[Tuple[SignRequestRequiredAttachment, ...]] = None
    are_attachments_enabled: Optional[bool] = None
    are_text_signatures_enabled: Optional[bool] = None
    is_text_enabled: Optional[bool] = None
    are_dates_enabled: Optional[bool] = None
    are_emails_disabled: Optional[bool] = None
    signature_color: Optional[SignatureColor] = None
    is_phone_verification_required_to_view: Optional[bool] = None
    email_subject: Optional[str] = None
    email_message: Optional[str] = None
    are_reminders_enabled: Optional[bool] = None
    signers: Optional[Tuple[SignRequestSigner, ...]] = None
    source_files: Optional[Tuple[Snapshot, ...]] = None
    parent_folder: Optional[Snapshot] = None
    name: Optional[str] = None
    prefill_tags: Optional[Tuple[SignRequestPrefillTag, ...]] = None
    days_valid: Optional[int] = None
    external_id: Optional[str] = None
    prepare_url: Optional[str] = None
    signing_log: Optional[Snapshot] = None
    status: Optional[SignRequestStatus] = None
    sign_files: Optional[SignRequestSignFiles] = None
    auto_expire_at: Optional[datetime] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class SignRequestCreateParams(OptionalParams):
    """Optional fields for creating a sign request.

    Example:
        >>> params = SignRequestCreateParams(name="Contract").set(are_reminders_enabled=False)
    """

    is_document_preparation_needed: Optional[bool] = None
    redirect_url: Optional[str] = None
    declined_redirect_url: Optional[str] = None
    are_attachments_enabled: Optional[bool] = None
    are_text_signatures_enabled: Optional[bool] = None
    is_text_enabled: Optional[bool] = None
    are_dates_enabled: Optional[bool] = None
    are_emails_disabled: Optional[bool] = None
    signature_color: Optional[SignatureColor] = None
    is_phone_verification_required_to_view: Optional[bool] = None
    email_subject: Optional[str] = None
    email_message: Optional[str] = None
    are_reminders_enabled: Optional[bool] = None
    name: Optional[str] = None
    days_valid: Optional[int] = None
    external_id: Optional[str] = None
    required_attachments: Optional[List[SignRequestRequiredAttachment]] = None
    prefill_tags: Optional[List[SignRequestPrefillTag]] = None


@register_resource
class SignRequest(Resource):
    """A sign request, addressable by ID."""

    __slots__ = ()

    resource_type = "sign_request"
    snapshot_class = SignRequestSnapshot

    SIGN_REQUESTS_URL_TEMPLATE = URLTemplate("sign_requests")
    SIGN_REQUEST_URL_TEMPLATE = URLTemplate("sign_requests/%s")
    SIGN_REQUEST_CANCEL_URL_TEMPLATE = URLTemplate("sign_requests/%s/cancel")
    SIGN_REQUEST_RESEND_URL_TEMPLATE = URLTemplate("sign_requests/%s/resend")
    DEFAULT_LIMIT = 100

    item_url_template = SIGN_REQUEST_URL_TEMPLATE

    @classmethod
    def create(
        cls,
        connection: Connection,
        signers: Sequence[SignRequestSigner],
        source_files: Sequence[Union[SignRequestFile, str]],
        parent_folder_id: str,
        params: Optional[SignRequestCreateParams] = None,
    ) -> SignRequestSnapshot:
        """Create a new sign request.

        Args:
            connection: Connection used to reach the API
            signers: Signers of the request
            source_files: Files (or file IDs) to build the signing document from
            parent_folder_id: Folder to place sign request specific data in
            params: Optional fields

        Returns:
            Snapshot of the created sign request, bound to its new handle

        Raises:
            CallerContractError: If signers, source files or folder are missing
            TransportError: If the request fails
            DeserializationError: If the response cannot be parsed
        """
        if not signers:
            raise CallerContractError("A sign request needs at least one signer")
        if not source_files:
            raise CallerContractError("A sign request needs at least one source file")
        if not parent_folder_id:
            raise CallerContractError("A sign request needs a parent folder ID")

        document: Dict[str, Any] = {
            "signers": [signer.to_json() for signer in signers],
            "source_files": [
                SignRequestFile(file_id=source).to_json()
                if isinstance(source, str)
                else source.to_json()
                for source in source_files
            ],
            "parent_folder": {"id": parent_folder_id, "type": "folder"},
        }
        if params is not None:
            params.serialize_into(document)

        url = cls.SIGN_REQUESTS_URL_TEMPLATE.build(connection.base_url)
        response = send_json_request(connection, "POST", url, document)
        snapshot = cls.from_json(connection, response)
        logger.info("Created sign request", extra={"sign_request_id": snapshot.resource.id})
        return snapshot  # type: ignore

    def fetch(self, *fields: str) -> SignRequestSnapshot:
        """Return information about this sign request.

        Args:
            *fields: Optional wire field names to retrieve
        """
        return super().fetch(*fields)  # type: ignore

    def cancel(self) -> SignRequestSnapshot:
        """Cancel this sign request.

        The server decides whether the cancellation is accepted; a rejection
        surfaces as TransportError.

        Returns:
            Snapshot returned by the server
        """
        url = self.SIGN_REQUEST_CANCEL_URL_TEMPLATE.build(
            self.connection.base_url, self.id
        )
        document = send_json_request(self.connection, "POST", url)
        return self.snapshot_from_json(document)  # type: ignore

    def resend(self) -> bool:
        """Resend the request to all signers that have not signed yet.

        There is a 10 minute cooling-off period between emails.

        Returns:
            True if the server accepted the resend (HTTP 202), otherwise False
        """
        url = self.SIGN_REQUEST_RESEND_URL_TEMPLATE.build(
            self.connection.base_url, self.id
        )
        response = send_request(self.connection, "POST", url)
        if response.status_code == RESEND_ACCEPTED:
            return True
        logger.warning(
            "Resend was not accepted",
            extra={
                "sign_request_id": self.id,
                "status_code": response.status_code,
                "body": response.body.decode("utf-8", errors="replace"),
            },
        )
        return False

    @classmethod
    def list(
        cls, connection: Connection, *fields: str, limit: Optional[int] = None
    ) -> PagedIterator[SignRequestSnapshot]:
        """Iterate over all sign requests.

        Args:
            connection: Connection used to reach the API
            *fields: Optional wire field names to retrieve
            limit: Number of entries per page; defaults to the connection's
                page_limit, or DEFAULT_LIMIT when it has none

        Returns:
            Lazy iterator of sign request snapshots
        """
        if limit is None:
            limit = getattr(connection, "page_limit", cls.DEFAULT_LIMIT)
        query = QueryStringBuilder()
        if fields:
            query.append_param("fields", list(fields))
        url = cls.SIGN_REQUESTS_URL_TEMPLATE.build_with_query(
            connection.base_url, query.to_string()
        )
        return PagedIterator(
            connection,
            url,
            limit,
            lambda document: cls.from_json(connection, document),
        )
