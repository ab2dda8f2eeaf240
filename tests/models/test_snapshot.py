"""Unit tests for snapshot parsing and nested resource references."""

import unittest
from datetime import datetime, timedelta, timezone
from unittest.mock import MagicMock

from sign_client.clients.connection import RequestsConnection
from sign_client.exceptions import CallerContractError, DeserializationError
from sign_client.models import (
    File,
    FileSnapshot,
    Folder,
    FolderSnapshot,
    SignRequest,
    SignRequestSigner,
    SignRequestSnapshot,
    SignRequestStatus,
)
from sign_client.models.base import Resource, resource_class
from sign_client.models.enums import SignatureColor, SignerRole


def sign_request_document():
    return {
        "type": "sign-request",
        "id": "SR1",
        "is_document_preparation_needed": False,
        "are_reminders_enabled": True,
        "signature_color": "blue",
        "name": "Contract.pdf",
        "days_valid": 10,
        "status": "sent",
        "created_at": "2021-04-26T08:12:13-07:00",
        "auto_expire_at": "2021-05-06T15:12:13Z",
        "parent_folder": {"id": "F1", "type": "folder", "name": "Signed"},
        "source_files": [
            {"id": "FI1", "type": "file", "name": "a.pdf", "parent": {"id": "F0", "type": "folder"}},
            {"id": "FI2", "type": "file", "name": "b.pdf"},
        ],
        "signers": [
            {
                "email": "signer@example.com",
                "role": "signer",
                "has_viewed_document": True,
                "signer_decision": {
                    "type": "signed",
                    "finalized_at": "2021-04-27T08:00:00+00:00",
                },
            }
        ],
        "sign_files": {
            "files": [{"id": "FI3", "type": "file"}],
            "is_ready_for_download": True,
        },
        "prefill_tags": [{"document_tag_id": "T1", "date_value": "2021-04-26"}],
    }


class TestSnapshotParsing(unittest.TestCase):
    """Test cases for the JSON snapshot parser."""

    def setUp(self):
        """Set up test fixtures."""
        self.connection = MagicMock(spec=RequestsConnection)
        self.connection.base_url = "https://api.example.com/2.0"

    def test_from_json_builds_handle_and_snapshot(self):
        """Test the handle takes the document ID and the parser's connection."""
        snapshot = SignRequest.from_json(self.connection, sign_request_document())

        self.assertIsInstance(snapshot, SignRequestSnapshot)
        self.assertEqual(SignRequest(self.connection, "SR1"), snapshot.resource)
        self.assertIs(self.connection, snapshot.resource.connection)
        self.assertEqual("SR1", snapshot.id)

    def test_scalar_fields(self):
        """Test booleans, strings, integers, enums and timestamps."""
        snapshot = SignRequest.from_json(self.connection, sign_request_document())

        self.assertIs(False, snapshot.is_document_preparation_needed)
        self.assertIs(True, snapshot.are_reminders_enabled)
        self.assertEqual(SignatureColor.BLUE, snapshot.signature_color)
        self.assertEqual("Contract.pdf", snapshot.name)
        self.assertEqual(10, snapshot.days_valid)
        self.assertEqual(SignRequestStatus.SENT, snapshot.status)
        self.assertEqual(
            datetime(2021, 4, 26, 8, 12, 13, tzinfo=timezone(timedelta(hours=-7))),
            snapshot.created_at,
        )
        self.assertEqual(
            datetime(2021, 5, 6, 15, 12, 13, tzinfo=timezone.utc),
            snapshot.auto_expire_at,
        )

    def test_nested_parent_folder(self):
        """Test a nested folder gets its own handle on the same connection."""
        snapshot = SignRequest.from_json(self.connection, sign_request_document())

        folder = snapshot.parent_folder
        self.assertIsInstance(folder, FolderSnapshot)
        self.assertIsInstance(folder.resource, Folder)
        self.assertEqual("F1", folder.resource.id)
        self.assertIs(self.connection, folder.resource.connection)
        self.assertEqual("Signed", folder.name)

    def test_nested_file_list_with_folder_inside(self):
        """Test file references parse with their own nested parent folder."""
        snapshot = SignRequest.from_json(self.connection, sign_request_document())

        files = snapshot.source_files
        self.assertEqual(["FI1", "FI2"], [file.resource.id for file in files])
        self.assertTrue(all(isinstance(file, FileSnapshot) for file in files))
        self.assertEqual(Folder(self.connection, "F0"), files[0].parent.resource)
        self.assertIsNone(files[1].parent)
        self.assertFalse(files[1].is_set("parent"))

    def test_value_objects(self):
        """Test signers, decisions, sign files and prefill tags."""
        snapshot = SignRequest.from_json(self.connection, sign_request_document())

        signer = snapshot.signers[0]
        self.assertIsInstance(signer, SignRequestSigner)
        self.assertEqual(SignerRole.SIGNER, signer.role)
        self.assertTrue(signer.has_viewed_document)
        self.assertEqual("signed", signer.signer_decision.type.to_wire())
        self.assertEqual(File(self.connection, "FI3"), snapshot.sign_files.files[0].resource)
        self.assertTrue(snapshot.sign_files.is_ready_for_download)
        self.assertEqual("2021-04-26", snapshot.prefill_tags[0].date_value.isoformat())

    def test_parse_is_idempotent(self):
        """Test parsing the same document twice yields equal snapshots."""
        first = SignRequest.from_json(self.connection, sign_request_document())
        second = SignRequest.from_json(self.connection, sign_request_document())

        self.assertEqual(first, second)

    def test_unknown_field_is_ignored(self):
        """Test undocumented members parse and land only in the extra bag."""
        document = sign_request_document()
        document["brand_new_field"] = {"nested": [1, 2]}

        snapshot = SignRequest.from_json(self.connection, document)

        self.assertFalse(hasattr(snapshot, "brand_new_field"))
        self.assertEqual({"nested": [1, 2]}, snapshot.extra["brand_new_field"])
        self.assertNotIn("brand_new_field", snapshot.fields_set)

    def test_boolean_given_as_string_fails(self):
        """Test a known field with the wrong JSON kind names the field."""
        document = sign_request_document()
        document["are_reminders_enabled"] = "true"

        with self.assertRaises(DeserializationError) as context:
            SignRequest.from_json(self.connection, document)

        error = context.exception
        self.assertEqual("are_reminders_enabled", error.field_name)
        self.assertEqual('"true"', error.raw_value)
        self.assertIsInstance(error.cause, TypeError)
        self.assertIn("are_reminders_enabled", str(error))

    def test_integer_given_as_boolean_fails(self):
        """Test booleans are not accepted as integers."""
        document = sign_request_document()
        document["days_valid"] = True

        with self.assertRaises(DeserializationError) as context:
            SignRequest.from_json(self.connection, document)

        self.assertEqual("days_valid", context.exception.field_name)

    def test_unknown_enum_value_fails(self):
        """Test enum values outside the closed set fail deserialization."""
        document = sign_request_document()
        document["status"] = "archived"

        with self.assertRaises(DeserializationError) as context:
            SignRequest.from_json(self.connection, document)

        self.assertEqual("status", context.exception.field_name)
        self.assertIsInstance(context.exception.cause, ValueError)

    def test_malformed_timestamp_fails(self):
        """Test timestamp parse failures are field errors."""
        document = sign_request_document()
        document["created_at"] = "26/04/2021"

        with self.assertRaises(DeserializationError) as context:
            SignRequest.from_json(self.connection, document)

        self.assertEqual("created_at", context.exception.field_name)

    def test_nested_failure_names_path(self):
        """Test failures inside nested documents report a dotted path."""
        document = sign_request_document()
        document["source_files"][1]["size"] = "big"

        with self.assertRaises(DeserializationError) as context:
            SignRequest.from_json(self.connection, document)

        self.assertEqual("source_files.1.size", context.exception.field_name)
        self.assertEqual('"big"', context.exception.raw_value)

    def test_nested_reference_without_id_fails(self):
        """Test a nested resource needs a string ID."""
        document = sign_request_document()
        document["parent_folder"] = {"type": "folder"}

        with self.assertRaises(DeserializationError) as context:
            SignRequest.from_json(self.connection, document)

        self.assertEqual("parent_folder.id", context.exception.field_name)

    def test_null_value_is_set_to_none(self):
        """Test JSON null keeps the field present but empty."""
        document = sign_request_document()
        document["redirect_url"] = None

        snapshot = SignRequest.from_json(self.connection, document)

        self.assertIsNone(snapshot.redirect_url)
        self.assertTrue(snapshot.is_set("redirect_url"))

    def test_absent_fields_stay_unset(self):
        """Test a partial document leaves other fields unset, not defaulted."""
        snapshot = SignRequest.from_json(self.connection, {"id": "SR1", "status": "created"})

        self.assertEqual(frozenset({"id", "status"}), snapshot.fields_set)
        self.assertIsNone(snapshot.are_reminders_enabled)
        self.assertFalse(snapshot.is_set("are_reminders_enabled"))

    def test_snapshot_is_immutable(self):
        """Test snapshots reject assignment."""
        snapshot = SignRequest.from_json(self.connection, sign_request_document())

        with self.assertRaises(Exception):
            snapshot.name = "Other"

    def test_collections_are_read_only(self):
        """Test list fields and the extra bag cannot be changed in place."""
        document = sign_request_document()
        document["brand_new_field"] = 1
        snapshot = SignRequest.from_json(self.connection, document)

        self.assertIsInstance(snapshot.signers, tuple)
        self.assertIsInstance(snapshot.source_files, tuple)
        with self.assertRaises(AttributeError):
            snapshot.signers.append(snapshot.signers[0])
        with self.assertRaises(TypeError):
            snapshot.extra["brand_new_field"] = 2
        self.assertEqual(1, snapshot.extra["brand_new_field"])

    def test_empty_snapshot(self):
        """Test a write-only snapshot has every field unset."""
        handle = SignRequest(self.connection, "SR1")

        snapshot = handle.empty_snapshot()

        self.assertIs(handle, snapshot.resource)
        self.assertEqual(frozenset(), snapshot.fields_set)
        self.assertEqual({}, snapshot.to_json())


class TestResourceHandle(unittest.TestCase):
    """Test cases for resource handles."""

    def setUp(self):
        """Set up test fixtures."""
        self.connection = MagicMock(spec=RequestsConnection)

    def test_equality_uses_type_id_and_connection(self):
        """Test handles are interchangeable only with equal ID and connection."""
        other_connection = MagicMock(spec=RequestsConnection)

        self.assertEqual(SignRequest(self.connection, "X"), SignRequest(self.connection, "X"))
        self.assertEqual(
            hash(SignRequest(self.connection, "X")), hash(SignRequest(self.connection, "X"))
        )
        self.assertNotEqual(SignRequest(self.connection, "X"), SignRequest(self.connection, "Y"))
        self.assertNotEqual(SignRequest(self.connection, "X"), SignRequest(other_connection, "X"))
        self.assertNotEqual(File(self.connection, "X"), Folder(self.connection, "X"))

    def test_construction_does_not_touch_connection(self):
        """Test a handle is built purely from its ID."""
        SignRequest(self.connection, "SR1")

        self.connection.send.assert_not_called()

    def test_empty_id_is_rejected(self):
        """Test handles need a non-empty string ID."""
        with self.assertRaises(CallerContractError):
            File(self.connection, "")

    def test_handle_is_read_only(self):
        """Test the ID cannot be reassigned."""
        handle = File(self.connection, "FI1")

        with self.assertRaises(AttributeError):
            handle.id = "FI2"

    def test_registry(self):
        """Test resource types are resolved by wire name."""
        self.assertIs(File, resource_class("file"))
        self.assertIs(Folder, resource_class("folder"))
        self.assertIs(SignRequest, resource_class("sign_request"))
        with self.assertRaises(LookupError):
            resource_class("comment")

    def test_fetch_without_item_url_is_rejected(self):
        """Test fetching a resource type with no item URL is a caller error."""
        handle = Resource(self.connection, "X1")

        with self.assertRaises(CallerContractError):
            handle.fetch()
        self.connection.send.assert_not_called()
