"""File resource."""

from datetime import datetime
from typing import ClassVar, Dict, Optional

from pydantic import Field

from ..utils.url_template import URLTemplate
from .base import Resource, Snapshot, WireObject, as_resource, register_resource
from .fields import FieldConverter, as_integer, as_object, as_string, as_timestamp


class FileVersion(WireObject):
    """Reference to one version of a file."""

    field_converters: ClassVar[Dict[str, FieldConverter]] = {
        "id": as_string,
        "type": as_string,
        "sha1": as_string,
    }

    id: Optional[str] = None
    type: Optional[str] = None
    sha1: Optional[str] = None


class FileSnapshot(Snapshot):
    """Fields of a file.

    Attributes:
        etag: Entity tag of this version of the file
        sha1: SHA-1 hash of the content
        name: File name
        description: File description
        size: Size in bytes
        file_version: Current version reference
        parent: Snapshot of the enclosing folder
        created_at: Creation timestamp
        modified_at: Last modification timestamp
    """

    field_converters: ClassVar[Dict[str, FieldConverter]] = {
        "etag": as_string,
        "sha1": as_string,
        "name": as_string,
        "description": as_string,
        "size": as_integer,
        "file_version": as_object(FileVersion),
        "parent": as_resource("folder"),
        "created_at": as_timestamp,
        "modified_at": as_timestamp,
    }

    etag: Optional[str] = Field(None, description="Entity tag")
    sha1: Optional[str] = Field(None, description="SHA-1 of the content")
    name: Optional[str] = Field(None, description="File name")
    description: Optional[str] = Field(None, description="File description")
    size: Optional[int] = Field(None, description="Size in bytes")
    file_version: Optional[FileVersion] = Field(None, description="Current version")
    parent: Optional[Snapshot] = Field(None, description="Enclosing folder")
    created_at: Optional[datetime] = Field(None, description="Creation timestamp")
    modified_at: Optional[datetime] = Field(None, description="Modification timestamp")


@register_resource
class File(Resource):
    """A file, addressable by ID."""

    __slots__ = ()

    resource_type = "file"
    snapshot_class = FileSnapshot
    item_url_template = URLTemplate("files/%s")
