"""Folder resource."""

from datetime import datetime
from typing import ClassVar, Dict, Optional

from pydantic import Field

from ..utils.url_template import URLTemplate
from .base import Resource, Snapshot, as_resource, register_resource
from .fields import FieldConverter, as_integer, as_string, as_timestamp


class FolderSnapshot(Snapshot):
    """Fields of a folder.

    Attributes:
        etag: Entity tag of this version of the folder
        name: Folder name
        description: Folder description
        size: Total size of the folder content in bytes
        parent: Snapshot of the enclosing folder
        created_at: Creation timestamp
        modified_at: Last modification timestamp
    """

    field_converters: ClassVar[Dict[str, FieldConverter]] = {
        "etag": as_string,
        "name": as_string,
        "description": as_string,
        "size": as_integer,
        "parent": as_resource("folder"),
        "created_at": as_timestamp,
        "modified_at": as_timestamp,
    }

    etag: Optional[str] = Field(None, description="Entity tag")
    name: Optional[str] = Field(None, description="Folder name")
    description: Optional[str] = Field(None, description="Folder description")
    size: Optional[int] = Field(None, description="Size of the content in bytes")
    parent: Optional[Snapshot] = Field(None, description="Enclosing folder")
    created_at: Optional[datetime] = Field(None, description="Creation timestamp")
    modified_at: Optional[datetime] = Field(None, description="Modification timestamp")


@register_resource
class Folder(Resource):
    """A folder, addressable by ID."""

    __slots__ = ()

    resource_type = "folder"
    snapshot_class = FolderSnapshot
    item_url_template = URLTemplate("folders/%s")
