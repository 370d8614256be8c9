"""Front service for clients: upload, download, list and delete objects."""

from __future__ import annotations

from typing import BinaryIO, Protocol

from objectstore import dto, message
from objectstore.deleter import Deleter
from objectstore.downloader import Downloader
from objectstore.ids import ObjectID
from objectstore.repository import NotFoundError
from objectstore.uploader import Uploader


class ResponseWriter(Protocol):
    """Destination of a download."""

    def header(self, name: str, size: int) -> None:
        """Announce the object's name and size before its data."""

    def body(self, data: bytes) -> None:
        """Write the next piece of the object's data."""


def _require(request: dto.Request, *fields: str) -> None:
    for name in fields:
        if not getattr(request, name):
            raise ValueError(f"{name} is empty")


class Explorer:
    """Coordinates the metadata registry and block storage for clients."""

    def __init__(
        self,
        metadata_requestor: message.MetadataRegistryRequestor,
        storage_requestor: message.BlockStorageRequestor,
    ) -> None:
        if metadata_requestor is None:
            raise ValueError("MetadataRegistry requestor is nil")
        if storage_requestor is None:
            raise ValueError("BlockStorage requestor is nil")
        self._metadata = metadata_requestor
        self._storage = storage_requestor

    def get_object_metadata(self, request: dto.Request) -> dto.Item:
        if not ObjectID(request.object_id).is_valid():
            raise ValueError("object id is invalid")
        _require(request, "group", "partition", "path")

        metadata = self._existing_metadata(request)
        return dto.Item.from_metadata(metadata)

    def find_object_metadata_on_path(self, request: dto.Request) -> list[dto.Item]:
        _require(request, "group", "partition", "path")
        lookup = message.ObjectMetadataRequest(
            group=request.group, partition=request.partition, path=request.path
        )
        return message.to_items_dto(self._metadata.find_metadata_on_path(lookup))

    def upload(self, request: dto.Request, body_stream: BinaryIO) -> dto.Item:
        """Store the stream as a new version of the named object."""
        _require(request, "group", "partition", "path", "name")
        if request.size <= 0:
            raise ValueError("size is invalid")
        if body_stream is None:
            raise ValueError("body stream is nil")

        try:
            existing = self._metadata_by_name(request)
        except NotFoundError:
            existing = None

        object_id = ObjectID.new()
        if existing is not None and existing.id.is_valid():
            object_id = existing.id

        headers = Uploader(self._storage).upload(object_id, body_stream)
        new_object = dto.Object(
            id=object_id,
            group=request.group,
            partition=request.partition,
            name=request.name,
            path=request.path,
            size=request.size,
            block_headers=headers,
        )
        stored = message.to_object_metadata_dto(
            self._metadata.put(message.from_object_dto(new_object))
        )
        if stored is None:
            raise ValueError("metadata registry returned no metadata")
        return dto.Item.from_metadata(stored)

    def download(self, request: dto.Request, writer: ResponseWriter, last_version: bool) -> None:
        """Write the requested version, or the latest one, to the writer."""
        _require(request, "group", "partition", "path")
        if not ObjectID(request.object_id).is_valid():
            raise ValueError("object id is invalid")
        if not last_version and request.version < 0:
            raise ValueError("version is invalid")

        metadata = self._existing_metadata(request)
        if last_version:
            version = metadata.versions.last_version()
        else:
            version = metadata.versions.version(request.version)

        writer.header(metadata.name, version.size)
        Downloader(self._storage).download(version, writer.body)

    def delete(self, request: dto.Request, delete_version: bool) -> None:
        """Delete the object, or only the requested version of it."""
        if not ObjectID(request.object_id).is_valid():
            raise ValueError("object id is invalid")
        _require(request, "group", "partition", "path")
        if delete_version and request.version < 0:
            raise ValueError("version is invalid")

        metadata = self._existing_metadata(request)
        if delete_version and not metadata.versions.has_version(request.version):
            raise LookupError("version not exist")

        deleter = Deleter(self._metadata, self._storage)
        if delete_version:
            deleter.delete_version(metadata, request.version)
        else:
            deleter.delete(metadata)

    def _existing_metadata(self, request: dto.Request) -> dto.Metadata:
        metadata = self._metadata_by_id(request)
        if metadata is None or not metadata.id.is_valid():
            raise NotFoundError("object not exist")
        return metadata

    def _metadata_by_id(self, request: dto.Request) -> dto.Metadata | None:
        lookup = message.ObjectMetadataRequest(
            object_id=int(request.object_id),
            group=request.group,
            partition=request.partition,
            path=request.path,
        )
        response = self._metadata.get_by_object_id(lookup)
        if response is None or message.to_object_id(response.id) <= 0:
            return None
        return message.to_object_metadata_dto(response)

    def _metadata_by_name(self, request: dto.Request) -> dto.Metadata | None:
        lookup = message.ObjectMetadataRequest(
            group=request.group,
            partition=request.partition,
            path=request.path,
            name=request.name,
        )
        return message.to_object_metadata_dto(self._metadata.get_by_object_name(lookup))