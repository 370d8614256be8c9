"""Service keeping object metadata and its versions."""

from __future__ import annotations

import logging
from datetime import datetime, timezone

from objectstore import dto
from objectstore.metadata import ObjectMetadata, Version
from objectstore.repository import NotFoundError, ObjectMetadataRepository

logger = logging.getLogger(__name__)


class ObjectMetadataService:
    """Creates, versions, looks up and deletes object metadata."""

    def __init__(self, metadata_repository: ObjectMetadataRepository) -> None:
        if metadata_repository is None:
            raise ValueError("MetadataRepository is nil")
        self._repository = metadata_repository

    def put(self, object_dto: dto.Object) -> dto.Metadata:
        """Add the uploaded object as a new version, creating it if new."""
        logger.debug("[objectMetadata.Put] request: %r", object_dto)
        try:
            metadata = self._repository.metadata_by_object_id(
                object_dto.group, object_dto.partition, object_dto.path, int(object_dto.id)
            )
        except NotFoundError:
            metadata = None

        now = datetime.now(timezone.utc)
        if metadata is None:
            metadata = self._create(object_dto, now)
        else:
            metadata.modified_at = now
            self._update(metadata, object_dto, now)
        return dto.Metadata.from_entity(metadata)

    def delete(self, metadata_dto: dto.Metadata) -> None:
        """Delete the object, or only the versions listed in the request."""
        logger.debug("[objectMetadata.Delete] request: %r", metadata_dto)
        if metadata_dto.versions.is_empty():
            self._repository.delete(metadata_dto.to_entity())
            return

        metadata = self._repository.metadata_by_object_id(
            metadata_dto.group, metadata_dto.partition, metadata_dto.path, int(metadata_dto.id)
        )
        if metadata is None:
            raise NotFoundError("object not exist")

        for version in metadata_dto.versions:
            metadata.delete_version(version.number)

        if not metadata.versions:
            self._repository.delete(metadata)
        else:
            self._repository.update(metadata)

    def metadata_by_object_name(
        self, group: str, partition: str, path: str, object_name: str
    ) -> dto.Metadata:
        """Metadata of the named object; empty metadata if the store has none."""
        metadata = self._repository.metadata_by_object_name(group, partition, path, object_name)
        if metadata is None:
            metadata = ObjectMetadata()
        return dto.Metadata.from_entity(metadata)

    def metadata_by_object_id(
        self, group: str, partition: str, path: str, object_id: int
    ) -> dto.Metadata:
        metadata = self._repository.metadata_by_object_id(group, partition, path, object_id)
        if metadata is None:
            raise NotFoundError("object not exist")
        return dto.Metadata.from_entity(metadata)

    def metadata_list_on_path(self, group: str, partition: str, path: str) -> list[dto.Metadata]:
        items = self._repository.find_metadata(group, partition, path)
        return [dto.Metadata.from_entity(item) for item in items]

    def _create(self, object_dto: dto.Object, now: datetime) -> ObjectMetadata:
        metadata = object_dto.to_entity()
        metadata.created_at = now
        metadata.modified_at = now
        metadata.append_version(self._new_version(0, object_dto, now))
        self._repository.create(metadata)
        return metadata

    def _update(self, metadata: ObjectMetadata, object_dto: dto.Object, now: datetime) -> None:
        number = metadata.last_version() + 1
        metadata.append_version(self._new_version(number, object_dto, now))
        self._repository.update(metadata)

    @staticmethod
    def _new_version(number: int, object_dto: dto.Object, now: datetime) -> Version:
        return Version(
            number=number,
            size=object_dto.size,
            block_headers=dto.block_headers_to_entity(object_dto.block_headers),
            created_at=now,
            modified_at=now,
        )