"""Deleting objects, or single versions of them, with their blocks."""

from __future__ import annotations

from dataclasses import replace

from objectstore import dto, message


class Deleter:
    """Removes stored blocks and then the matching metadata."""

    def __init__(
        self,
        metadata_requestor: message.MetadataRegistryRequestor,
        storage_requestor: message.BlockStorageRequestor,
    ) -> None:
        self._metadata = metadata_requestor
        self._storage = storage_requestor

    def delete(self, metadata: dto.Metadata) -> None:
        """Delete the blocks of every version, then the object's metadata."""
        for version in metadata.versions:
            self._delete_blocks(version)
        self._delete_metadata(replace(metadata, versions=dto.Versions()))

    def delete_version(self, metadata: dto.Metadata, version_number: int) -> None:
        """Delete one version's blocks and that version from the metadata.

        Raises LookupError if the object has no such version.
        """
        version = metadata.versions.version(version_number)
        self._delete_blocks(version)
        self._delete_metadata(replace(metadata, versions=dto.Versions([version])))

    def _delete_metadata(self, metadata: dto.Metadata) -> None:
        self._metadata.delete(message.from_object_metadata_dto(metadata))

    def _delete_blocks(self, version: dto.Version) -> None:
        for header in version.block_headers:
            request = message.BlockHeaderMessage(
                object_id=message.ObjectIDMessage(id=int(header.object_id)),
                block_id=message.BlockIDMessage(id=int(header.block_id)),
                index=header.index,
            )
            self._storage.delete(request)