"""Fetching an object's blocks from storage and writing them out in order."""

from __future__ import annotations

from concurrent.futures import Future, ThreadPoolExecutor
from typing import Callable

from objectstore import dto, message
from objectstore.block import Block, checksum, verify


class ChecksumError(ValueError):
    """A fetched block does not match its checksum."""


class Downloader:
    """Fetches the blocks of one version concurrently and writes them in order."""

    max_workers: int = 8

    def __init__(self, storage_requestor: message.BlockStorageRequestor) -> None:
        self._storage = storage_requestor

    def download(self, version: dto.Version, write: Callable[[bytes], object]) -> None:
        """Write every block of the version, in index order, through write."""
        headers = list(version.block_headers)
        if not headers:
            return

        workers = min(self.max_workers, len(headers))
        executor = ThreadPoolExecutor(max_workers=workers)
        try:
            futures: list[Future[Block]] = [
                executor.submit(self._fetch, header) for header in headers
            ]
            for future in futures:
                write(future.result().buffer)
        finally:
            executor.shutdown(wait=True, cancel_futures=True)

    def _fetch(self, header: dto.BlockHeader) -> Block:
        response = self._storage.get_block(message.from_block_header_dto(header))
        block = message.to_block(response)
        expected = block.header.checksum
        if not verify(block.buffer, expected):
            raise ChecksumError(
                f"Block checksum is invalid({checksum(block.buffer)} / {expected})"
            )
        return block