"""Command-line tool uploading a file to the explorer with chunked encoding."""

from __future__ import annotations

import argparse
import os
import urllib.request
from pathlib import Path
from typing import BinaryIO, Iterator, Mapping
from urllib.error import HTTPError, URLError
from urllib.parse import parse_qsl, urlencode, urlsplit, urlunsplit

CHUNK_SIZE = 30 * 1024

OBJECT_NAME_QUERY = "name"
OBJECT_SIZE_QUERY = "size"
CHUNK_SIZE_QUERY = "chunk_size"


class UploadFailed(RuntimeError):
    """The file could not be uploaded."""


def build_url(server: str, group: str, partition: str, object_path: str) -> str:
    """Upload address of an object path on the server."""
    return f"http://{server}/v1/{group}/{partition}/{object_path}"


def _with_query(url: str, params: Mapping[str, str]) -> str:
    parts = urlsplit(url)
    query = parse_qsl(parts.query, keep_blank_values=True) + list(params.items())
    query.sort(key=lambda item: item[0])
    return urlunsplit(parts._replace(query=urlencode(query)))


def _chunks(stream: BinaryIO) -> Iterator[bytes]:
    while chunk := stream.read(CHUNK_SIZE):
        yield chunk


def upload_chunked(url: str, file_path: str | os.PathLike) -> None:
    """POST the file's contents to url in chunks; UploadFailed on any failure."""
    path = Path(file_path)
    try:
        stream = path.open("rb")
    except OSError as exc:
        raise UploadFailed(f"failed to open file: {exc}") from exc

    with stream:
        try:
            size = os.fstat(stream.fileno()).st_size
        except OSError as exc:
            raise UploadFailed(f"failed to get file stat: {exc}") from exc

        target = _with_query(
            url,
            {
                OBJECT_NAME_QUERY: path.name,
                OBJECT_SIZE_QUERY: str(size),
                CHUNK_SIZE_QUERY: str(CHUNK_SIZE),
            },
        )
        request = urllib.request.Request(
            target,
            data=_chunks(stream),
            method="POST",
            headers={
                "Content-Type": "application/octet-stream",
                "Transfer-Encoding": "chunked",
            },
        )
        try:
            with urllib.request.urlopen(request) as response:
                status, reason = response.status, response.reason
        except HTTPError as exc:
            status, reason = exc.code, exc.reason
            exc.close()
        except (URLError, OSError) as exc:
            raise UploadFailed(f"failed to send request: {exc}") from exc

    if status != 200:
        raise UploadFailed(f"server returned non-200 status: {status} {reason}")


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Upload a file to an object store server.")
    parser.add_argument("-s", "--server", required=True, help="server address, host:port")
    parser.add_argument("-g", "--group", required=True)
    parser.add_argument("-p", "--partition", required=True)
    parser.add_argument("-o", "--path", required=True, help="object path on the server")
    parser.add_argument("-f", "--file", required=True, help="file to upload")
    args = parser.parse_args(argv)

    url = build_url(args.server, args.group, args.partition, args.path)
    try:
        upload_chunked(url, args.file)
    except UploadFailed as exc:
        print(f"Error uploading file: {exc}")
        return 1
    print("File uploaded successfully")
    return 0