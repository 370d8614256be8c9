# objectstore

The domain layer of a versioned object store. An object is cut into blocks
of at most 4 MiB (`objectstore.block.BLOCK_SIZE`). Each block carries a
CRC-32 checksum and is sent to a block storage service. A metadata registry
keeps, for every object, its group, partition, path, name and a list of
versions. Each version records its size and the headers of the blocks that
make it up.

The package has no dependencies outside the standard library.

## Modules

- `objectstore.ids`: `ObjectID` and `BlockID`, which are `int` subclasses
  with `new()` and `is_valid()` (valid means greater than zero). Also the
  snowflake-style `IdGenerator`. `init_identifier(node)` installs the
  process-wide generator. `generate_id()` draws from it and falls back to
  node 1 if none was installed.
- `objectstore.block`: `BlockHeader`, `Block`, `Node` and `ModifiedTime`,
  plus the `checksum(data)` and `verify(data, expected)` helpers.
  `BlockHeader.validate()` and `Block.validate()` raise `ValueError` for an
  invalid header or an oversized block. Headers convert to and from plain
  dictionaries (`to_document` / `from_document`). Headers and blocks
  convert to and from a compact binary form (`to_bytes` / `from_bytes`).
- `objectstore.metadata`: the `Version`, `ObjectMetadata` and `Directory`
  entities. `ObjectMetadata.delete_version(number)` raises `LookupError` if
  there is no such version. `last_version()` returns `-1` when there are no
  versions.
- `objectstore.dto`: transfer objects `BlockHeader`, `Block`, `File`,
  `Version`, `Versions`, `Metadata`, `Object`, `Request` and `Item`. Also
  the helpers `block_headers_to_entity`, `items_from_metadata_list` and
  `request_from_context`.
- `objectstore.message`: wire message records such as
  `ObjectMetadataMessage`, `BlockMessage` and `ObjectMetadataRequest`. It
  also holds the `from_*` / `to_*` converters between messages, entities
  and transfer objects, and the `MetadataRegistryRequestor` and
  `BlockStorageRequestor` protocols.
- `objectstore.repository`: the abstract repository interfaces
  `ObjectDirectoryRepository`, `ObjectMetadataRepository` and
  `ObjectStorageRepository`, and `NotFoundError`.
- `objectstore.uploader`: `Uploader` reads a binary stream and stores it
  block by block. It returns the block headers, and it always stores a
  final block when the stream ends. It raises `UploadError` if storage
  answers with `success=False`.
- `objectstore.downloader`: `Downloader` fetches a version's blocks
  concurrently and passes them to a write callable in index order. It
  raises `ChecksumError` for a block that fails its checksum.
- `objectstore.deleter`: `Deleter` deletes an object's blocks and then its
  metadata, either the whole object or a single version.
- `objectstore.metadata_service`: `ObjectMetadataService` sits on an
  `ObjectMetadataRepository`. `put` creates an object at version 0 or
  appends the next version. `delete` removes the object, or only the
  versions listed in the request.
- `objectstore.storage_service`: `ObjectStorageService` sits on an
  `ObjectStorageRepository`. It checks a block's header, size and checksum
  before storing it.
- `objectstore.explorer`: `Explorer` combines the pieces above into
  `get_object_metadata`, `find_object_metadata_on_path`, `upload`,
  `download` and `delete`. `ResponseWriter` is the protocol a download
  writes to: `header(name, size)` is called first, then `body(data)` once
  per block.
- `objectstore.upload_cli`: the `objectstore-upload` command.

## Using the explorer

```python
from objectstore.explorer import Explorer
from objectstore.dto import Request

explorer = Explorer(metadata_requestor, storage_requestor)
with open("photo.png", "rb") as body:
    item = explorer.upload(
        Request(group="media", partition="p0", path="/images",
                name="photo.png", size=1234),
        body,
    )
```

`metadata_requestor` and `storage_requestor` must implement the protocols
in `objectstore.message`. If an object with the same name already exists on
the path, the upload becomes a new version of it. Otherwise a new
`ObjectID` is generated.

The explorer raises `ValueError` for a request with missing or invalid
fields. It raises `NotFoundError` when the object does not exist and
`LookupError` when a requested version does not exist. Errors raised by
the requestors are passed through unchanged.

## Uploading a file from the command line

```
objectstore-upload -s localhost:8080 -g media -p p0 -o images -f ./photo.png
```

This sends the file as a chunked HTTP POST to
`http://<server>/v1/<group>/<partition>/<path>`. The file name, the file
size and the chunk size (30 KiB) go in the query string. The command
prints `File uploaded successfully` and exits with 0. If the file cannot be
read, the request fails, or the server answers with anything other than
200, it prints the error and exits with 1.

## What this package does not do

It contains no servers and no storage backends. There is no HTTP explorer
endpoint, no metadata registry service and no block storage service. There
are no network clients for them either. The requestor protocols and the
repository interfaces are left for you to implement, for example with
in-memory stores or with clients for your own services.

## Running the tests

```
pip install -e .[test]
pytest
```