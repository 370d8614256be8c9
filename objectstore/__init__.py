"""Versioned object storage domain: identifiers, checksummed blocks,
metadata, transfer objects and the upload, download, metadata, storage and
explorer services, plus a chunked-upload command."""

__version__ = "0.1.0"