"""relform: fill the release-request Word template from structured form data."""

__version__ = "0.1.0"
