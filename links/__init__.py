"""File identity tokens and outward-facing stream links."""

from .fingerprint import canonical_string, clamp_hash_length, file_token  # noqa: F401
from .issuer import LinkIssuer, normalize_base_url  # noqa: F401
from .metadata import FileMetadata  # noqa: F401
