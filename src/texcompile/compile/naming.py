"""File naming, MIME mapping and download URL normalization."""

from __future__ import annotations

from pathlib import PurePath

from texcompile.compile.errors import InputError, UnsupportedFileTypeError

OUTPUT_SUFFIX = ".pdf"
MIME_TYPES: dict[str, str] = {
    ".tex": "text/x-tex",
    ".zip": "application/zip",
}
_ABSOLUTE_URL_PREFIXES = ("http://", "https://")


def mime_type_for(file_name: str) -> str:
    """Return the upload MIME type for a ``.tex`` or ``.zip`` file name."""

    lowered = file_name.lower()
    for extension, mime_type in MIME_TYPES.items():
        if lowered.endswith(extension):
            return mime_type
    raise UnsupportedFileTypeError(
        message=f"Unsupported file type: {file_name!r}. Expected .tex or .zip",
    )


def derive_output_name(file_name: str) -> str:
    """Replace the final extension of ``file_name`` with ``.pdf``."""

    stem = PurePath(file_name).stem if file_name else ""
    if stem in {"", ".", ".."}:
        raise InputError(message=f"Invalid file name: {file_name!r}")
    return f"{stem}{OUTPUT_SUFFIX}"


def normalize_download_url(reference: str, base_url: str) -> str:
    """Resolve a download reference against the service base URL."""

    if reference.startswith(_ABSOLUTE_URL_PREFIXES):
        return reference
    if reference.startswith("/"):
        return f"{base_url}{reference}"
    return f"{base_url}/{reference}"
