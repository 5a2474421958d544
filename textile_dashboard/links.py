"""
Google Drive link conversion.

Shared links come in several shapes (``/file/d/<id>/view``, ``open?id=<id>``,
``uc?id=<id>``). All of them carry the file id as a run of at least 25
letters, digits, hyphens or underscores; the first such run is taken as
the id. URLs without one pass through unchanged.

Note: a URL with some other 25+ character token before the id (a long
query parameter, say) will yield the wrong id.
"""

import re

from .config import DRIVE_DOWNLOAD_URL, DRIVE_PREVIEW_URL, DRIVE_THUMBNAIL_URL, DRIVE_VIEW_URL

FILE_ID_PATTERN = re.compile(r"[-\w]{25,}", re.ASCII)


def extract_file_id(url) -> str | None:
    """Return the hosted-file id embedded in `url`, or None."""
    if not isinstance(url, str):
        return None
    match = FILE_ID_PATTERN.search(url)
    return match.group(0) if match else None


def _rewrite(url, template: str):
    file_id = extract_file_id(url)
    if file_id is None:
        return url
    return template.format(file_id=file_id)


def to_preview_url(url):
    """Embeddable viewer URL for a PDF."""
    return _rewrite(url, DRIVE_PREVIEW_URL)


def to_thumbnail_url(url):
    """Image URL for a cover photo."""
    return _rewrite(url, DRIVE_THUMBNAIL_URL)


def to_download_url(url):
    return _rewrite(url, DRIVE_DOWNLOAD_URL)


def to_direct_view_url(url):
    return _rewrite(url, DRIVE_VIEW_URL)
