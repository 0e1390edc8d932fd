"""Utilities Module

Helper functions for the document-flow renderer.
"""
import base64
import binascii
import os
import re
from typing import List, Union
from urllib.parse import urlparse

from .exceptions import ImageEmbedError, InvalidUrlError


def decode_base64_image(data: str) -> bytes:
    """
    Decode a base64 image, accepting both raw base64 and data URIs.

    Args:
        data: "data:image/png;base64,...." or plain base64 text

    Returns:
        Decoded image bytes

    Raises:
        ImageEmbedError: If the payload is empty or not valid base64
    """
    if not data:
        raise ImageEmbedError("no image data supplied")

    # Data URI: keep only the payload after the comma
    if "," in data:
        data = data.split(",", 1)[1]

    try:
        return base64.b64decode(data, validate=True)
    except (binascii.Error, ValueError) as e:
        raise ImageEmbedError(f"invalid base64 payload ({e})")


def validate_url(url: str) -> str:
    """
    Validate that a URL is present and uses http or https.

    Args:
        url: Remote document URL

    Returns:
        The URL, unchanged

    Raises:
        InvalidUrlError: If the URL is empty or has an unsupported scheme
    """
    if not url:
        raise InvalidUrlError("A URL must be provided")

    parsed = urlparse(url)
    if parsed.scheme not in ("http", "https") or not parsed.netloc:
        raise InvalidUrlError(f"Unsupported URL: {url}")

    return url


def normalize_urls(urls: Union[str, List[str], None]) -> List[str]:
    """
    Turn a single URL or a list of URLs into a list, dropping blanks.

    Args:
        urls: One URL, a list of URLs, or newline-separated text

    Returns:
        List of stripped, non-empty URLs
    """
    if not urls:
        return []
    if isinstance(urls, str):
        urls = urls.splitlines()
    return [url.strip() for url in urls if url and url.strip()]


def clean_filename(filename: str) -> str:
    """
    Clean filename for safe saving.

    Args:
        filename: Original filename

    Returns:
        Cleaned filename
    """
    # Remove path components
    filename = os.path.basename(filename)

    # Remove extension
    name, _ = os.path.splitext(filename)

    # Replace invalid characters
    name = re.sub(r'[^\w\s-]', '', name)

    # Replace spaces with underscores
    name = re.sub(r'\s+', '_', name)

    # Limit length
    if len(name) > 50:
        name = name[:50]

    return name or 'document'


def format_file_size(size_bytes: int) -> str:
    """
    Format file size in human-readable format.

    Args:
        size_bytes: Size in bytes

    Returns:
        Formatted string (e.g., "45.3 KB")
    """
    if size_bytes < 1024:
        return f"{size_bytes} B"
    elif size_bytes < 1024 * 1024:
        return f"{size_bytes / 1024:.1f} KB"
    else:
        return f"{size_bytes / (1024 * 1024):.1f} MB"
