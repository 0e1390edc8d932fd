"""PDF Fetcher Module

Downloads remote PDF documents and opens them with pypdf for merging.
"""
import io
import os
from typing import Optional

import requests
from pypdf import PdfReader
from pypdf.errors import PdfReadError

from ..config import DEFAULT_FETCH_TIMEOUT
from ..exceptions import FetchError, PdfDecodeError
from ..utils import validate_url


class PdfFetcher:
    """Client for loading PDF documents from http(s) URLs."""

    def __init__(self, timeout: Optional[float] = None):
        """
        Initialize the fetcher.

        Args:
            timeout: Request timeout in seconds. If None, reads DOCFLOW_FETCH_TIMEOUT
                     from the environment, falling back to the configured default.
        """
        self.timeout = timeout or float(os.getenv("DOCFLOW_FETCH_TIMEOUT", DEFAULT_FETCH_TIMEOUT))

    def fetch_bytes(self, url: str) -> bytes:
        """
        Download a document.

        Args:
            url: http(s) URL of the document

        Returns:
            Response body

        Raises:
            InvalidUrlError: If the URL is missing or unsupported
            FetchError: If the request fails or returns an error status
        """
        validate_url(url)
        try:
            response = requests.get(url, timeout=self.timeout)
            response.raise_for_status()
        except requests.RequestException as e:
            raise FetchError(url, str(e))
        return response.content

    def fetch_pdf(self, url: str) -> PdfReader:
        """
        Download a document and open it as a PDF.

        Raises:
            InvalidUrlError: If the URL is missing or unsupported
            FetchError: If the download fails
            PdfDecodeError: If the body is not a readable PDF
        """
        content = self.fetch_bytes(url)
        try:
            reader = PdfReader(io.BytesIO(content))
            page_count = len(reader.pages)
        except (PdfReadError, ValueError) as e:
            raise PdfDecodeError(url, str(e))

        print(f"DEBUG: Fetched {page_count} page(s) from {url}")
        return reader
