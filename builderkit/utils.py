"""Utility functions for collecting text resources for a generation run.

Resources are read as raw text; parsing is left to the generators.
Unreadable local files are reported with ``text=None`` so generators can
filter them out, while remote failures raise ResourceLoaderError.
"""

from pathlib import Path
from urllib.parse import urlparse

import requests

from .codegen.core.metadata import AdditionalText
from .logging_config import get_logger

logger = get_logger(__name__)


class ResourceLoaderError(Exception):
    """Custom exception for resource loading errors."""

    pass


def load_text_from_file(file_path: str | Path) -> AdditionalText:
    """Load a local text resource.

    Args:
        file_path: Path to the resource.

    Returns:
        AdditionalText whose text is None when the file cannot be read.
    """
    file_path = Path(file_path)
    logger.debug("Reading resource file: %s", file_path)

    try:
        return AdditionalText(str(file_path), file_path.read_text(encoding="utf-8"))
    except (OSError, UnicodeDecodeError) as e:
        logger.warning("Could not read resource %s: %s", file_path, e)
        return AdditionalText(str(file_path), None)


def load_texts_from_directory(directory: str | Path) -> list[AdditionalText]:
    """Load every file below a directory, in sorted path order.

    Raises:
        FileNotFoundError: If the directory doesn't exist.
    """
    directory = Path(directory)
    if not directory.is_dir():
        logger.error("Resource directory not found: %s", directory)
        raise FileNotFoundError(f"Resource directory not found: {directory}")

    texts = [
        load_text_from_file(path)
        for path in sorted(directory.rglob("*"))
        if path.is_file()
    ]
    logger.info("Loaded %d resources from %s", len(texts), directory)
    return texts


def load_text_from_url(url: str, timeout: int = 30) -> AdditionalText:
    """Fetch a remote text resource.

    Args:
        url: URL of the resource; its path becomes the resource path.
        timeout: Request timeout in seconds.

    Raises:
        ResourceLoaderError: If URL is invalid or the request fails.
    """
    logger.debug("Fetching resource from URL: %s", url)

    parsed_url = urlparse(url)
    if not all([parsed_url.scheme, parsed_url.netloc]):
        logger.error("Invalid URL format: %s", url)
        raise ResourceLoaderError(f"Invalid URL: {url}")

    try:
        response = requests.get(url, timeout=timeout)
        response.raise_for_status()
    except requests.exceptions.Timeout as e:
        logger.error("Request timeout for URL: %s", url)
        raise ResourceLoaderError(f"Request timeout for URL: {url}") from e
    except requests.exceptions.ConnectionError as e:
        logger.error("Connection error for URL %s: %s", url, e)
        raise ResourceLoaderError(f"Connection error for URL: {url}") from e
    except requests.exceptions.HTTPError as e:
        logger.error("HTTP error %s for URL: %s", e.response.status_code, url)
        raise ResourceLoaderError(
            f"HTTP error {e.response.status_code} for URL: {url}"
        ) from e
    except requests.exceptions.RequestException as e:
        logger.error("Request error for URL %s: %s", url, e, exc_info=True)
        raise ResourceLoaderError(f"Request error for URL {url}: {e}") from e

    logger.info("Fetched resource from %s", url)
    return AdditionalText(parsed_url.path or url, response.text)
