#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/mdterm/utils/images.py
"""Image fetching and terminal image rendering.

Two collaborators are used by the terminal renderer when images are enabled:

- :func:`fetch_image` resolves an image destination (an http(s) URL or a
  local path) to raw bytes within a bounded time and size
- an :class:`ImageRenderer` turns those bytes into terminal text of a given
  width; :class:`PillowImageRenderer` is the default implementation

Failures never abort a render: the renderer logs them and falls back to the
textual ``![alt](destination)`` form.
"""

from __future__ import annotations

import io
import logging
from pathlib import Path
from typing import Optional, Protocol

import httpx
from PIL import Image, UnidentifiedImageError

from mdterm.constants import (
    CELL_ASPECT_RATIO,
    CHARACTER_RAMP,
    DEFAULT_IMAGE_FETCH_TIMEOUT,
    DEFAULT_MAX_ASSET_SIZE_BYTES,
    DEFAULT_USER_AGENT,
    HALF_BLOCK_GLYPH,
    DitheringMode,
)
from mdterm.exceptions import ImageFetchError, ImageNetworkError, ImageNotFoundError, ImageTimeoutError
from mdterm.utils.ansi import RESET, rgb_background, rgb_foreground

logger = logging.getLogger(__name__)


def is_remote_destination(destination: str) -> bool:
    """Tell whether an image destination must be fetched over http(s)."""
    return destination.startswith(("http://", "https://"))


def fetch_image(
    destination: str,
    timeout: float = DEFAULT_IMAGE_FETCH_TIMEOUT,
    max_size_bytes: int = DEFAULT_MAX_ASSET_SIZE_BYTES,
    client: Optional[httpx.Client] = None,
) -> bytes:
    """Fetch the raw bytes of an image.

    Parameters
    ----------
    destination : str
        http(s) URL or local filesystem path
    timeout : float, default 5.0
        Seconds allowed for the whole network request
    max_size_bytes : int, default 20MB
        Largest accepted image
    client : httpx.Client, optional
        Client to issue the request with; a short-lived one is created when
        omitted

    Returns
    -------
    bytes
        Image data

    Raises
    ------
    ImageNotFoundError
        If the file does not exist or the server answers 404
    ImageTimeoutError
        If the request does not complete within ``timeout``
    ImageNetworkError
        For any other transport failure or non-200 response
    ImageFetchError
        If the image is empty, too large or unreadable

    """
    destination = destination.replace("\n", "").strip()
    if is_remote_destination(destination):
        return _fetch_remote(destination, timeout, max_size_bytes, client)
    return _read_local(destination, max_size_bytes)


def _fetch_remote(url: str, timeout: float, max_size_bytes: int, client: Optional[httpx.Client]) -> bytes:
    owns_client = client is None
    http = client or httpx.Client(
        timeout=timeout,
        follow_redirects=True,
        headers={"User-Agent": DEFAULT_USER_AGENT},
    )

    try:
        with http.stream("GET", url, timeout=timeout) as response:
            if response.status_code == 404:
                raise ImageNotFoundError(f"Image not found: {url}", destination=url)
            if response.status_code != 200:
                raise ImageNetworkError(
                    f"http: {response.status_code} {response.reason_phrase} for {url}", destination=url
                )

            chunks = []
            total_size = 0
            for chunk in response.iter_bytes(chunk_size=8192):
                total_size += len(chunk)
                if total_size > max_size_bytes:
                    raise ImageFetchError(
                        f"Image too large: exceeded {max_size_bytes} bytes while streaming {url}", destination=url
                    )
                chunks.append(chunk)
    except httpx.TimeoutException as e:
        raise ImageTimeoutError(f"Timed out fetching {url}", destination=url, original_error=e) from e
    except httpx.HTTPError as e:
        raise ImageNetworkError(f"HTTP request failed for {url}: {e}", destination=url, original_error=e) from e
    finally:
        if owns_client:
            http.close()

    if total_size == 0:
        raise ImageFetchError(f"Empty response received from {url}", destination=url)

    logger.debug(f"Fetched {total_size} bytes from {url}")
    return b"".join(chunks)


def _read_local(destination: str, max_size_bytes: int) -> bytes:
    path = Path(destination)
    if not path.is_file():
        raise ImageNotFoundError(f"Image file not found: {destination}", destination=destination)

    try:
        size = path.stat().st_size
        if size > max_size_bytes:
            raise ImageFetchError(
                f"Image file too large: {size} bytes (max: {max_size_bytes})", destination=destination
            )
        data = path.read_bytes()
    except OSError as e:
        raise ImageFetchError(
            f"Could not read image {destination}: {e}", destination=destination, original_error=e
        ) from e

    logger.debug(f"Read {len(data)} bytes from {destination}")
    return data


class ImageRenderer(Protocol):
    """Turns image bytes into terminal text."""

    def render(self, data: bytes, target_width: int, mode: DitheringMode) -> tuple[str, bool]:
        """Render ``data`` in at most ``target_width`` columns.

        Returns
        -------
        tuple of (str, bool)
            The terminal text and whether a visual was produced; when the
            flag is False the caller uses its textual fallback

        """
        ...


class PillowImageRenderer:
    """Default image renderer backed by Pillow.

    ``"blocks"`` draws two pixels per cell with an upper half block, the top
    pixel as true-colour foreground and the bottom one as background.
    ``"chars"`` maps the luminance of each cell to a character ramp and needs
    no colour support. ``"none"`` renders nothing.

    Images are only ever scaled down, never up.
    """

    def render(self, data: bytes, target_width: int, mode: DitheringMode) -> tuple[str, bool]:
        if mode == "none":
            return "", False

        try:
            with Image.open(io.BytesIO(data)) as image:
                image.load()
                picture = image.convert("RGB")
        except (UnidentifiedImageError, OSError) as e:
            logger.warning(f"Could not decode image data: {e}")
            return "", False

        columns = max(1, min(target_width, picture.width))
        if mode == "blocks":
            return self._render_blocks(picture, columns), True
        if mode == "chars":
            return self._render_chars(picture, columns), True

        raise ValueError(f"Unknown image mode: {mode}")

    @staticmethod
    def _render_blocks(picture: Image.Image, columns: int) -> str:
        # each cell covers two vertical pixels
        pixel_rows = max(2, round(picture.height * columns / picture.width))
        pixel_rows += pixel_rows % 2
        scaled = picture.resize((columns, pixel_rows), Image.Resampling.LANCZOS)
        pixels = scaled.load()

        lines = []
        for y in range(0, pixel_rows, 2):
            cells = []
            for x in range(columns):
                top = pixels[x, y]
                bottom = pixels[x, y + 1]
                cells.append(f"{rgb_foreground(*top)}{rgb_background(*bottom)}{HALF_BLOCK_GLYPH}")
            lines.append("".join(cells) + RESET)
        return "\n".join(lines)

    @staticmethod
    def _render_chars(picture: Image.Image, columns: int) -> str:
        rows = max(1, round(picture.height * columns / picture.width * CELL_ASPECT_RATIO))
        scaled = picture.convert("L").resize((columns, rows), Image.Resampling.LANCZOS)
        pixels = scaled.load()

        last = len(CHARACTER_RAMP) - 1
        lines = []
        for y in range(rows):
            lines.append("".join(CHARACTER_RAMP[pixels[x, y] * last // 255] for x in range(columns)))
        return "\n".join(lines)
