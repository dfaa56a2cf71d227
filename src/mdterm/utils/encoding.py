#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/mdterm/utils/encoding.py
"""Character encoding detection for markdown input.

Markdown sources are expected to be UTF-8, but files from other tools are not
always. Undecodable bytes are decoded with the encoding ``chardet`` detects,
falling back to latin-1, which accepts any byte sequence.
"""

from __future__ import annotations

import logging
from typing import IO

import chardet

logger = logging.getLogger(__name__)


def detect_encoding(data: bytes, sample_size: int = 8192, confidence_threshold: float = 0.7) -> str | None:
    """Detect the character encoding of binary data using chardet.

    Parameters
    ----------
    data : bytes
        Binary data to inspect
    sample_size : int, default 8192
        Number of leading bytes passed to the detector
    confidence_threshold : float, default 0.7
        Minimum confidence for the detection to be trusted

    Returns
    -------
    str or None
        Detected encoding name, or None when nothing reliable was found

    """
    if not data:
        return None

    result = chardet.detect(data[:sample_size])
    encoding = result.get("encoding")
    confidence = result.get("confidence") or 0.0
    if not encoding:
        logger.debug("chardet: No encoding detected")
        return None

    logger.debug(f"chardet detected encoding: {encoding} (confidence: {confidence:.2f})")
    if confidence < confidence_threshold:
        logger.debug(f"chardet confidence {confidence:.2f} below threshold {confidence_threshold}")
        return None
    return encoding


def read_text_with_encoding_detection(data: bytes, fallback_encodings: list[str] | None = None) -> str:
    """Decode binary data as text.

    Strategies, in order:
    1. UTF-8 (a leading byte order mark is dropped)
    2. chardet-based detection
    3. Fallback encodings in order

    Parameters
    ----------
    data : bytes
        Binary data to decode
    fallback_encodings : list[str] | None, default None
        Encodings tried after detection; defaults to ``['cp1252', 'latin-1']``

    Returns
    -------
    str
        Decoded text content

    Examples
    --------
    >>> read_text_with_encoding_detection("café".encode("utf-8"))
    'café'

    """
    if fallback_encodings is None:
        fallback_encodings = ["cp1252", "latin-1"]

    try:
        return data.decode("utf-8-sig")
    except UnicodeDecodeError as e:
        logger.debug(f"Input is not valid UTF-8: {e}")

    detected_encoding = detect_encoding(data)
    if detected_encoding:
        try:
            text = data.decode(detected_encoding)
            logger.debug(f"Successfully decoded with chardet-detected encoding: {detected_encoding}")
            return text
        except (UnicodeDecodeError, LookupError) as e:
            logger.debug(f"Failed to decode with chardet-detected encoding {detected_encoding}: {e}")

    for encoding in fallback_encodings:
        try:
            text = data.decode(encoding)
            logger.debug(f"Successfully decoded with encoding: {encoding}")
            return text
        except (UnicodeDecodeError, LookupError) as e:
            logger.debug(f"Failed to decode with {encoding}: {e}")

    logger.warning("All encoding attempts failed, using utf-8 with error replacement")
    return data.decode("utf-8", errors="replace")


def normalize_stream_to_text(stream: IO[bytes] | IO[str]) -> str:
    """Read a binary or text stream to the end and return its text."""
    content = stream.read()
    if isinstance(content, bytes):
        return read_text_with_encoding_detection(content)
    return content
