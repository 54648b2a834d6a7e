#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/org2gmi/utils/encoding.py
"""Character encoding detection for Org source files.

Org files are almost always UTF-8, but older notes written under other
locales still turn up. Detection uses chardet and falls back to a fixed
list of encodings.
"""

from __future__ import annotations

import logging

import chardet

logger = logging.getLogger(__name__)

DEFAULT_FALLBACK_ENCODINGS = ("utf-8", "utf-8-sig", "latin-1")


def detect_encoding(
    data: bytes,
    sample_size: int = 8192,
    confidence_threshold: float = 0.7,
) -> str | None:
    """Detect character encoding of binary data using chardet.

    Parameters
    ----------
    data : bytes
        Binary data to analyze
    sample_size : int, default 8192
        Number of bytes to sample for detection (uses first N bytes)
    confidence_threshold : float, default 0.7
        Minimum confidence level (0.0-1.0) required to trust detection

    Returns
    -------
    str | None
        Detected encoding name, or None when detection fails or the
        confidence is below the threshold

    """
    sample = data[:sample_size]
    result = chardet.detect(sample)
    if not result or not result.get("encoding"):
        logger.debug("chardet: No encoding detected")
        return None

    encoding = result["encoding"]
    confidence = result.get("confidence") or 0.0
    logger.debug("chardet detected encoding: %s (confidence: %.2f)", encoding, confidence)
    if confidence < confidence_threshold:
        logger.debug("chardet confidence %.2f below threshold %.2f", confidence, confidence_threshold)
        return None
    return encoding


def read_text_with_encoding_detection(
    data: bytes,
    fallback_encodings: tuple[str, ...] = DEFAULT_FALLBACK_ENCODINGS,
    use_chardet: bool = True,
) -> str:
    """Decode binary data as text.

    UTF-8 is tried first; chardet is consulted only when that fails, then
    each of ``fallback_encodings`` in order.

    Parameters
    ----------
    data : bytes
        Binary data to decode
    fallback_encodings : tuple of str, default ("utf-8", "utf-8-sig", "latin-1")
        Encodings to try after detection
    use_chardet : bool, default True
        Whether to attempt chardet-based detection

    Returns
    -------
    str
        Decoded text content

    """
    try:
        return data.decode("utf-8")
    except UnicodeDecodeError:
        pass

    if use_chardet:
        detected_encoding = detect_encoding(data)
        if detected_encoding:
            try:
                return data.decode(detected_encoding)
            except (UnicodeDecodeError, LookupError) as e:
                logger.debug("Failed to decode with detected encoding %s: %s", detected_encoding, e)

    for encoding in fallback_encodings:
        try:
            text = data.decode(encoding)
        except (UnicodeDecodeError, LookupError) as e:
            logger.debug("Failed to decode with %s: %s", encoding, e)
            continue
        logger.debug("Decoded with encoding: %s", encoding)
        return text

    logger.warning("All encoding attempts failed, using utf-8 with error replacement")
    return data.decode("utf-8", errors="replace")


__all__ = ["detect_encoding", "read_text_with_encoding_detection"]
