"""
Utility functions for the AT&T Speech SDK.
"""

from __future__ import annotations

import importlib.metadata
import os
import re
from typing import Any
from typing import BinaryIO
from typing import Union

import aiofiles

AudioSource = Union[bytes, bytearray, str, "os.PathLike[str]", BinaryIO]
TextSource = Union[str, bytes, bytearray, "os.PathLike[str]", BinaryIO]

_ACRONYM_BOUNDARY = re.compile(r"([A-Z\d]+)([A-Z][a-z])")
_WORD_BOUNDARY = re.compile(r"([a-z\d])([A-Z])")


def underscore(name: str) -> str:
    """
    Convert a camelCase or PascalCase identifier to snake_case.

    Args:
        name: Identifier to convert.

    Returns:
        The snake_case form of the identifier.

    Examples:
        >>> underscore("accessToken")
        'access_token'
        >>> underscore("HTTPResponseCode")
        'http_response_code'
    """
    word = name.replace("::", "/")
    word = _ACRONYM_BOUNDARY.sub(r"\1_\2", word)
    word = _WORD_BOUNDARY.sub(r"\1_\2", word)
    return word.replace("-", "_").lower()


def underscore_keys(data: Any) -> Any:
    """
    Rename the keys of a parsed JSON object from camelCase to snake_case.

    Nested objects are renamed recursively. For list values only the first
    element is renamed, and only when it is an object; later elements keep the
    keys the service sent. Non-dict input is returned unchanged.

    Args:
        data: Parsed JSON value.

    Returns:
        A new tree with renamed keys.

    Examples:
        >>> underscore_keys({"accessToken": "X", "nested": {"fooBar": 1}})
        {'access_token': 'X', 'nested': {'foo_bar': 1}}
    """
    if not isinstance(data, dict):
        return data

    underscored: dict[str, Any] = {}
    for key, value in data.items():
        if isinstance(value, dict):
            value = underscore_keys(value)
        elif isinstance(value, list) and value and isinstance(value[0], dict):
            # Only the head of a list is renamed; later elements keep the service's keys
            value = [underscore_keys(value[0]), *value[1:]]
        underscored[underscore(str(key))] = value
    return underscored


def header_name(key: str) -> str:
    """
    Convert an option key to its HTTP header form.

    Underscores become hyphens and each word is capitalized, so
    ``content_type`` and ``Content_Type`` both map to ``Content-Type``.
    Keys without underscores are returned unchanged.
    """
    if "_" not in key:
        return key
    return "-".join(part[:1].upper() + part[1:] for part in key.split("_"))


async def load_audio(audio: AudioSource) -> bytes:
    """
    Read audio data into memory.

    Args:
        audio: Raw bytes, a path to an audio file or a binary file object.

    Returns:
        The audio bytes.
    """
    if isinstance(audio, (bytes, bytearray)):
        return bytes(audio)
    if isinstance(audio, (str, os.PathLike)):
        async with aiofiles.open(audio, "rb") as f:
            return await f.read()
    return audio.read()


async def load_text(text_data: TextSource) -> bytes:
    """
    Prepare a synthesis payload.

    Strings are encoded as UTF-8 text. Path objects and binary file objects
    are read as-is.
    """
    if isinstance(text_data, str):
        return text_data.encode("utf-8")
    if isinstance(text_data, os.PathLike):
        async with aiofiles.open(text_data, "rb") as f:
            return await f.read()
    if isinstance(text_data, (bytes, bytearray)):
        return bytes(text_data)
    data = text_data.read()
    return data.encode("utf-8") if isinstance(data, str) else data


def get_version() -> str:
    """
    Get SDK version from package metadata or the package __init__.

    Returns:
        Version string
    """
    try:
        return importlib.metadata.version("att-speech")
    except importlib.metadata.PackageNotFoundError:
        from . import __version__

        return __version__
