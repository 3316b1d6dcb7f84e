import re
import typing
from collections.abc import Mapping

from .base import MISSING, is_sequence

_INDEX_RE = re.compile(r"\[([^\[\]]*)\]")


def split_path(path: typing.Union[str, typing.Sequence[typing.Any]]) -> typing.List[str]:
    """
    Split ``"Metadata.Genre[0].tag"`` into ``["Metadata", "Genre", "0", "tag"]``.
    A pre-split sequence of segments is returned as a list of strings.
    """
    if is_sequence(path):
        return [str(segment) for segment in path]

    path = _INDEX_RE.sub(lambda m: "." + m.group(1).strip("'\""), str(path))
    return [segment for segment in path.split(".") if segment != ""]


def get_path(
    document: typing.Any,
    path: typing.Union[str, typing.Sequence[typing.Any]],
    default: typing.Any = MISSING,
) -> typing.Any:
    """
    Look up a segmented path in a nested document of mappings and lists.

    Args:
        document: The payload to read from. It is never modified.
        path: Dotted path, optionally with bracketed indices, or a sequence
            of segments.
        default: Returned when any segment is absent.

    A string path that is itself a key of ``document`` is returned as is,
    before any splitting.
    Returns:
        The value at the path, or ``default``.
    """
    if isinstance(path, str) and isinstance(document, Mapping) and path in document:
        return document[path]

    segments = split_path(path)
    if not segments:
        return default

    current = document
    for segment in segments:
        if isinstance(current, Mapping):
            if segment not in current:
                return default
            current = current[segment]
        elif is_sequence(current):
            try:
                index = int(segment)
            except ValueError:
                return default
            if not -len(current) <= index < len(current):
                return default
            current = current[index]
        else:
            return default
    return current
