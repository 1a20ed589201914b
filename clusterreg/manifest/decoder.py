"""Decoder — turn a buffer of concatenated YAML documents into Python values."""

from __future__ import annotations

from typing import Any, Iterator

import yaml

from clusterreg.errors import MalformedDocument


def decode_documents(data: bytes | str) -> Iterator[Any]:
    """Lazily decode every YAML document in ``data``.

    Documents are separated by ``---``. Empty documents (nothing between two
    separators) are skipped and do not count towards the document index.

    Raises:
        MalformedDocument: on the first document that fails to decode. The
            stream cannot be resumed past a parse error.
    """
    index = 0
    stream = yaml.safe_load_all(data)
    while True:
        try:
            doc = next(stream)
        except StopIteration:
            return
        except yaml.YAMLError as e:
            mark = getattr(e, "problem_mark", None)
            offset = mark.index if mark is not None else None
            raise MalformedDocument(
                f"Invalid YAML in document {index}: {e}", document_index=index, offset=offset
            ) from e
        if doc is None:
            continue
        yield doc
        index += 1


def decode_all(data: bytes | str) -> list[Any]:
    """Decode every document up front, so a failure leaves no partial result."""
    return list(decode_documents(data))
