"""Wire encoding of the document for the remote store: base64(UTF-8 JSON)."""

import base64
import binascii
import json
from typing import Any

from ..exceptions import DecodeError
from ..models.document import AppDocument


def encode_document(document: AppDocument) -> str:
    """Pretty-print the document as JSON (2-space indent) and base64-encode it."""
    text = json.dumps(document.to_dict(), indent=2, ensure_ascii=False)
    return base64.b64encode(text.encode("utf-8")).decode("ascii")


def decode_content(content: str) -> Any:
    """
    Decode base64 content from the remote store into parsed JSON.

    The contents API wraps base64 at 60 columns, so whitespace is ignored.

    Raises:
        DecodeError: If the content is not base64, UTF-8 or JSON.
    """
    try:
        compact = "".join(content.split())
        raw = base64.b64decode(compact, validate=True)
        return json.loads(raw.decode("utf-8"))
    except (binascii.Error, ValueError, AttributeError, RecursionError) as e:
        raise DecodeError(f"Remote content could not be decoded: {e}", source="remote") from e
