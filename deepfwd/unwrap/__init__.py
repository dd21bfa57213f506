"""
Unwrap stages.

- ``MimeUnwrapper``  : nested ``message/rfc822`` layers → MimeResult seed
- ``InlineUnwrapper``: bounded detector loop over forwarded text
"""

from deepfwd.unwrap.inline_layer import InlineUnwrapper
from deepfwd.unwrap.mime_layer import InvalidInputError, MimeUnwrapper

__all__ = ["InlineUnwrapper", "InvalidInputError", "MimeUnwrapper"]
