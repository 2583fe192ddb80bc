from .document import UnsupportedDocumentError, parse_document
from .models import ParsedDoc

__all__ = ["ParsedDoc", "UnsupportedDocumentError", "parse_document"]
