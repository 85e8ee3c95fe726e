class IngestError(Exception):
    """Base error for problems the caller has to fix (bad kind, bad file type)"""


class UnsupportedDocumentError(IngestError):
    """Raised when a file cannot be routed to any extractor"""
