"""
ScholarAI exceptions.
"""


class ScholarAIError(Exception):
    """Base exception for ScholarAI errors.

    Carries the HTTP status code the server should answer with.
    """

    status_code: int = 500

    def __init__(self, message: str, status_code: int | None = None):
        self.message = message
        if status_code is not None:
            self.status_code = status_code
        super().__init__(self.message)


class InvalidRequestError(ScholarAIError):
    """Raised when a request field is missing or malformed."""

    status_code = 400


class NoDocumentsError(ScholarAIError):
    """Raised when a question has no documents in scope."""

    status_code = 400

    def __init__(self, message: str = "No docs available. Upload first."):
        super().__init__(message)


class MissingCredentialsError(ScholarAIError):
    """Raised when the embedding/completion API key is not configured."""

    status_code = 400

    def __init__(self, message: str = "Missing OPENAI_API_KEY on server"):
        super().__init__(message)


class DocumentNotFoundError(ScholarAIError):
    """Raised when a document id is unknown."""

    status_code = 404

    def __init__(self, document_id: str | None):
        self.document_id = document_id
        super().__init__("Doc not found")


class UploadTooLargeError(ScholarAIError):
    """Raised when an uploaded file exceeds the size limit."""

    status_code = 413

    def __init__(self, filename: str, limit: int):
        self.filename = filename
        self.limit = limit
        super().__init__(f"File '{filename}' exceeds the {limit // (1024 * 1024)}MB limit")


class ExtractionError(ScholarAIError):
    """Raised when text cannot be extracted from an uploaded file."""

    def __init__(self, filename: str, message: str):
        self.filename = filename
        super().__init__(f"Failed to extract text from '{filename}': {message}")


class UnsupportedFileTypeError(ExtractionError):
    """Raised when no extractor handles the file's type."""

    def __init__(self, filename: str, content_type: str | None):
        self.filename = filename
        self.content_type = content_type
        ScholarAIError.__init__(
            self, f"Unsupported file type: {content_type or 'unknown'} ({filename})"
        )


class EmbeddingMismatchError(ScholarAIError):
    """Raised when the embedding API returns a different number of vectors than inputs."""

    def __init__(self, expected: int, received: int):
        self.expected = expected
        self.received = received
        super().__init__(f"Embedding mismatch: got {received} for {expected} chunks")
