"""Exceptions raised while loading and normalizing API documents."""


class SpecGuardError(Exception):
    """Base exception for specguard errors."""


class DocumentLoadError(SpecGuardError):
    """Raised when a document cannot be read, fetched, or deserialized."""

    def __init__(self, source: str, reason: str):
        super().__init__(f"Failed to load {source}: {reason}")
        self.source = source
        self.reason = reason


class InvalidSpecError(SpecGuardError):
    """Raised when a document fails structural validation."""

    def __init__(self, details: str):
        super().__init__(details)
        self.details = details


class UnsupportedVersionError(SpecGuardError):
    """Raised when a document is neither OpenAPI 3.x nor Swagger 2.0."""


class RemoteReferenceError(SpecGuardError):
    """Raised when a document references something outside itself."""

    def __init__(self, uri: str):
        super().__init__(f"Remote $ref not supported: {uri}")
        self.uri = uri
