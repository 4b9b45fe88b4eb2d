"""Exception definitions for inherit-profile."""


class InheritProfileError(Exception):
    """Base exception for profile inheritance errors."""

    def __init__(self, message: str, context: dict | None = None):
        """Initialize error with message and optional context.

        Args:
            message: Human-readable error message
            context: Optional dict with error context (paths, names, etc.)
        """
        super().__init__(message)
        self.message = message
        self.context = context or {}


class ProfileNotFoundError(InheritProfileError):
    """Raised when a profile name is not known to the registry."""

    pass


class JsoncParseError(InheritProfileError):
    """Raised when a JSON-with-comments document cannot be parsed."""

    pass


class DocumentReadError(InheritProfileError):
    """Raised when a managed document cannot be read verbatim."""

    pass


class DocumentWriteError(InheritProfileError):
    """Raised when a managed document cannot be written back."""

    pass


class ExtensionInstallError(InheritProfileError):
    """Raised when the editor host fails to install an extension."""

    pass
