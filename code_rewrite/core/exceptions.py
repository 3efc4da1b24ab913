"""
Base exception hierarchy for structural search and rewrite operations.

Author: Vasiliy Zdanovskiy
email: vasilyvz@gmail.com
"""


class RewriteError(Exception):
    """Base exception for code rewrite operations."""

    def __init__(self, message: str, code: str = None, details: dict = None):
        """
        Initialize exception.

        Args:
            message: Human-readable error message
            code: Optional error code for programmatic handling
            details: Optional dictionary with additional error details
        """
        super().__init__(message)
        self.message = message
        self.code = code
        self.details = details or {}


class EncodingError(RewriteError):
    """Raised when a byte span does not align with valid source text."""

    def __init__(self, message: str, start: int = None, end: int = None, details: dict = None):
        """
        Initialize encoding error.

        Args:
            message: Error message
            start: Optional start byte of the offending span
            end: Optional end byte of the offending span
            details: Optional additional details
        """
        super().__init__(message, code="ENCODING_ERROR", details=details)
        self.start = start
        self.end = end


class PatternSyntaxError(RewriteError):
    """Raised when a pattern or template string cannot be parsed."""

    def __init__(self, message: str, source: str = None, language: str = None, details: dict = None):
        """
        Initialize pattern syntax error.

        Args:
            message: Error message
            source: Optional pattern/template text that failed
            language: Optional language identifier used for parsing
            details: Optional additional details
        """
        super().__init__(message, code="PATTERN_SYNTAX_ERROR", details=details)
        self.source = source
        self.language = language


class UnboundCaptureError(RewriteError):
    """Raised when a template references a metavariable that was not captured."""

    def __init__(self, message: str, name: str = None, details: dict = None):
        super().__init__(message, code="UNBOUND_CAPTURE_ERROR", details=details)
        self.name = name


class EditConflictError(RewriteError):
    """Raised when edits of one batch overlap or fall outside the source."""

    def __init__(self, message: str, edits: tuple = None, details: dict = None):
        """
        Initialize edit conflict error.

        Args:
            message: Error message
            edits: Optional conflicting edits
            details: Optional additional details
        """
        super().__init__(message, code="EDIT_CONFLICT_ERROR", details=details)
        self.edits = edits or ()


class StaleNodeError(RewriteError):
    """Raised when a node is used after its owning root was closed."""

    def __init__(self, message: str, details: dict = None):
        super().__init__(message, code="STALE_NODE_ERROR", details=details)


class UnknownLanguageError(RewriteError):
    """Raised when a language identifier is not registered."""

    def __init__(self, message: str, language: str = None, details: dict = None):
        super().__init__(message, code="UNKNOWN_LANGUAGE_ERROR", details=details)
        self.language = language


class LanguageMismatchError(RewriteError):
    """Raised when a pattern is used against a tree of another language."""

    def __init__(
        self,
        message: str,
        pattern_language: str = None,
        tree_language: str = None,
        details: dict = None,
    ):
        super().__init__(message, code="LANGUAGE_MISMATCH_ERROR", details=details)
        self.pattern_language = pattern_language
        self.tree_language = tree_language


class ConfigurationError(RewriteError):
    """Raised when configuration is invalid."""

    def __init__(self, message: str, config_key: str = None, details: dict = None):
        """
        Initialize configuration error.

        Args:
            message: Error message
            config_key: Optional configuration key that is invalid
            details: Optional additional details
        """
        super().__init__(message, code="CONFIGURATION_ERROR", details=details)
        self.config_key = config_key
