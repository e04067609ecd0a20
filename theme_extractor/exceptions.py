"""Exceptions for theme_extractor with contextual information."""

from typing import Any, Dict, List, Optional


class ThemeExtractorError(Exception):
    """Base error for theme_extractor with contextual information."""

    def __init__(
        self,
        message: str,
        context: Optional[Dict[str, Any]] = None,
        original_exception: Optional[Exception] = None,
    ):
        """
        Initialize a theme_extractor error.

        Args:
            message: Error message
            context: Optional context information (source, line, column, attribute, etc.)
            original_exception: Original exception that caused this error
        """
        super().__init__(message)
        self.context = context or {}
        self.original_exception = original_exception

    def __str__(self) -> str:
        """Get string representation with context."""
        base_msg = super().__str__()
        if self.context:
            context_items = []
            for key, value in self.context.items():
                if isinstance(value, str) and len(value) > 50:
                    # Truncate long values
                    value = value[:47] + "..."
                context_items.append(f"{key}={value}")
            context_str = ", ".join(context_items)
            return f"{base_msg} (Context: {context_str})"
        return base_msg

    def __repr__(self) -> str:
        base_repr = super().__repr__()
        if self.context:
            return f"{base_repr} (context={self.context!r})"
        return base_repr

    def add_context(self, key: str, value: Any) -> None:
        """Add context information to the exception."""
        self.context[key] = value

    def get_context(self, key: str, default: Any = None) -> Any:
        """Get context information from the exception."""
        return self.context.get(key, default)


class SchemeParseError(ThemeExtractorError):
    """Scheme text is not well-formed markup."""

    pass


class SourceReadError(ThemeExtractorError):
    """A scheme or mapping file could not be read."""

    pass


class MappingError(ThemeExtractorError):
    """Mapping document has the wrong shape or is not valid JSON."""

    pass


class CyclicInheritanceError(ThemeExtractorError):
    """Attribute inheritance through baseAttributes forms a cycle."""

    def __init__(
        self,
        chain: List[str],
        context: Optional[Dict[str, Any]] = None,
    ):
        self.chain = list(chain)
        message = "Cyclic attribute inheritance: " + " -> ".join(self.chain)
        merged = {"attribute": self.chain[0] if self.chain else None}
        merged.update(context or {})
        super().__init__(message, context=merged)


class RenderError(ThemeExtractorError):
    """Value tree contains something that cannot be rendered."""

    pass
