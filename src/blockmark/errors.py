"""Custom exceptions for Blockmark."""


class BlockmarkError(Exception):
    """Base class for all errors raised by Blockmark."""


class ConfigurationError(BlockmarkError, ValueError):
    """Raised when the renderer is configured with invalid values."""


class MalformedOverrideError(ConfigurationError):
    """Raised when a registry override is not a mapping of callables.

    Attributes:
        registry: Name of the registry being built ("style", "block", ...)
        value: The offending override value
    """

    def __init__(self, registry: str, value: object, message: str | None = None):
        """Initialize MalformedOverrideError.

        Args:
            registry: Name of the registry being built
            value: The offending override value
            message: Optional human-readable error message
        """
        self.registry = registry
        self.value = value
        if message is None:
            message = (
                f"The {registry} overrides must be a mapping, "
                f"got {type(value).__name__}"
            )
        super().__init__(message)


class FrontMatterError(ConfigurationError):
    """Raised when front matter cannot be built from document properties."""


class UnsupportedStyleError(BlockmarkError, ValueError):
    """Raised when a style value does not fit its kind.

    Attributes:
        kind: Style kind (e.g. "link")
        value: The value that was annotated on the run
    """

    def __init__(self, kind: str, value: object):
        self.kind = kind
        self.value = value
        super().__init__(f"Style '{kind}' cannot take the value {value!r}")


class UnsupportedRunTypeError(BlockmarkError, ValueError):
    """Raised when a styled run is not literal text (mentions, equations)."""

    def __init__(self, run_type: str):
        self.run_type = run_type
        super().__init__(f"Rich text of type '{run_type}' is not supported")


class MissingRendererError(BlockmarkError, LookupError):
    """Raised when a registry has no entry for a requested type or kind.

    Attributes:
        registry: Name of the registry that was queried
        name: The block type or style kind that was not found
    """

    def __init__(self, registry: str, name: str):
        """Initialize MissingRendererError.

        Args:
            registry: Name of the registry that was queried
            name: The block type or style kind that was not found
        """
        self.registry = registry
        self.name = name
        super().__init__(f"No {registry} renderer configured for '{name}'")


class RenderError(BlockmarkError, ValueError):
    """Raised by render functions when a node cannot be expressed."""


class StructuralError(BlockmarkError, RuntimeError):
    """Raised when an internal invariant of the renderer is broken.

    This is a bug; it is never caused by the input document.
    """
