"""Standard exception hierarchy for parse-links.

All parse-links exceptions inherit from ParseLinksError, making it easy
to catch all library-specific errors.

Exception Hierarchy:
    ParseLinksError (base)
    ├── ConfigurationError - Invalid render configuration
    ├── RenderError - Caller broke the render contract
    │   ├── MissingParseError - render() called without a parse
    │   └── MissingIdentityMapError - render() called without an identity map
    ├── IdentityError - Base for identity assignment errors
    │   ├── IdentityConflictError - Node already has an identifier
    │   └── MissingNameError - Node has no surface word to mint from
    └── OutputSyntaxError - Rendered text could not be read back

Missing linkage inside a graph (no name, no identifier, no ref) is NOT an
error: the renderer skips that single fact and keeps going.
"""


class ParseLinksError(Exception):
    """Base exception for all parse-links errors.

    Catch this to handle any library-specific exception:
        try:
            text = render(parse, identity_map)
        except ParseLinksError as e:
            logger.error(f"Render failed: {e}")
    """

    def __init__(self, message: str, cause: Exception | None = None):
        super().__init__(message)
        self.cause = cause

    def __str__(self) -> str:
        if self.cause:
            return f"{super().__str__()} (caused by: {self.cause})"
        return super().__str__()


# =============================================================================
# Configuration Errors
# =============================================================================


class ConfigurationError(ParseLinksError):
    """Invalid configuration.

    Raised when RenderConfig has invalid settings or a config file
    cannot be read.
    """

    pass


# =============================================================================
# Render Errors
# =============================================================================


class RenderError(ParseLinksError):
    """Base exception for render precondition failures."""

    pass


class MissingParseError(RenderError):
    """render() was called with no parse."""

    def __init__(self, message: str = "No parse given to render"):
        super().__init__(message)


class MissingIdentityMapError(RenderError):
    """render() was called with no identity map.

    The identity map is owned by the caller so it can be shared across
    several parses of one sentence; the renderer never creates one
    implicitly.
    """

    def __init__(self, message: str = "No identity map given to render"):
        super().__init__(message)


# =============================================================================
# Identity Errors
# =============================================================================


class IdentityError(ParseLinksError):
    """Base exception for identity assignment errors."""

    pass


class IdentityConflictError(IdentityError):
    """An identifier was assigned twice to the same canonical node."""

    def __init__(self, existing: str, attempted: str):
        super().__init__(
            f"Node already identified as '{existing}', refusing '{attempted}'"
        )
        self.existing = existing
        self.attempted = attempted


class MissingNameError(IdentityError):
    """A canonical node has no surface word to build an identifier from."""

    def __init__(self, handle: int):
        super().__init__(f"Feature node #{handle} has no 'name' value")
        self.handle = handle


# =============================================================================
# Output Errors
# =============================================================================


class OutputSyntaxError(ParseLinksError):
    """Rendered link text is not well-formed.

    Raised when:
    - Parentheses are unbalanced
    - A string literal is not terminated
    """

    def __init__(self, message: str, position: int | None = None):
        if position is not None:
            message = f"{message} at offset {position}"
        super().__init__(message)
        self.position = position
