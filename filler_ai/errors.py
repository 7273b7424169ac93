"""
Filler AI Error Hierarchy

Unified exception hierarchy for consistent error handling across the codebase.
All custom exceptions inherit from FillerAIError for easy catching and filtering.

Usage:
    from filler_ai.errors import PlacementError, ProtocolError

    try:
        placement = validate_placement(board, shape, anchor)
    except PlacementError as e:
        logger.debug(f"Rejected anchor: {e.message}, code: {e.code}")
"""

from typing import Any

__all__ = [
    "BatchShapeMismatchError",
    "BoardBoundsError",
    "CollisionWithOpponentError",
    "ConfigurationError",
    # Placement errors
    "EmptyShapeError",
    # Base error
    "FillerAIError",
    "InvalidStateError",
    "MultipleContactsError",
    "NoTerritoryContactError",
    "OutOfBoundsError",
    "PlacementError",
    # Protocol errors
    "ProtocolError",
    # Game rules errors
    "RulesViolationError",
    # Validation errors
    "ValidationError",
]


class FillerAIError(Exception):
    """Base exception for all Filler AI errors.

    Attributes:
        code: Machine-readable error code for categorization
        message: Human-readable error description
        context: Additional context for debugging
    """
    code: str = "FILLER_AI_ERROR"

    def __init__(
        self,
        message: str,
        code: str | None = None,
        context: dict[str, Any] | None = None,
    ):
        super().__init__(message)
        self.message = message
        if code:
            self.code = code
        self.context = context or {}

    def __str__(self) -> str:
        if self.context:
            ctx = ", ".join(f"{k}={v}" for k, v in self.context.items())
            return f"[{self.code}] {self.message} ({ctx})"
        return f"[{self.code}] {self.message}"

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "code": self.code,
            "message": self.message,
            "context": self.context,
        }


# =============================================================================
# Game Rules Errors
# =============================================================================


class RulesViolationError(FillerAIError):
    """Invalid move per game rules."""
    code: str = "RULES_VIOLATION"


class PlacementError(RulesViolationError):
    """A piece cannot legally be placed at the requested anchor.

    Every subclass carries a fixed human-readable message; the anchor and
    any offending cell are attached as context.

    Attributes:
        anchor: ``(x, y)`` anchor that was validated, when known
    """
    code: str = "PLACEMENT_ERROR"
    default_message: str = "Piece cannot be placed"

    def __init__(
        self,
        message: str | None = None,
        anchor: tuple[int, int] | None = None,
        cell: tuple[int, int] | None = None,
        context: dict[str, Any] | None = None,
    ):
        super().__init__(message or self.default_message, context=context)
        self.anchor = anchor
        if anchor is not None:
            self.context["anchor"] = anchor
        if cell is not None:
            self.context["cell"] = cell


class EmptyShapeError(PlacementError):
    """The piece shape has no filled cells."""
    code: str = "EMPTY_SHAPE"
    default_message: str = "Piece shape is empty"


class OutOfBoundsError(PlacementError):
    """A filled cell of the piece lands outside the board."""
    code: str = "OUT_OF_BOUNDS"
    default_message: str = "Piece extends outside grid boundaries"


class CollisionWithOpponentError(PlacementError):
    """A filled cell of the piece covers opponent territory."""
    code: str = "COLLISION_WITH_OPPONENT"
    default_message: str = "Piece overlaps with opponent territory"


class NoTerritoryContactError(PlacementError):
    """No filled cell of the piece covers own territory."""
    code: str = "NO_TERRITORY_CONTACT"
    default_message: str = "Piece doesn't touch existing territory"


class MultipleContactsError(PlacementError):
    """Two or more filled cells of the piece cover own territory.

    Attributes:
        touches: Number of own cells covered
    """
    code: str = "MULTIPLE_CONTACTS"
    default_message: str = "Piece touches territory at multiple cells"

    def __init__(
        self,
        message: str | None = None,
        anchor: tuple[int, int] | None = None,
        touches: int | None = None,
        context: dict[str, Any] | None = None,
    ):
        super().__init__(message, anchor=anchor, context=context)
        self.touches = touches
        if touches is not None:
            self.context["touches"] = touches


# =============================================================================
# State Errors
# =============================================================================


class InvalidStateError(FillerAIError):
    """Corrupted or unexpected game state.

    Raised when the engine is handed data in a configuration that the
    protocol or the calling code should never produce.
    """
    code: str = "INVALID_STATE"


class BoardBoundsError(InvalidStateError):
    """A board coordinate outside ``0 <= x < W, 0 <= y < H`` was accessed.

    Coordinates are never clamped; reaching this error is a caller bug.
    """
    code: str = "BOARD_BOUNDS"

    def __init__(
        self,
        message: str,
        position: tuple[int, int] | None = None,
        size: tuple[int, int] | None = None,
        context: dict[str, Any] | None = None,
    ):
        super().__init__(message, context=context)
        if position is not None:
            self.context["position"] = position
        if size is not None:
            self.context["size"] = size


class BatchShapeMismatchError(InvalidStateError):
    """A scoring batch mixed placements of different shapes.

    Batch caches key on the first covered cell only, so one batch must
    score exactly one piece shape.
    """
    code: str = "BATCH_SHAPE_MISMATCH"


# =============================================================================
# Validation Errors
# =============================================================================


class ValidationError(FillerAIError):
    """Base class for validation errors."""
    code: str = "VALIDATION_ERROR"


class ConfigurationError(ValidationError):
    """Invalid configuration."""
    code: str = "CONFIGURATION_ERROR"


class ProtocolError(ValidationError):
    """Malformed input from the game engine.

    Attributes:
        line: The offending input line, when available
    """
    code: str = "PROTOCOL_ERROR"

    def __init__(
        self,
        message: str,
        line: str | None = None,
        context: dict[str, Any] | None = None,
    ):
        super().__init__(message, context=context)
        self.line = line
        if line is not None:
            self.context["line"] = line.rstrip("\n")
