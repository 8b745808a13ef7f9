"""
Error types raised by the conversion pipeline.

Every failure is a ConvertError subclass. Client errors describe bad input
(unreadable bytes, undecodable payload, impossible board size); an encode
failure is internal and indicates a bug rather than bad input.
"""


class ConvertError(Exception):
    """Base class for all conversion failures."""

    kind = "convert_error"
    is_client_error = True

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    def to_dict(self) -> dict:
        """Convert to dictionary for JSON error responses."""
        return {"detail": self.message, "kind": self.kind}


class InvalidInputError(ConvertError):
    """The container format of the byte stream could not be determined."""

    kind = "invalid_input"


class UnsupportedFormatError(ConvertError):
    """The format was recognized but the payload could not be decoded."""

    kind = "unsupported_format"


class InvalidBoardSizeError(ConvertError):
    """Board columns or rows is less than one."""

    kind = "invalid_board_size"


class EncodeFailureError(ConvertError):
    """The rendered raster could not be encoded to the output format."""

    kind = "encode_failure"
    is_client_error = False
