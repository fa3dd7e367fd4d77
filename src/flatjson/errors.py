class FlatJsonError(ValueError):
    pass


class TokenError(FlatJsonError):
    """The input is not well-formed JSON or could not be read."""


class EncodingError(FlatJsonError):
    """The flat pairs could not be rendered as JSON."""
