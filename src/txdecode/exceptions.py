class DecodeError(ValueError):
    """Base class for everything that can go wrong while decoding a transaction."""


class InvalidHex(DecodeError):
    pass


class TruncatedInput(DecodeError):
    """Transaction data ended before `field` could be read in full."""

    def __init__(self, field):
        self.field = field
        super().__init__(f"Input too short for {field}")


class InvalidWitness(DecodeError):
    def __init__(self, message="Invalid witness data"):
        super().__init__(message)


class SerializationError(DecodeError):
    pass


class TrailingData(DecodeError):
    def __init__(self, count):
        self.count = count
        super().__init__(f"{count} unexpected bytes after locktime")
