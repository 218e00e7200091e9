"""Exceptions raised by seqvault."""


class SeqvaultError(Exception):
    """Base class for seqvault failures."""


class ConversionError(SeqvaultError):
    """A fatal I/O failure during extraction or conversion."""

    def __init__(self, operation: str, path: object, detail: str | None = None):
        self.operation = operation
        self.path = path
        message = f"Could not {operation} '{path}'"
        if detail:
            message += f": {detail}"
        super().__init__(message)


class AssetNotFoundError(ConversionError):
    """An image reference points at a file that does not exist."""

    def __init__(self, path: object, reference: str):
        self.reference = reference
        super().__init__("copy asset", path, f"referenced as '{reference}'")
