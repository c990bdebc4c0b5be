class DDEXError(Exception):
    pass


class SerializationError(DDEXError):
    pass


class MessageWriteError(DDEXError):
    pass


class MessageValidationError(DDEXError):
    def __init__(self, message: str, *, reference: str | None = None) -> None:
        super().__init__(message)
        self.reference = reference
