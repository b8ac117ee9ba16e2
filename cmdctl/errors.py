class CommandError(Exception):
    """Base exception for command registration failures."""

    pass


class InvalidHandlerError(CommandError):
    """Raised when a callable does not have the (sender, args) handler shape."""

    def __init__(self, handler: object, reason: str):
        self.handler = handler
        self.reason = reason
        name = getattr(handler, "__qualname__", repr(handler))
        super().__init__(f"{name} is not a valid command handler: {reason}")


class InvalidIdentifierError(CommandError):
    """Raised when a handler declares a blank primary command."""

    pass


class IdentifierConflictError(CommandError):
    """Raised when strict registration finds an identifier that is already taken."""

    def __init__(self, identifier: tuple[str, ...]):
        self.identifier = identifier
        super().__init__(f"Command identifier '{' '.join(identifier)}' is already registered")
