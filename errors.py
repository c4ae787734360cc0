class DropBenchError(Exception):
    """Base exception for benchmark errors."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class InvalidIdentifierError(DropBenchError, ValueError):
    """Raised when a table name is not a plain MySQL identifier."""

    def __init__(self, identifier):
        super().__init__(f"Invalid table name: {identifier!r}")
        self.identifier = identifier


class InvalidDsnError(DropBenchError, ValueError):
    """Raised when a DSN does not look like user:password@tcp(host:port)/database."""

    def __init__(self, dsn: str):
        super().__init__(f"Invalid DSN: {dsn!r}")
        self.dsn = dsn
