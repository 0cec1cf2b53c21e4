"""Domain layer errors.

    DomainError
    ├── InvalidInputError
    │   ├── InvalidTargetError
    │   └── InvalidVoteValueError
    ├── NotFoundError
    │   ├── TargetNotFoundError
    │   └── ParentNotFoundError
    ├── ConflictError
    │   └── ConflictRetryableError
    └── StorageError
"""


class DomainError(Exception):
    """Base domain error."""

    pass


class InvalidInputError(DomainError):
    """Malformed input, rejected before storage is touched."""

    pass


class InvalidTargetError(InvalidInputError):
    """A vote names both a post and a comment, or neither."""

    pass


class InvalidVoteValueError(InvalidInputError):
    """Requested vote value is not one of -1, 0 or +1."""

    def __init__(self, value: object):
        self.value = value
        super().__init__(f"Vote value must be -1, 0 or 1, got {value!r}")


class NotFoundError(DomainError):
    """Raised when a requested resource is not found."""

    def __init__(self, resource: str, identifier: str):
        self.resource = resource
        self.identifier = identifier
        super().__init__(f"{resource} not found: {identifier}")


class TargetNotFoundError(NotFoundError):
    """The post or comment being voted on does not exist."""

    pass


class ParentNotFoundError(NotFoundError):
    """The parent of a reply is not present."""

    def __init__(self, identifier: str):
        super().__init__("Parent comment", identifier)


class ConflictError(DomainError):
    """The request contradicts current state, e.g. an existing friendship."""

    pass


class ConflictRetryableError(ConflictError):
    """A uniqueness race persisted after the retry budget was spent.

    Callers may retry the whole operation.
    """

    def __init__(self, operation: str, attempts: int):
        self.operation = operation
        self.attempts = attempts
        super().__init__(
            f"{operation} conflicted with a concurrent write after {attempts} attempts"
        )


class StorageError(DomainError):
    """Opaque failure of the persistence collaborator. Not retried."""

    def __init__(self, operation: str):
        self.operation = operation
        super().__init__(f"Storage failure during {operation}")
