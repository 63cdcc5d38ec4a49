"""Domain layer errors."""


class DomainError(Exception):
    """Base domain error."""

    pass


class ValidationError(DomainError):
    """Domain validation error."""

    pass


class NotAuthorizedError(DomainError):
    """Raised when a user attempts to change content they don't own."""

    def __init__(self, resource: str, resource_id: str, user_id: str):
        self.resource = resource
        self.resource_id = resource_id
        self.user_id = user_id
        super().__init__(
            f"User {user_id} is not authorized to modify {resource} {resource_id}"
        )


class NotFoundError(DomainError):
    """Raised when a requested resource is not found."""

    def __init__(self, resource: str, identifier: str):
        self.resource = resource
        self.identifier = identifier
        super().__init__(f"{resource} not found: {identifier}")


class SubmissionInProgressError(DomainError):
    """Raised when a comment write starts while another one is in flight."""

    def __init__(self, post_id: str, action: str = "submission"):
        self.post_id = post_id
        self.action = action
        super().__init__(f"A comment {action} is already in progress for {post_id}")


class StoreError(DomainError):
    """Raised when the backing store rejects or fails an operation.

    Persistence implementations wrap driver failures in this so callers can
    surface a transient error without knowing the storage technology.
    """

    def __init__(self, operation: str, detail: str):
        self.operation = operation
        self.detail = detail
        super().__init__(f"Store operation '{operation}' failed: {detail}")
