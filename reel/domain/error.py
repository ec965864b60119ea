"""Domain layer errors."""

from reel.domain.value.types import FieldError


class DomainError(Exception):
    """Base domain error."""

    pass


class ValidationError(DomainError):
    """Input failed one or more field checks."""

    def __init__(self, errors: list[FieldError]):
        self.errors = errors
        super().__init__("; ".join(f"{e.field}: {e.message}" for e in errors))


class NotFoundError(DomainError):
    """Raised when a requested resource is not found."""

    def __init__(self, resource: str, identifier: str):
        self.resource = resource
        self.identifier = identifier
        super().__init__(f"{resource} not found: {identifier}")


class CrossVideoError(DomainError):
    """Raised when a reply targets a comment that belongs to another video."""

    def __init__(self, parent_id: str, video_id: str):
        self.parent_id = parent_id
        self.video_id = video_id
        super().__init__(
            f"Parent comment {parent_id} does not belong to video {video_id}"
        )


class DepthLimitError(DomainError):
    """Raised when a reply would nest deeper than the allowed level."""

    def __init__(self, parent_id: str, max_depth: int):
        self.parent_id = parent_id
        self.max_depth = max_depth
        super().__init__(
            f"Maximum comment nesting level reached: comment {parent_id} "
            f"is at level {max_depth} and cannot receive replies"
        )


class NotAuthorizedError(DomainError):
    """Raised when a user attempts to modify content they don't own."""

    def __init__(self, action: str, resource: str, resource_id: str, user_id: str):
        super().__init__(
            f"User {user_id} is not authorized to {action} {resource} {resource_id}"
        )


class StoreError(DomainError):
    """The backing document store failed."""

    pass


class CacheError(DomainError):
    """The read cache failed. Never surfaced to callers."""

    pass
