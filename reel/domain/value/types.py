"""Domain value objects for Reel.

Value objects are immutable and defined by their values, not identity.
They encapsulate validation rules and business logic.
"""

from enum import Enum

from pydantic import Field

from reel.domain.value.common import ValueObject


class ModerationStatus(str, Enum):
    """Visibility state of a comment.

    Only approved comments appear in list and thread views.
    """

    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"


class ReportReason(str, Enum):
    """Reason a user gives when reporting a comment."""

    SPAM = "spam"
    INAPPROPRIATE = "inappropriate"
    HARASSMENT = "harassment"
    HATE_SPEECH = "hate_speech"
    OTHER = "other"


class UserRole(str, Enum):
    """Role of an account."""

    USER = "user"
    ADMIN = "admin"


class CommentSortField(str, Enum):
    """Fields a top-level comment listing can be sorted by."""

    CREATED_AT = "created_at"
    LIKES_COUNT = "likes_count"
    REPLIES_COUNT = "replies_count"


class SortOrder(str, Enum):
    """Sort direction."""

    ASC = "asc"
    DESC = "desc"


class ThreadInfo(ValueObject):
    """Nesting metadata assigned to a comment when it is created.

    ``path`` lists the ancestor ids from the root down, each prefixed with
    ``/``. Top-level comments have level 0 and an empty path.
    """

    level: int = Field(default=0, ge=0)
    path: str = ""

    @property
    def ancestor_ids(self) -> list[str]:
        """Ancestor ids in root-first order."""
        return [segment for segment in self.path.split("/") if segment]


class FieldError(ValueObject):
    """A single failed field check."""

    field: str
    message: str


class ValidationResult(ValueObject):
    """Outcome of validating an entity's input."""

    errors: list[FieldError] = []

    @property
    def ok(self) -> bool:
        """True when no field failed."""
        return not self.errors
