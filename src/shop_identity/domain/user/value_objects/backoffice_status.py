from enum import Enum


class BackofficeStatus(str, Enum):
    """Approval state of an operator account (who may log in and who not)."""

    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"
