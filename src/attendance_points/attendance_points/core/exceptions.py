from __future__ import annotations


class DomainError(Exception):
    """Base exception for business rule violations."""

    code = "domain_error"


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""

    code = "validation_error"


class AlreadyCheckedIn(ValidationError):
    """Raised when the employee still has an open attendance record."""

    code = "already_checked_in"


class CheckInRejected(DomainError):
    """A check-in attempt was refused. Terminal for that attempt."""

    code = "checkin_rejected"


class LocationUnavailable(CheckInRejected):
    """The device could not deliver a position (permission, error or timeout)."""

    code = "location_unavailable"

    def __init__(self, message: str = "Location is unavailable"):
        super().__init__(message)


class NoBranchAssigned(CheckInRejected):
    """The employee must check in at a branch but none is configured."""

    code = "no_branch_assigned"

    def __init__(self, message: str = "No branch is assigned to this employee's department"):
        super().__init__(message)


class OutOfRange(CheckInRejected):
    code = "out_of_range"

    def __init__(self, distance: float, radius: float, branch_name: str):
        self.distance = float(distance)
        self.radius = float(radius)
        self.branch_name = branch_name
        super().__init__(
            f'You are outside the allowed range of branch "{branch_name}": '
            f"current distance {self.distance:.0f} m, allowed {self.radius:.0f} m"
        )


class CheckinDeadlinePassed(CheckInRejected):
    code = "checkin_deadline_passed"

    def __init__(self, grace_minutes: int):
        self.grace_minutes = int(grace_minutes)
        super().__init__(f"The grace period ({self.grace_minutes} min) has passed; check-in is closed")


class MissingPolicyContext(DomainError):
    """Employee or department data needed for evaluation is absent."""

    code = "missing_policy_context"
