"""Domain errors raised by the workflow layer and mapped to HTTP responses by the routes."""


class CustomerNotFoundError(LookupError):
    pass


class VisitNotFoundError(LookupError):
    pass


class ExpoNotFoundError(LookupError):
    pass


class TeamMemberNotFoundError(LookupError):
    pass


class DuplicateTeamMemberError(ValueError):
    pass


class ProtectedTeamMemberError(PermissionError):
    """System administrators and the acting member cannot be removed from the roster."""


class UnknownPersonnelError(ValueError):
    pass


class PersistenceError(RuntimeError):
    """The backing store rejected a write; the in-memory change has been reverted."""
