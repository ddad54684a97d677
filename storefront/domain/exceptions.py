class DomainError(Exception):
    pass


class ValidationError(DomainError):
    pass


class NotFoundError(DomainError):
    pass


class RepositoryError(DomainError):
    """The query reached the database and the database rejected it."""


class DispatchError(DomainError):
    """The blocking work never ran to completion on a worker thread."""


class ConsistencyError(DomainError):
    """Two correlated queries disagree about which parents they cover."""
