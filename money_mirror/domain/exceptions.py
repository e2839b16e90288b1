"""Domain-specific exceptions"""


class DomainException(Exception):
    """Base exception for domain layer"""

    pass


class InvalidInputError(DomainException):
    """Assessment answer set is malformed (wrong count, bad scores, missing dimension)"""

    pass


class InsufficientDataError(DomainException):
    """Profile or snapshot not available yet for analysis"""

    pass


class RuleEvaluationError(DomainException):
    """A single detector rule raised while evaluating"""

    def __init__(self, rule_name: str, cause: Exception):
        super().__init__(f"Rule '{rule_name}' failed: {cause}")
        self.rule_name = rule_name
        self.cause = cause


class DataSourceError(DomainException):
    """Account/transaction source returned an error or is unavailable"""

    pass


class ProfileNotFoundError(DomainException):
    """No stored profile for the requested user"""

    pass


class InvalidTransactionDataError(DomainException):
    """Transaction data is malformed or invalid"""

    pass
