"""Domain-specific exceptions"""


class DomainException(Exception):
    """Base exception for domain layer"""

    pass


class UnknownPolicyError(DomainException):
    """Cancellation policy name is not one of flexible, moderate, strict"""

    pass


class LedgerDeliveryError(DomainException):
    """Payout ledger webhook could not be delivered after all retries"""

    pass
