class ExpensesError(Exception):
    """Base exception for the expenses API"""

    pass


class ConfigurationError(ExpensesError):
    """Raised at startup when required settings are missing or unusable"""

    pass


class InvalidTokenError(ExpensesError):
    """Raised when a bearer token fails signature, issuer, audience or expiry checks"""

    pass
