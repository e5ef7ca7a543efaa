class DomainError(Exception):
    """Base class for every business-rule failure raised by the services."""
