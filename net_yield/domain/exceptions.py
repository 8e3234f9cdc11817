"""Domain-specific exceptions"""

from typing import List

from net_yield.domain.models import FieldError


class DomainException(Exception):
    """Base exception for domain layer"""

    pass


class InvalidSimulationInputError(DomainException):
    """Submitted fields failed validation"""

    def __init__(self, errors: List[FieldError]):
        self.errors = errors
        fields = ", ".join(f"{e.field}={e.code.value}" for e in errors)
        super().__init__(f"Invalid simulation input: {fields}")


class YieldCalculationError(DomainException):
    """Calculator called with input that should have been rejected upstream"""

    pass


class SimulationPersistenceError(DomainException):
    """Simulation record could not be stored or read back"""

    pass
