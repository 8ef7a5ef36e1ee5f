from .unit_of_work import UnitOfWork
from .credit_assignment import CreditAssignmentService, CreditAssignment

__all__ = [
    "UnitOfWork",
    "CreditAssignmentService",
    "CreditAssignment",
]
