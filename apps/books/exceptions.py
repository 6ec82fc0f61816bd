"""
Domain exceptions for the donation workflow.

Every error carries a stable ``default_code`` that the API exception handler
(``config.views.api_exception_handler``) returns to the caller, so clients
can branch on the code rather than on message text.

Exception Hierarchy:
    WorkflowError (base)
    ├── ValidationError            400 invalid_input
    ├── NotFoundError              404 not_found
    │   └── BookNotFoundError
    ├── InvalidStateError          409 invalid_state
    ├── ConflictError              409 conflict
    ├── InsufficientBalanceError   400 insufficient_balance
    └── SelfRedemptionError        400 self_redemption
"""
from rest_framework.exceptions import APIException


class WorkflowError(APIException):
    """Base exception for donation workflow errors."""
    status_code = 400
    default_detail = 'The request could not be completed.'
    default_code = 'workflow_error'


class ValidationError(WorkflowError):
    """Malformed or missing input, rejected before any write."""
    status_code = 400
    default_detail = 'Invalid input.'
    default_code = 'invalid_input'


class NotFoundError(WorkflowError):
    """Referenced book or user does not exist."""
    status_code = 404
    default_detail = 'Not found.'
    default_code = 'not_found'


class BookNotFoundError(NotFoundError):
    """Book does not exist."""
    default_detail = 'Book not found.'


class InvalidStateError(WorkflowError):
    """Operation is not legal for the book's current status."""
    status_code = 409
    default_detail = 'This action is not allowed in the book\'s current status.'
    default_code = 'invalid_state'


class ConflictError(WorkflowError):
    """Another request changed the book first."""
    status_code = 409
    default_detail = 'The book was changed by another request. Please retry.'
    default_code = 'conflict'


class InsufficientBalanceError(WorkflowError):
    """Redeemer does not hold enough points."""
    status_code = 400
    default_detail = 'Insufficient reward points.'
    default_code = 'insufficient_balance'


class SelfRedemptionError(WorkflowError):
    """Donors cannot redeem their own donation."""
    status_code = 400
    default_detail = 'You cannot redeem a book you donated.'
    default_code = 'self_redemption'
