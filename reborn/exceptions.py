"""
Standardized exception hierarchy for the reborn scheduling core
Provides rich context, consistent logging, and reason codes that name the
invariant a rejected entity violated
"""

from datetime import datetime, timezone
from enum import Enum
from typing import Optional, Dict, Any
from uuid import uuid4
import logging

logger = logging.getLogger(__name__)


class InvariantViolation(str, Enum):
    """Reason codes identifying which invariant rejected an entity"""
    # (a) out-of-range values
    OUT_OF_RANGE = "out_of_range"
    REPETITION_STATE_OUT_OF_RANGE = "repetition_state_out_of_range"
    # (b) inconsistent combinations
    CHECK_IN_QUALITY_MISMATCH = "check_in_quality_mismatch"
    SLOT_DURATION_MISMATCH = "slot_duration_mismatch"
    TRANSITION_CONTRACT = "transition_contract"
    HABIT_MISMATCH = "habit_mismatch"
    # (c) structural conflicts
    SLOT_OVERLAP = "slot_overlap"
    SCHEDULE_TOO_LARGE = "schedule_too_large"
    SCHEDULE_MISMATCH = "schedule_mismatch"
    SLOT_IN_COMMITMENT = "slot_in_commitment"
    SLOT_OUTSIDE_WINDOW = "slot_outside_window"
    UNKNOWN_HABIT = "unknown_habit"

    @property
    def category(self) -> str:
        """Error taxonomy bucket: out_of_range, inconsistent or structural"""
        if self in (InvariantViolation.OUT_OF_RANGE,
                    InvariantViolation.REPETITION_STATE_OUT_OF_RANGE):
            return "out_of_range"
        if self in (InvariantViolation.CHECK_IN_QUALITY_MISMATCH,
                    InvariantViolation.SLOT_DURATION_MISMATCH,
                    InvariantViolation.TRANSITION_CONTRACT,
                    InvariantViolation.HABIT_MISMATCH):
            return "inconsistent"
        return "structural"


class RebornError(Exception):
    """
    Base exception for all reborn errors

    Provides:
    - Automatic timestamping
    - Request ID for tracing
    - User-friendly messages
    - Structured context
    - Automatic logging

    Example:
        raise RebornError(
            message="Schedule rejected",
            user_id="8c7a...",
            operation="generate_schedule",
            context={"schedule_id": "abc-123"}
        )
    """

    def __init__(
        self,
        message: str,
        user_id: Optional[str] = None,
        request_id: Optional[str] = None,
        operation: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
        cause: Optional[Exception] = None,
        user_message: Optional[str] = None
    ):
        super().__init__(message)
        self.message = message
        self.user_id = user_id
        self.request_id = request_id or str(uuid4())
        self.operation = operation
        self.context = context or {}
        self.cause = cause
        self.user_message = user_message or "An error occurred. Please try again."
        self.timestamp = datetime.now(timezone.utc)

        # Auto-log on creation
        self._log_error()

    def _log_error(self) -> None:
        """Log error with full context"""
        log_data = {
            "error_type": self.__class__.__name__,
            "error_message": self.message,  # 'message' is reserved by logging
            "request_id": self.request_id,
            "user_id": self.user_id,
            "operation": self.operation,
            "error_context": self.context,
            "timestamp": self.timestamp.isoformat()
        }

        if self.cause:
            log_data["cause"] = str(self.cause)
            logger.error(f"{self.__class__.__name__}: {self.message}", extra=log_data, exc_info=self.cause)
        else:
            logger.error(f"{self.__class__.__name__}: {self.message}", extra=log_data)

    def to_dict(self) -> Dict[str, Any]:
        """Serialize exception for API responses"""
        return {
            "error": self.__class__.__name__,
            "message": self.message,
            "user_message": self.user_message,
            "request_id": self.request_id,
            "timestamp": self.timestamp.isoformat()
        }


# ==========================================
# Validation Errors (rejected entities)
# ==========================================

class ValidationError(RebornError):
    """
    Raised when an entity or request fails validation

    Example:
        raise ValidationError(
            message="Duration must be a multiple of 5",
            field="duration",
            value=33,
            reason=InvariantViolation.OUT_OF_RANGE
        )
    """

    def __init__(
        self,
        message: str,
        field: Optional[str] = None,
        value: Optional[Any] = None,
        reason: Optional[InvariantViolation] = None,
        **kwargs
    ):
        self.field = field
        self.value = value
        self.reason = reason
        kwargs.setdefault("user_message", f"Invalid {field}: {message}" if field else message)
        super().__init__(
            message=message,
            context={
                "field": field,
                "value": value,
                "reason": reason.value if reason else None,
            },
            **kwargs
        )

    def to_dict(self) -> Dict[str, Any]:
        data = super().to_dict()
        data["field"] = self.field
        data["reason"] = self.reason.value if self.reason else None
        return data


class OutOfRangeError(ValidationError):
    """A field value violates its declared bound"""

    def __init__(self, message: str, **kwargs):
        kwargs.setdefault("reason", InvariantViolation.OUT_OF_RANGE)
        super().__init__(message=message, **kwargs)


class InconsistentCombinationError(ValidationError):
    """Individually valid fields violate a cross-field rule"""
    pass


class StructuralConflictError(ValidationError):
    """Valid entities combine into a collection that violates an invariant"""
    pass


class PreferenceError(OutOfRangeError):
    """Supplied preferences cannot be resolved into a bounded configuration"""

    def __init__(self, message: str, **kwargs):
        kwargs.setdefault("user_message", f"Invalid preferences: {message}")
        super().__init__(message=message, **kwargs)


_CATEGORY_ERRORS = {
    "out_of_range": OutOfRangeError,
    "inconsistent": InconsistentCombinationError,
    "structural": StructuralConflictError,
}


def error_for_violation(violation: InvariantViolation, message: str, **kwargs) -> ValidationError:
    """
    Build the taxonomy exception for a reason code

    Example:
        raise error_for_violation(InvariantViolation.SLOT_OVERLAP, "Slots overlap")
    """
    error_cls = _CATEGORY_ERRORS[violation.category]
    return error_cls(message, reason=violation, **kwargs)


# ==========================================
# Engine Errors
# ==========================================

class ContractViolationError(RebornError):
    """An engine produced a result that breaks its contract with the schema"""

    def __init__(
        self,
        message: str,
        engine: Optional[str] = None,
        violations: Optional[list[InvariantViolation]] = None,
        context: Optional[Dict[str, Any]] = None,
        **kwargs
    ):
        self.engine = engine
        self.violations = list(violations or [])
        super().__init__(
            message=message,
            user_message="We couldn't produce a valid plan. Please try again later.",
            context={
                **(context or {}),
                "engine": engine,
                "violations": [v.value for v in self.violations],
            },
            **kwargs
        )


# ==========================================
# Configuration Errors
# ==========================================

class ConfigurationError(RebornError):
    """System configuration is invalid or missing"""

    def __init__(
        self,
        message: str,
        config_key: Optional[str] = None,
        **kwargs
    ):
        self.config_key = config_key
        super().__init__(
            message=message,
            user_message="The system is not properly configured. Please contact support.",
            context={"config_key": config_key},
            **kwargs
        )
