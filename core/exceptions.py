"""
Custom exceptions for LeadScore
Provides structured error handling across the project
"""
from typing import Any, Dict, Optional


class LeadScoreError(Exception):
    """Base exception for all LeadScore errors"""

    def __init__(
        self,
        message: str,
        error_code: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message)
        self.message = message
        self.error_code = error_code or self.__class__.__name__
        self.details = details or {}

    def to_dict(self) -> Dict[str, Any]:
        """Convert exception to dictionary for logs and CLI output"""
        return {
            "error": self.error_code,
            "message": self.message,
            "details": self.details,
        }


class ValidationError(LeadScoreError):
    """Raised when input validation fails"""

    def __init__(self, message: str, field: Optional[str] = None, **details):
        super().__init__(
            message=message,
            error_code="VALIDATION_ERROR",
            details={"field": field, **details} if field else details,
        )


class RuleDefinitionError(ValidationError):
    """Raised when a single scoring rule definition cannot be parsed"""

    def __init__(self, rule_id: Optional[str], message: str, **details):
        super().__init__(message, field="definition", rule_id=rule_id, **details)
        self.error_code = "RULE_DEFINITION_ERROR"
        self.rule_id = rule_id


class NotFoundError(LeadScoreError):
    """Raised when a resource is not found"""

    def __init__(self, resource: str, identifier: Any):
        super().__init__(
            message=f"{resource} not found: {identifier}",
            error_code="NOT_FOUND",
            details={"resource": resource, "identifier": str(identifier)},
        )


class ConfigurationError(LeadScoreError):
    """Raised when configuration is invalid or missing"""

    def __init__(self, message: str, setting: Optional[str] = None):
        super().__init__(
            message=message,
            error_code="CONFIGURATION_ERROR",
            details={"setting": setting} if setting else {},
        )
