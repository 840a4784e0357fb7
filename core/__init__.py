"""Core utilities and configuration for LeadScore"""
from core.config import settings
from core.exceptions import ConfigurationError, LeadScoreError, NotFoundError, RuleDefinitionError, ValidationError
from core.logging import get_logger

__all__ = [
    "settings",
    "get_logger",
    "LeadScoreError",
    "ValidationError",
    "RuleDefinitionError",
    "NotFoundError",
    "ConfigurationError",
]
