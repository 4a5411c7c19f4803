"""
Domain layer - Pure business logic with zero framework imports.

This package contains the core business logic for organisation onboarding.
It defines its own port interfaces for infrastructure abstraction,
ensuring true hexagonal architecture decoupling.
"""

from .exceptions import DuplicateRecordError, RecordNotFound, RegistrationError, StoreError
from .models import (
    REQUEST_KEY_ALIASES,
    Organisation,
    RegistrationMessage,
    RegistrationRequest,
    RegistrationResult,
    Team,
    User,
)
from .ports import OrganisationStore, PasswordHasher, SaltGenerator, TeamStore, UserStore
from .registration import RegistrationService, display_name_taken

__all__ = [
    "REQUEST_KEY_ALIASES",
    "DuplicateRecordError",
    "Organisation",
    "OrganisationStore",
    "PasswordHasher",
    "RecordNotFound",
    "RegistrationError",
    "RegistrationMessage",
    "RegistrationRequest",
    "RegistrationResult",
    "RegistrationService",
    "SaltGenerator",
    "StoreError",
    "Team",
    "TeamStore",
    "User",
    "UserStore",
    "display_name_taken",
]
