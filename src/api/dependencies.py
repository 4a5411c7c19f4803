"""
FastAPI dependencies - Dependency injection factories.

This module provides Depends() factories for injecting
domain services and infrastructure adapters into routes.
"""

from fastapi import Request

from src.adapters.security.bcrypt_hasher import BcryptPasswordHasher, BcryptSaltGenerator
from src.config.settings import get_settings
from src.domain.ports import OrganisationStore, TeamStore, UserStore
from src.domain.registration import RegistrationService

# Module-level singleton - BcryptPasswordHasher is stateless
_password_hasher = BcryptPasswordHasher()


def get_stores(request: Request) -> tuple[UserStore, OrganisationStore, TeamStore]:
    """
    Get the (users, organisations, teams) stores from app state.

    The stores are created during app lifespan startup and stored in app.state.
    """
    return request.app.state.stores


def get_password_hasher() -> BcryptPasswordHasher:
    """Get bcrypt password hasher (singleton)."""
    return _password_hasher


def get_salt_generator() -> BcryptSaltGenerator:
    """Get bcrypt salt generator using the configured cost factor."""
    return BcryptSaltGenerator(rounds=get_settings().bcrypt_cost)


def get_registration_service(request: Request) -> RegistrationService:
    """
    Create registration service with injected dependencies.

    Wires together the three stores and the bcrypt adapters for the domain service.
    """
    users, organisations, teams = get_stores(request)
    return RegistrationService(
        users=users,
        organisations=organisations,
        teams=teams,
        hasher=get_password_hasher(),
        salt_generator=get_salt_generator(),
        owners_team_name=get_settings().owners_team_name,
    )
