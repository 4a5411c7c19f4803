"""Security adapters - Password hashing implementations."""

from .bcrypt_hasher import BcryptPasswordHasher, BcryptSaltGenerator

__all__ = ["BcryptPasswordHasher", "BcryptSaltGenerator"]
