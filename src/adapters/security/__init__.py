"""Security adapters - Password hashing and token signing."""

from .bcrypt_hasher import BcryptPasswordHasher
from .jwt_issuer import JwtCredentialIssuer

__all__ = ["BcryptPasswordHasher", "JwtCredentialIssuer"]
