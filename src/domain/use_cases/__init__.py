"""Use cases - one class per authentication operation."""

from .change_password import ChangePasswordUseCase
from .delete_account import DeleteAccountUseCase
from .elevate import ElevateUseCase
from .login import Authenticated, LoginOutcome, LoginUseCase, TwoFaRequired
from .logout import LogoutUseCase
from .signup import SignupUseCase
from .verify_2fa import Verify2FaUseCase
from .verify_token import VerifyElevatedTokenUseCase, VerifyTokenUseCase

__all__ = [
    "Authenticated",
    "ChangePasswordUseCase",
    "DeleteAccountUseCase",
    "ElevateUseCase",
    "LoginOutcome",
    "LoginUseCase",
    "LogoutUseCase",
    "SignupUseCase",
    "TwoFaRequired",
    "Verify2FaUseCase",
    "VerifyElevatedTokenUseCase",
    "VerifyTokenUseCase",
]
