"""Admin use cases for support and administration operations."""

from .unlock_account_use_case import UnlockAccountUseCase, UnlockAccountResponse

__all__ = [
    "UnlockAccountUseCase",
    "UnlockAccountResponse",
]
