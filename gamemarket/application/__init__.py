# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from .use_cases.listings.create_listing import CreateListingUseCase
from .use_cases.listings.delete_listing import DeleteListingUseCase
from .use_cases.listings.list_listings import ListListingsUseCase
from .use_cases.users.create_user import CreateUserUseCase
from .use_cases.users.login_user import LoginUserUseCase
from .use_cases.users.logout_user import LogoutUserUseCase
from .use_cases.users.resolve_session import ResolveSessionUseCase

__all__ = [
    "CreateListingUseCase",
    "CreateUserUseCase",
    "DeleteListingUseCase",
    "ListListingsUseCase",
    "LoginUserUseCase",
    "LogoutUserUseCase",
    "ResolveSessionUseCase",
]
