# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

"""Application dependency container."""

from __future__ import annotations

from datetime import timedelta
from functools import cached_property

from gamemarket.application.services.password_hashing import WerkzeugPasswordHasher
from gamemarket.application.use_cases.listings.create_listing import CreateListingUseCase
from gamemarket.application.use_cases.listings.delete_listing import DeleteListingUseCase
from gamemarket.application.use_cases.listings.list_listings import ListListingsUseCase
from gamemarket.application.use_cases.users.create_user import CreateUserUseCase
from gamemarket.application.use_cases.users.login_user import LoginUserUseCase
from gamemarket.application.use_cases.users.logout_user import LogoutUserUseCase
from gamemarket.application.use_cases.users.resolve_session import ResolveSessionUseCase
from gamemarket.domain.listings.repositories import ListingRepository
from gamemarket.domain.users.repositories import (
    PasswordHasher,
    SessionRepository,
    UserRepository,
)
from gamemarket.infrastructure.db import Database
from gamemarket.infrastructure.repositories.listings.sqlalchemy_listing_repository import (
    SqlAlchemyListingRepository,
)
from gamemarket.infrastructure.repositories.users.sqlalchemy_user_repository import (
    SqlAlchemySessionRepository,
    SqlAlchemyUserRepository,
)
from gamemarket.interfaces.http.controllers.auth_controller import AuthController
from gamemarket.interfaces.http.controllers.listings_controller import ListingsController
from gamemarket.interfaces.http.controllers.misc_controller import MiscController
from gamemarket.shared.config import AppConfig


class Container:
    """Wires repositories and use cases around one ``Database`` handle.

    Tests can override any cached property by assigning to it before first
    use, e.g. ``container.listing_repository = InMemoryListingRepository()``.
    """

    def __init__(self, config: AppConfig, database: Database) -> None:
        self.config = config
        self.database = database

    @cached_property
    def password_hasher(self) -> PasswordHasher:
        return WerkzeugPasswordHasher()

    @cached_property
    def user_repository(self) -> UserRepository:
        return SqlAlchemyUserRepository(self.database)

    @cached_property
    def session_repository(self) -> SessionRepository:
        return SqlAlchemySessionRepository(self.database)

    @cached_property
    def listing_repository(self) -> ListingRepository:
        return SqlAlchemyListingRepository(self.database)

    @cached_property
    def create_user_use_case(self) -> CreateUserUseCase:
        return CreateUserUseCase(users=self.user_repository, password_hasher=self.password_hasher)

    @cached_property
    def login_user_use_case(self) -> LoginUserUseCase:
        return LoginUserUseCase(
            users=self.user_repository,
            sessions=self.session_repository,
            password_hasher=self.password_hasher,
            session_ttl=timedelta(seconds=self.config.auth.session_ttl),
            redirect_to=self.config.auth.home_path,
        )

    @cached_property
    def logout_user_use_case(self) -> LogoutUserUseCase:
        return LogoutUserUseCase(sessions=self.session_repository)

    @cached_property
    def resolve_session_use_case(self) -> ResolveSessionUseCase:
        return ResolveSessionUseCase(sessions=self.session_repository)

    @cached_property
    def list_listings_use_case(self) -> ListListingsUseCase:
        return ListListingsUseCase(listings=self.listing_repository)

    @cached_property
    def create_listing_use_case(self) -> CreateListingUseCase:
        return CreateListingUseCase(listings=self.listing_repository)

    @cached_property
    def delete_listing_use_case(self) -> DeleteListingUseCase:
        return DeleteListingUseCase(
            listings=self.listing_repository,
            enforce_ownership=self.config.listings.enforce_ownership,
        )

    @cached_property
    def auth_controller(self) -> AuthController:
        return AuthController(
            config=self.config,
            login_use_case=self.login_user_use_case,
            logout_use_case=self.logout_user_use_case,
        )

    @cached_property
    def listings_controller(self) -> ListingsController:
        return ListingsController(
            list_use_case=self.list_listings_use_case,
            create_use_case=self.create_listing_use_case,
            delete_use_case=self.delete_listing_use_case,
        )

    @cached_property
    def misc_controller(self) -> MiscController:
        return MiscController(database=self.database)


__all__ = ["Container"]
