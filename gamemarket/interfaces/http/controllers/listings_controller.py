# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from time import perf_counter

from flask import Blueprint, Response, g, jsonify, request

from gamemarket.application.use_cases.listings.create_listing import CreateListingUseCase
from gamemarket.application.use_cases.listings.delete_listing import DeleteListingUseCase
from gamemarket.application.use_cases.listings.list_listings import ListListingsUseCase
from gamemarket.domain.listings.exceptions import ListingOwnershipError
from gamemarket.infrastructure.audit import AuditAction, audit_log
from gamemarket.shared.middleware.client_ip import client_ip
from gamemarket.interfaces.http.guard import login_required_when
from gamemarket.shared.config import AppConfig
from gamemarket.shared.logging import logger
from gamemarket.shared.middleware.csrf import csrf_protect


def _reads_guarded(config: AppConfig) -> bool:
    return config.listings.require_auth and not config.listings.public_read


def _writes_guarded(config: AppConfig) -> bool:
    return config.listings.require_auth


class ListingsController:
    def __init__(
        self,
        *,
        list_use_case: ListListingsUseCase,
        create_use_case: CreateListingUseCase,
        delete_use_case: DeleteListingUseCase,
    ) -> None:
        self._list_use_case = list_use_case
        self._create_use_case = create_use_case
        self._delete_use_case = delete_use_case

    def as_blueprint(self) -> Blueprint:
        bp = Blueprint("listings", __name__)
        bp.add_url_rule("/listings", view_func=self.list_listings, methods=["GET"])
        bp.add_url_rule("/listings", view_func=self.create, methods=["POST"])
        bp.add_url_rule("/listings/<listing_id>", view_func=self.delete, methods=["DELETE"])
        return bp

    @login_required_when(_reads_guarded)
    def list_listings(self) -> tuple[Response, int]:
        t0 = perf_counter()
        items = self._list_use_case.execute()
        dt = (perf_counter() - t0) * 1000
        logger.info(f"listings.list: ok (n={len(items)}, dt_ms={dt:.0f})")
        return jsonify(items), 200

    @login_required_when(_writes_guarded)
    @csrf_protect
    def create(self) -> tuple[Response, int]:
        user_id = getattr(g, "user_id", None)
        payload = request.get_json(silent=True)
        listing_id = self._create_use_case.execute(payload, owner_id=user_id)

        audit_log(
            AuditAction.LISTING_CREATED,
            user_id=user_id,
            ip_address=client_ip(),
            details={"listing_id": listing_id, "title": payload.get("title")},
        )
        logger.info(f"listings.create: ok (id={listing_id}, user_id={user_id})")
        return jsonify({"id": listing_id}), 201

    @login_required_when(_writes_guarded)
    @csrf_protect
    def delete(self, listing_id: str) -> tuple[Response, int]:
        user_id = getattr(g, "user_id", None)
        try:
            self._delete_use_case.execute(listing_id, requester_id=user_id)
        except ListingOwnershipError:
            audit_log(
                AuditAction.LISTING_DELETE_DENIED,
                user_id=user_id,
                ip_address=client_ip(),
                details={"listing_id": listing_id},
                success=False,
            )
            raise

        audit_log(
            AuditAction.LISTING_DELETED,
            user_id=user_id,
            ip_address=client_ip(),
            details={"listing_id": listing_id},
        )
        logger.info(f"listings.delete: ok (id={listing_id}, user_id={user_id})")
        return jsonify({"ok": True, "id": listing_id}), 200
