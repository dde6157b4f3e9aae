# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, Protocol

from .entities import Listing


class ListingRepository(Protocol):
    def list_all(self) -> list[Listing]: ...
    def insert(self, fields: Mapping[str, Any], *, owner_id: int | None = None) -> str: ...
    def find_by_id(self, listing_id: str) -> Listing | None: ...
    def delete_by_id(self, listing_id: str) -> bool: ...
