from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any

from ..exceptions import AuthenticationRequired
from ..models import User, UserQuery, diff_changes
from ..session import PROFILE_PATH
from .base import SUCCESS_STATUSES, ResourceClient

logger = logging.getLogger(__name__)


class UsersClient(ResourceClient[User]):
    path = "/v1/user"
    create_path = "/v1/users"
    list_key = "users"
    item_key = "user"
    model = User
    query_model = UserQuery
    noun = "User"

    def update_profile(
        self,
        changes: Mapping[str, Any],
        current: User | None = None,
        user_id: int | None = None,
    ) -> User | None:
        """Update the signed-in user's own record through the self-service endpoint."""
        diff = diff_changes(current, changes)
        if not diff:
            logger.info("profile_update_skipped")
            return current
        if user_id is None:
            user_id = self.http.store.get_user_id()
        if user_id is None:
            raise AuthenticationRequired(
                message="Authentication required. Please login again.",
                status_code=401,
                code="UNAUTHORIZED",
            )
        # field names only; values may include a new password
        logger.info("profile_update", extra={"fields": sorted(diff)})
        response = self._request("PUT", f"{PROFILE_PATH}/{user_id}", diff)
        if response.status_code not in SUCCESS_STATUSES:
            raise self._fail(response, "update")
        return self._item_from(response)
