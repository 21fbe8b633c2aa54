"""Dashboard controller — thin HTTP adapter for the management dashboard."""

from __future__ import annotations

from typing import Any

from litestar import Controller, get, post
from litestar.exceptions import HTTPException

from speed_server.resources.dashboard import DashboardResource
from speed_server.resources.errors import ValidationError
from speed_server.resources.intake import IntakeResource


class DashboardController(Controller):
    """HTTP adapter for dashboard reads and disconnects."""

    path = "/api"

    @get("/users")
    async def active_users(
        self, dashboard_resource: DashboardResource,
    ) -> dict[str, Any]:
        """Active sessions and router stats from the last push."""
        return dashboard_resource.active_users()

    @post("/user/disconnect", status_code=200)
    async def disconnect_user(
        self,
        data: dict[str, Any],
        intake_resource: IntakeResource,
    ) -> dict[str, object]:
        """Queue a disconnect for a user.

        Body: {"username": "..."}
        """
        try:
            return intake_resource.submit_disconnect(data.get("username"))
        except ValidationError as error:
            raise HTTPException(status_code=400, detail=str(error)) from error

    @get("/stats")
    async def stats(
        self, dashboard_resource: DashboardResource,
    ) -> dict[str, Any]:
        """Queue counters and recent command history."""
        return dashboard_resource.stats()
