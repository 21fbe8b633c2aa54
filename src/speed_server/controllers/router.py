"""Router controller — secret-gated endpoints polled by the router."""

from __future__ import annotations

from typing import Any

from litestar import Controller, Request, get, post
from litestar.datastructures import State
from litestar.di import Provide
from litestar.exceptions import HTTPException, NotAuthorizedException
from litestar.types import Dependencies

from speed_server.resources.errors import ValidationError
from speed_server.resources.router import RouterResource, RouterUnauthorizedError


async def _provide_authorized_router(
    request: Request[object, object, State],
    router_resource: RouterResource,
) -> RouterResource:
    """Check the shared secret from the query string or X-Router-Secret header.

    Raises:
        NotAuthorizedException: If the secret is missing or wrong.
    """
    secret = request.query_params.get("secret") or request.headers.get(
        "X-Router-Secret",
    )
    try:
        router_resource.authorize(secret)
    except RouterUnauthorizedError as error:
        raise NotAuthorizedException(detail=str(error)) from error
    return router_resource


class RouterController(Controller):
    """Endpoints called by the router's scheduler script."""

    path = "/api/router"
    # Litestar declares dependencies as an instance var, so ClassVar
    # would fail mypy.  Suppress RUF012 (mutable class attribute).
    dependencies: Dependencies = {  # noqa: RUF012
        "authorized_router": Provide(_provide_authorized_router),
    }

    @get("/commands", status_code=200)
    async def poll_commands(
        self, authorized_router: RouterResource,
    ) -> dict[str, Any]:
        """Router polls for pending commands."""
        return authorized_router.poll_commands()

    @post("/confirm", status_code=200)
    async def confirm_command(
        self,
        data: dict[str, Any],
        authorized_router: RouterResource,
    ) -> dict[str, bool]:
        """Router reports the outcome of a command.

        Body: {"command_id": 7, "success": true, "error": null}
        """
        try:
            return authorized_router.confirm(data)
        except ValidationError as error:
            raise HTTPException(status_code=400, detail=str(error)) from error

    @post("/users", status_code=200)
    async def push_users(
        self,
        data: dict[str, Any],
        authorized_router: RouterResource,
    ) -> dict[str, Any]:
        """Router pushes its active sessions and resource stats."""
        try:
            return authorized_router.push_snapshot(data)
        except ValidationError as error:
            raise HTTPException(status_code=400, detail=str(error)) from error
