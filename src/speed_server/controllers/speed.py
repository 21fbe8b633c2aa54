"""Speed controller — captive-portal intake over JSON and image beacons."""

from __future__ import annotations

import base64
import logging
from typing import Any

from litestar import Controller, MediaType, Request, get, post
from litestar.datastructures import State
from litestar.exceptions import HTTPException
from litestar.response import Response

from speed_server.resources.errors import ValidationError
from speed_server.resources.intake import IntakeResource

logger = logging.getLogger(__name__)

# 1x1 transparent GIF.
_PIXEL = base64.b64decode("R0lGODlhAQABAIAAAAAAAP///yH5BAEAAAAALAAAAAABAAEAAAIBRAA7")
_NO_CACHE = {"Cache-Control": "no-cache, no-store"}


class SpeedController(Controller):
    """HTTP adapter for speed intents from the login and status pages."""

    path = "/api/speed"

    @post("/request", status_code=200)
    async def request_speed(
        self,
        data: dict[str, Any],
        intake_resource: IntakeResource,
    ) -> dict[str, object]:
        """Portal page requests a new speed.

        Body: {"username": "...", "speed": "4M", "ip": "10.5.50.12"}
        """
        try:
            return intake_resource.submit_speed(
                data.get("username"), data.get("speed"), data.get("ip"),
            )
        except ValidationError as error:
            raise HTTPException(status_code=400, detail=str(error)) from error

    @get("/set", media_type="image/gif")
    async def set_speed_beacon(
        self,
        intake_resource: IntakeResource,
        username: str | None = None,
        speed: str | None = None,
        u: str | None = None,
        s: str | None = None,
    ) -> Response[bytes]:
        """Image-beacon intake. Always answers with a transparent pixel.

        Accepts ``u``/``s`` as short aliases for ``username``/``speed``.
        """
        try:
            intake_resource.submit_speed_beacon(username or u, speed or s)
        except ValidationError as error:
            logger.debug("Ignored beacon: %s", error)
        return Response(
            content=_PIXEL,
            status_code=200,
            media_type="image/gif",
            headers=_NO_CACHE,
        )

    @get("/get", media_type=MediaType.TEXT)
    async def get_speed(
        self,
        request: Request[object, object, State],
        intake_resource: IntakeResource,
        username: str = "",
        secret: str | None = None,
    ) -> str:
        """Return the user's desired speed as a bare token, e.g. ``4M``."""
        supplied = secret or request.headers.get("X-Router-Secret")
        return intake_resource.desired_speed(username, supplied)
