"""Status page controller — human-readable queue overview."""

from __future__ import annotations

import html
from typing import Any

from litestar import Controller, MediaType, get

from speed_server.resources.dashboard import DashboardResource
from speed_server.templates import load_template

_STATUS_HTML = load_template("status.html")


class StatusPageController(Controller):
    """Browser-facing HTML status page."""

    path = "/"

    @staticmethod
    def _command_item(command: dict[str, Any]) -> str:
        """Render one history entry as a list item."""
        status = html.escape(str(command["status"]))
        target = command["speed"] or command["type"]
        return (
            f'            <li>{html.escape(command["username"])} &rarr; '
            f'{html.escape(str(target))} '
            f'(<span class="{status}">{status}</span>)</li>'
        )

    @get("/", media_type=MediaType.HTML)
    async def status_page(self, dashboard_resource: DashboardResource) -> str:
        """Render pending and executed counts with the latest commands."""
        info = dashboard_resource.status_page()
        items = "\n".join(
            StatusPageController._command_item(c) for c in info["recent_commands"]
        )
        return _STATUS_HTML.safe_substitute(
            pending_commands=info["pending_commands"],
            executed_commands=info["executed_commands"],
            server_time=html.escape(str(info["server_time"])),
            recent_commands=items,
        )
