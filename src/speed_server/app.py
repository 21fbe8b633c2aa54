"""Litestar application factory and CLI entry point."""

from __future__ import annotations

import argparse
import sys

from litestar import Litestar
from litestar.config.cors import CORSConfig
from litestar.datastructures import State
from litestar.di import Provide
from litestar.logging.config import LoggingConfig

from speed_server.config import ConfigLoader, Settings
from speed_server.controllers.dashboard import DashboardController
from speed_server.controllers.health import HealthController
from speed_server.controllers.router import RouterController
from speed_server.controllers.speed import SpeedController
from speed_server.controllers.status_page import StatusPageController
from speed_server.dao.command_dao import CommandDAO
from speed_server.dao.snapshot_dao import SnapshotDAO
from speed_server.dao.speed_dao import DesiredSpeedDAO
from speed_server.dao.suppression_dao import SuppressionDAO
from speed_server.resources.dashboard import DashboardResource
from speed_server.resources.health import HealthResource
from speed_server.resources.intake import IntakeResource
from speed_server.resources.router import RouterResource
from speed_server.services.command_service import CommandService
from speed_server.services.reconciliation_service import ReconciliationService
from speed_server.services.speed_service import SpeedService
from speed_server.services.suppression_service import SuppressionService
from speed_server.utils.time import Clock, Time


class AppFactory:
    """Builds and configures the Litestar application. All methods are static."""

    @staticmethod
    def _build(settings: Settings, clock: Clock = Time.now) -> State:
        """Construct the full object graph once per app.

        command_dao ─→ command_service ─────────────┬→ IntakeResource
        speed_dao ─→ speed_service ─────────────────┤
        suppression_dao ─→ suppression_service ─────┘
        command_dao + snapshot_dao + speed_service ─→ reconciliation_service
        command_service + reconciliation_service ─→ RouterResource, DashboardResource
        command_service ─→ HealthResource

        Every store lives in this graph; two apps never share state.
        """
        command_dao = CommandDAO(history_limit=settings.history_limit)
        speed_dao = DesiredSpeedDAO()
        suppression_dao = SuppressionDAO()
        snapshot_dao = SnapshotDAO()

        command_service = CommandService(command_dao, clock=clock)
        speed_service = SpeedService(speed_dao)
        suppression_service = SuppressionService(
            suppression_dao,
            window_seconds=settings.suppression_window_seconds,
            clock=clock,
        )
        reconciliation_service = ReconciliationService(
            command_dao, snapshot_dao, speed_service, clock=clock,
        )

        intake_resource = IntakeResource(
            command_service=command_service,
            speed_service=speed_service,
            suppression_service=suppression_service,
            router_secret=settings.router_secret,
            default_speed=settings.default_speed,
        )
        router_resource = RouterResource(
            command_service=command_service,
            reconciliation_service=reconciliation_service,
            router_secret=settings.router_secret,
        )
        dashboard_resource = DashboardResource(
            command_service=command_service,
            reconciliation_service=reconciliation_service,
            recent_commands_limit=settings.recent_commands_limit,
            status_page_commands=settings.status_page_commands,
        )
        return State({
            "health": HealthResource(command_service),
            "intake": intake_resource,
            "router": router_resource,
            "dashboard": dashboard_resource,
        })

    @staticmethod
    def _logging_config(settings: Settings) -> LoggingConfig:
        """Route speed_server loggers through Litestar's queue listener."""
        return LoggingConfig(
            loggers={"speed_server": {"level": settings.log_level.upper()}},
            log_exceptions="always",
        )

    @staticmethod
    def provide_health(state: State) -> HealthResource:
        """Provide the pre-built HealthResource from app state."""
        health_resource: HealthResource = state.health
        return health_resource

    @staticmethod
    def provide_intake(state: State) -> IntakeResource:
        """Provide the pre-built IntakeResource from app state."""
        intake_resource: IntakeResource = state.intake
        return intake_resource

    @staticmethod
    def provide_router(state: State) -> RouterResource:
        """Provide the pre-built RouterResource from app state."""
        router_resource: RouterResource = state.router
        return router_resource

    @staticmethod
    def provide_dashboard(state: State) -> DashboardResource:
        """Provide the pre-built DashboardResource from app state."""
        dashboard_resource: DashboardResource = state.dashboard
        return dashboard_resource

    @staticmethod
    def create_app(
        settings: Settings | None = None, clock: Clock = Time.now,
    ) -> Litestar:
        """Create and configure the Litestar application."""
        if settings is None:
            settings = ConfigLoader.load_settings()
        return Litestar(
            route_handlers=[
                HealthController, SpeedController, RouterController,
                DashboardController, StatusPageController,
            ],
            state=AppFactory._build(settings, clock),
            logging_config=AppFactory._logging_config(settings),
            cors_config=CORSConfig(allow_origins=settings.cors_allow_origins),
            dependencies={
                "health_resource": Provide(AppFactory.provide_health, sync_to_thread=False),
                "intake_resource": Provide(AppFactory.provide_intake, sync_to_thread=False),
                "router_resource": Provide(AppFactory.provide_router, sync_to_thread=False),
                "dashboard_resource": Provide(AppFactory.provide_dashboard, sync_to_thread=False),
            },
        )


# Public alias so conftest / uvicorn can call create_app() without knowing AppFactory.
create_app = AppFactory.create_app


class CLI:
    """Command-line interface for speed-server."""

    @staticmethod
    def _build_parser() -> argparse.ArgumentParser:
        """Build the CLI argument parser."""
        parser = argparse.ArgumentParser(
            prog="speed-server", description="Speed Server CLI",
        )
        subparsers = parser.add_subparsers(dest="command")

        run_parser = subparsers.add_parser("run", help="Start the server")
        run_parser.add_argument("--host", default="0.0.0.0")
        run_parser.add_argument("--port", type=int, default=3000)
        run_parser.add_argument("--reload", action="store_true", help="Auto-reload on file changes")

        return parser

    @staticmethod
    def main(argv: list[str] | None = None) -> None:
        """CLI entry point. Catches all exceptions and exits cleanly."""
        parser = CLI._build_parser()
        args = parser.parse_args(argv)

        if args.command is None:
            parser.print_help()
            sys.exit(1)

        try:
            if args.command == "run":
                import uvicorn

                uvicorn.run(
                    "speed_server.app:create_app",
                    factory=True,
                    host=args.host,
                    port=args.port,
                    reload=args.reload,
                )
        except KeyboardInterrupt:
            pass
        except Exception as error:
            print(f"Error: {error}", file=sys.stderr)
            sys.exit(1)


if __name__ == "__main__":
    CLI.main()
