"""In-memory domain models."""

from speed_server.models.command import Command as Command
from speed_server.models.command import CommandKind as CommandKind
from speed_server.models.command import CommandStatus as CommandStatus
from speed_server.models.snapshot import RouterSnapshot as RouterSnapshot
from speed_server.models.speed import Speed as Speed
