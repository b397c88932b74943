from __future__ import annotations

import os
import subprocess
from pathlib import Path
from typing import Sequence

from loguru import logger

from subsleuth.application.ports import TwitchCliProtocol

from .error import ToolExecutionError, ToolNotFoundError

DEFAULT_CLI_PATH = Path("/usr/local/bin/twitch")
CLI_CONFIG_FILE = Path("twitch-cli") / ".twitch-cli.env"


class TwitchCli(TwitchCliProtocol):
    """Blocking wrapper around the ``twitch`` executable."""

    def __init__(
        self,
        path_override: str | None,
        config_dir: Path,
        *,
        default_path: Path = DEFAULT_CLI_PATH,
    ) -> None:
        self.path_override = path_override
        self.config_dir = Path(config_dir)
        self.default_path = default_path

    def resolve_path(self) -> str:
        if self.path_override:
            return self.path_override
        if self.default_path.is_file() and os.access(self.default_path, os.X_OK):
            return str(self.default_path)
        logger.error("twitch cli not found")
        raise ToolNotFoundError(path=str(self.default_path))

    def check_config(self) -> bool:
        config_file = self.config_dir / CLI_CONFIG_FILE
        if not config_file.is_file():
            logger.warning("twitch cli config not found: {}", config_file)
            logger.warning("run `twitch login` to setup the twitch cli")
            return False
        logger.debug("twitch cli seems configured")
        return True

    def invoke(self, args: Sequence[str]) -> bytes:
        executable = self.resolve_path()
        self.check_config()
        logger.debug("running twitch cli '{}' {}", executable, " ".join(args))
        try:
            completed = subprocess.run(
                [executable, *args],
                stdout=subprocess.PIPE,
                stderr=subprocess.STDOUT,
                check=True,
            )
        except (OSError, subprocess.CalledProcessError) as exc:
            logger.error("failed to run twitch cli: {}", exc)
            raise ToolExecutionError(command=tuple(args), error=exc) from exc
        return completed.stdout
