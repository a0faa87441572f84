"""Lifecycle of the local application server requests are delegated to.

The gateway can launch the server itself when ``DELEGATE_COMMAND`` is
configured. The child inherits the gateway's environment, stdout and
stderr, with ``PORT`` set to the delegate port. If it exits while the
gateway is serving, the gateway shuts down too.
"""

import asyncio
import logging
import os
import shlex
import signal
from urllib.parse import urlsplit

from package_gateway.errors import StartupError

logger = logging.getLogger(__name__)


class DelegateProcess:
    """Launches and supervises the local application server.

    Example:
        ```python
        delegate = DelegateProcess("node --expose_gc index.js", port=3001)
        await delegate.start()
        ...
        await delegate.stop()
        ```
    """

    def __init__(self, command: str, port: int) -> None:
        """Initialize the supervisor.

        Args:
            command: Shell-style command line of the server.
            port: Port the server is told to listen on.
        """
        self._argv = shlex.split(command)
        self._port = port
        self._process: asyncio.subprocess.Process | None = None
        self._watcher: asyncio.Task | None = None
        self._stopping = False

    @classmethod
    def from_url(cls, command: str, delegate_url: str) -> "DelegateProcess":
        """Create a supervisor listening on the port of ``delegate_url``."""
        return cls(command, port=urlsplit(delegate_url).port or 80)

    async def start(self) -> None:
        """Launch the server.

        Raises:
            StartupError: If the command is empty or cannot be executed
        """
        if not self._argv:
            raise StartupError("Delegate command is empty")

        env = dict(os.environ, PORT=str(self._port))
        try:
            self._process = await asyncio.create_subprocess_exec(*self._argv, env=env)
        except OSError as e:
            raise StartupError(f"Could not start delegate {self._argv[0]}: {e}") from e

        logger.info("Started delegate %s (pid %s) on port %s", self._argv[0], self._process.pid, self._port)
        self._watcher = asyncio.create_task(self._watch())

    async def _watch(self) -> None:
        returncode = await self._process.wait()
        if self._stopping:
            return
        logger.critical("Delegate process exited with status %s, shutting down", returncode)
        os.kill(os.getpid(), signal.SIGTERM)

    async def stop(self) -> None:
        """Terminate the server if it is still running."""
        self._stopping = True
        if self._process is not None and self._process.returncode is None:
            self._process.terminate()
            await self._process.wait()
        if self._watcher is not None:
            await self._watcher

    @property
    def pid(self) -> int | None:
        """Get the process id of the running server."""
        return self._process.pid if self._process else None
