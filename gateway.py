import subprocess
from dataclasses import dataclass
from typing import List, Optional, Protocol

from errors import ExternalToolError
from logger import get_logger

logger = get_logger(__name__)

DEFAULT_COMMAND = "xdg-mime"
DEFAULT_TIMEOUT = 5.0


class DefaultHandlerGateway(Protocol):
    """Live view of the registry that decides which application opens a mime type."""

    def query(self, mime_type: str) -> Optional[str]:
        ...

    def set(self, mime_type: str, handler_id: str) -> None:
        ...


@dataclass(frozen=True)
class XdgMimeGateway:
    """Talks to xdg-mime on every call; the registry can change behind our back, so nothing is cached."""

    command: str = DEFAULT_COMMAND
    timeout: float = DEFAULT_TIMEOUT

    def query(self, mime_type: str) -> Optional[str]:
        try:
            output = self._run(["query", "default", mime_type])
        except ExternalToolError as exc:
            logger.debug("No default handler for %s (%s)", mime_type, exc)
            return None
        handler = output.strip()
        return handler or None

    def set(self, mime_type: str, handler_id: str) -> None:
        try:
            self._run(["default", handler_id, mime_type])
        except ExternalToolError as exc:
            logger.warning("Could not set %s as default for %s: %s", handler_id, mime_type, exc)
            return
        logger.info("Requested %s as default for %s", handler_id, mime_type)

    def _run(self, args: List[str]) -> str:
        argv = [self.command, *args]
        try:
            completed = subprocess.run(
                argv,
                stdout=subprocess.PIPE,
                stderr=subprocess.PIPE,
                timeout=self.timeout,
                check=False,
            )
        except (OSError, subprocess.SubprocessError) as exc:
            raise ExternalToolError(self.command, str(exc)) from exc
        if completed.returncode != 0:
            stderr = (completed.stderr or b"").decode("utf-8", errors="replace").strip()
            raise ExternalToolError(self.command, f"exit status {completed.returncode}: {stderr}")
        try:
            return (completed.stdout or b"").decode("utf-8")
        except UnicodeDecodeError as exc:
            raise ExternalToolError(self.command, "output is not valid UTF-8") from exc
