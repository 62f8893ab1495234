"""Help-tag index generation through an external command."""

import subprocess
from pathlib import Path

from .errors import TagGenerationError
from .logging import get_logger

logger = get_logger("helptags")

DEFAULT_COMMAND = ("helpztags",)


class HelpTagGenerator:
    """Runs the help-tag generator over a list of doc directories."""

    def __init__(self, command: list[str] | tuple[str, ...] = DEFAULT_COMMAND):
        self.command = list(command)

    def generate(self, doc_dirs: list[Path]) -> None:
        """Generate tag files for ``doc_dirs`` in one invocation.

        Raises:
            TagGenerationError: If the command is missing or fails
        """
        args = [*self.command, *(str(d) for d in doc_dirs)]
        logger.info("Generating help tags for %d doc director(ies)", len(doc_dirs))
        logger.debug("Running %s", " ".join(args))
        try:
            subprocess.run(args, check=True, capture_output=True, text=True)
        except FileNotFoundError as e:
            raise TagGenerationError(f"Unable to locate '{self.command[0]}'") from e
        except subprocess.CalledProcessError as e:
            detail = (e.stderr or "").strip()
            raise TagGenerationError(
                f"{self.command[0]} failed with exit code {e.returncode}"
                + (f": {detail}" if detail else "")
            ) from e
