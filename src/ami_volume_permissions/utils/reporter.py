"""Progress reporting for post-process runs.

The transcript is advisory: nothing downstream parses it.
"""

import logging
from typing import Callable, List, Optional

from .logger import setup_logger


class ProgressReporter:
    """Collects human readable status lines and forwards them to a sink.

    Lines are logged at INFO, or at DEBUG when a sink already shows them.
    """

    def __init__(self, sink: Optional[Callable[[str], None]] = None, name: str = __name__):
        self.sink = sink
        self.lines: List[str] = []
        self.logger = setup_logger(name, "progress.log")

    def say(self, message: str) -> None:
        self.lines.append(message)
        self.logger.log(logging.DEBUG if self.sink else logging.INFO, message)
        if self.sink:
            self.sink(message)

    @property
    def transcript(self) -> str:
        return "\n".join(self.lines)
