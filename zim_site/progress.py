"""Progress reporting used while walking the article tree."""

from __future__ import annotations

import logging
from typing import Optional, Protocol, TextIO

from tqdm import tqdm

logger = logging.getLogger("zim_site")


class ProgressReporter(Protocol):
    def start(self, total: int, initial: int = 0) -> None: ...

    def update(self, count: int) -> None: ...

    def stop(self) -> None: ...

    def error(self, err: BaseException) -> None: ...


class TqdmProgress:
    """Progress bar rendered with tqdm; errors are written above the bar."""

    def __init__(
        self,
        desc: str = "Articles",
        disable: bool = False,
        file: Optional[TextIO] = None,
    ) -> None:
        self.desc = desc
        self.disable = disable
        self.file = file
        self._bar: Optional[tqdm] = None

    def start(self, total: int, initial: int = 0) -> None:
        self._bar = tqdm(
            total=total,
            initial=initial,
            desc=self.desc,
            unit="page",
            disable=self.disable,
            file=self.file,
        )

    def update(self, count: int) -> None:
        if self._bar is None:
            return
        self._bar.update(count - self._bar.n)

    def stop(self) -> None:
        if self._bar is not None:
            self._bar.close()
            self._bar = None

    def error(self, err: BaseException) -> None:
        tqdm.write(f"Error: {err}", file=self.file)


class NullProgress:
    """Reporter that only forwards errors to the log."""

    def start(self, total: int, initial: int = 0) -> None:
        pass

    def update(self, count: int) -> None:
        pass

    def stop(self) -> None:
        pass

    def error(self, err: BaseException) -> None:
        logger.debug("Progress error: %s", err)
