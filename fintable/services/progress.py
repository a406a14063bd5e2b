from __future__ import annotations

import sys
from typing import Any

from tqdm import tqdm
from tqdm.std import tqdm as TqdmType

"""Progress display with tqdm (TTY only).

One bar over the input files of a run. In non-TTY environments (CI, piped
output) no bar is created so the log stays free of control sequences.
"""

__all__ = [
    "ProgressTracker",
    "is_tty_enabled",
]


def is_tty_enabled() -> bool:
    return sys.stdout.isatty()


class ProgressTracker:
    """File-level progress bar; a no-op outside a TTY."""

    def __init__(self, total: int, *, description: str = "Summarizing files", unit: str = "file") -> None:
        self.total = total
        self.description = description
        self.unit = unit
        self.current = 0
        self.enabled = is_tty_enabled()
        self.pbar: TqdmType[Any] | None
        if self.enabled:
            self.pbar = tqdm(
                total=total,
                desc=description,
                unit=unit,
                leave=True,
                ncols=80,
                ascii=True,
            )
        else:
            self.pbar = None

    def start(self, name: str) -> None:
        self.current += 1
        if self.pbar is not None:
            self.pbar.set_description(f"{self.description} ({name})")

    def advance(self, **postfix: Any) -> None:
        if self.pbar is not None:
            if postfix:
                self.pbar.set_postfix(**postfix)
            self.pbar.update(1)
            self.pbar.set_description(self.description)

    def close(self) -> None:
        if self.pbar is not None:
            self.pbar.close()
            self.pbar = None

    def __enter__(self) -> ProgressTracker:
        return self

    def __exit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        self.close()
