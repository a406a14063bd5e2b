from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Any

from ..models.config_models import RollupConfig, SummaryConfig
from ..models.layout import DEFAULT_SEPARATOR
from .localization import localize, parse_period

"""PivotOptions: the caller-owned state threaded through one engine call.

Nothing in the engine reads process-wide settings; language, label policy
and the injected localize / parse_period collaborators all travel here.
"""

__all__ = [
    "PivotOptions",
]


@dataclass(frozen=True)
class PivotOptions:
    language: str = "en"
    separator: str = DEFAULT_SEPARATOR
    period_format: str | None = None
    rollup: RollupConfig = field(default_factory=RollupConfig)
    localize: Callable[[Any, str], str] = localize
    parse_period: Callable[[Any], Any] = parse_period

    @classmethod
    def from_config(cls, config: SummaryConfig) -> PivotOptions:
        return cls(
            language=config.language,
            separator=config.separator,
            period_format=config.period_format,
            rollup=config.rollup,
        )
