"""
Emulator Configuration
======================

Behaviour switches for the execution core. Configuration can come from:
- Default values (defined here)
- Environment variables (EmulatorConfig.from_env)

The defaults reproduce the reference behaviour of the core: NOP halts the
machine and zero-page indexed addressing wraps inside the zero page.

Copyright (c) 2025-2026 Hugo José Pinto & Contributors
"""

from dataclasses import dataclass
from typing import Optional
import logging
import os

logger = logging.getLogger(__name__)

_TRUE_VALUES = ("1", "true", "yes", "on")
_FALSE_VALUES = ("0", "false", "no", "off")


def _parse_bool(name: str, value: str) -> Optional[bool]:
    lowered = value.strip().lower()
    if lowered in _TRUE_VALUES:
        return True
    if lowered in _FALSE_VALUES:
        return False
    logger.warning(f"Ignoring invalid boolean {name}={value!r}")
    return None


@dataclass(frozen=True)
class EmulatorConfig:
    """
    Configuration for CPU initialization.

    Attributes:
        halt_on_nop: Treat NOP ($EA) as a program terminator (default: True).
                     When False, NOP simply falls through to the next
                     instruction and run() stops only through the other
                     halt mechanisms.
        zero_page_wrap: Mask zero-page indexed addresses to 8 bits, as the
                        hardware does (default: True). When False, $80,X with
                        X=$FF reads $017F instead of $007F.
        max_instructions: Default instruction budget for run(); None means
                          unlimited.

    Example:
        >>> config = EmulatorConfig(halt_on_nop=False, max_instructions=1000)
    """
    halt_on_nop: bool = True
    zero_page_wrap: bool = True
    max_instructions: Optional[int] = None

    def __post_init__(self):
        if self.max_instructions is not None and self.max_instructions <= 0:
            raise ValueError(
                f"max_instructions must be positive, got {self.max_instructions}"
            )

    @classmethod
    def from_env(cls) -> "EmulatorConfig":
        """
        Create EmulatorConfig from environment variables.

        Environment variables (all optional):
            MOS6502_HALT_ON_NOP: "1"/"0", "true"/"false", "yes"/"no", "on"/"off"
            MOS6502_ZERO_PAGE_WRAP: same boolean forms
            MOS6502_MAX_INSTRUCTIONS: positive integer

        Invalid values are ignored and the default is kept.

        Returns:
            EmulatorConfig with values from environment variables
        """
        kwargs = {}

        if (value := os.environ.get("MOS6502_HALT_ON_NOP")) is not None:
            parsed = _parse_bool("MOS6502_HALT_ON_NOP", value)
            if parsed is not None:
                kwargs["halt_on_nop"] = parsed

        if (value := os.environ.get("MOS6502_ZERO_PAGE_WRAP")) is not None:
            parsed = _parse_bool("MOS6502_ZERO_PAGE_WRAP", value)
            if parsed is not None:
                kwargs["zero_page_wrap"] = parsed

        if limit := os.environ.get("MOS6502_MAX_INSTRUCTIONS"):
            try:
                count = int(limit)
            except ValueError:
                count = 0
            if count > 0:
                kwargs["max_instructions"] = count
            else:
                logger.warning(f"Ignoring invalid MOS6502_MAX_INSTRUCTIONS={limit!r}")

        return cls(**kwargs)
