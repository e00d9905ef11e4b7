from __future__ import annotations

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class SystemSetting:
    setting_key: str
    setting_value: Optional[str]
    description: Optional[str] = None
