from __future__ import annotations

from .sizer import Sizer
from .sizerconfig import SizerConfig
from .sizermodel import FileRecord
from .sizermodel import RunSummary

__all__ = [
    "FileRecord",
    "RunSummary",
    "Sizer",
    "SizerConfig",
]
