"""
Width source layer.
"""
from .base import WidthSource
from .system import SystemWidthSource
from .bdf import BdfWidthSource

__all__ = [
    "WidthSource",
    "SystemWidthSource",
    "BdfWidthSource",
]
