"""
Width index subsystem.

Modules:
    width_index: Table-backed width lookup
    codec: Binary encoder/decoder for the index format
"""
from .width_index import WidthIndex
from .codec import compute_widths, decode, encode, export_file, import_file

__all__ = [
    "WidthIndex",
    "compute_widths",
    "decode",
    "encode",
    "export_file",
    "import_file",
]
