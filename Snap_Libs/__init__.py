"""
Snap_Libs - Snapshot image record library

This package contains the core of the Snapshot image record cache,
organized into specialized sub-packages:

- ImageEditingLib: Filter transforms and the rendering of edited images
- RecordStoreLib: Image records, their artifact slots, and persistence
"""

__version__ = "0.1.0"
