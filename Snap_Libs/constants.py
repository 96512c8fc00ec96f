"""
Constants and configuration values for Snapshot.

This module centralizes all constant values, magic numbers, and
configuration settings used throughout the library.
"""

# Rendering
THUMBNAIL_HEIGHT = 200
IMAGE_FORMAT = "JPEG"
IMAGE_MODE = "RGB"
JPEG_QUALITY = 90

# Store layout
RECORDS_DIR_NAME = "records"
MEDIA_DIR_NAME = "media"
RECORD_EXTENSION = ".snaprec"
MEDIA_EXTENSION = ".snapmedia"
FIRST_STORE_ID = 1

# Sync tracking
NEVER_SYNCED = -1

# Stored record field names
FIELD_ID = "id"
FIELD_GUID = "guid"
FIELD_ORIGINAL_ID = "originalId"
FIELD_EDITED_ID = "editedId"
FIELD_THUMBNAIL_ID = "thumbnailId"
FIELD_TRANSFORM = "transform"
FIELD_LOCAL_IMAGE_CHANGES = "localImageChanges"
FIELD_LOCAL_FILTER_CHANGES = "localFilterChanges"
FIELD_LAST_SYNC_VERSION = "lastSyncVersion"

# Filter transform limits
MIN_ENHANCE_FACTOR = 0.0
MAX_ENHANCE_FACTOR = 4.0
MIN_WARMTH = -1.0
MAX_WARMTH = 1.0
MAX_BLUR_RADIUS = 100.0

# Warmth shifts red up and blue down by at most this many levels
WARMTH_SHIFT_LEVELS = 40.0

# Sepia matrix (rows produce R, G, B)
SEPIA_MATRIX = (
    (0.393, 0.769, 0.189),
    (0.349, 0.686, 0.168),
    (0.272, 0.534, 0.131),
)
