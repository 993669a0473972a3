"""Exception hierarchy for media store builds.

Every failure the build can report derives from MediaStoreError so that
callers (the CLI in particular) can turn any of them into a single
human-readable message.
"""


class MediaStoreError(Exception):
    """Base class for all media store errors."""


class AssetIOError(MediaStoreError):
    """File or directory access failed during discovery, hashing or placement."""


class ConfigError(MediaStoreError):
    """The world configuration or the tool configuration is missing or malformed."""


class PlatformUnsupportedError(MediaStoreError):
    """The requested placement mode is not available on this platform."""


class InvalidArgumentError(MediaStoreError):
    """A command-line argument was rejected."""


class IndexFormatError(MediaStoreError):
    """A binary index could not be decoded."""
