"""Asset enumeration adapters."""

from profilecache.adapters.assets.extension_source import (
    META_SUFFIX,
    ExtensionAssetSource,
)


__all__ = ["META_SUFFIX", "ExtensionAssetSource"]
