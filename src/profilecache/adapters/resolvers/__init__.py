"""Identifier resolver adapters."""

from profilecache.adapters.resolvers.digest import PathDigestResolver
from profilecache.adapters.resolvers.meta_file import MetaFileResolver


__all__ = ["MetaFileResolver", "PathDigestResolver"]
