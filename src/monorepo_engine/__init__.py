"""monorepo-engine — reference resolution, run ordering and build caching for monorepos."""

__version__ = "0.1.0"
