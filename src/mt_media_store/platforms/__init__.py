"""Search root implementations for the build pipeline.

Each platform module auto-registers its factories with the SourceRegistry
when imported.
"""

# Platform modules are imported dynamically by SourceRegistry.discover_platforms()
