from importlib import metadata

try:
    SCHEMAVIEW_VERSION = metadata.version("schemaview")
except metadata.PackageNotFoundError:
    # Local run without installation
    SCHEMAVIEW_VERSION = "dev"
