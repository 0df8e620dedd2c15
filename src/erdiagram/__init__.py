"""erdiagram - Schema relationship diagram engine."""

__version__ = "0.1.0"

# Connectors
from erdiagram.connectors import (
    BaseSnapshotSource,
    CSVSnapshotSource,
    JSONSnapshotSource,
    SnapshotSourceFactory,
)

# Core modules
from erdiagram.core import (
    ColumnRecord,
    DiagramSession,
    ForeignKeyRecord,
    HighlightIndexer,
    LayeredLayoutEngine,
    OrthogonalRouter,
    PathRenderer,
    SchemaGraphBuilder,
    SchemaSnapshot,
    ViewportFitter,
)

# Utils
from erdiagram.utils.config import Config, get_config, load_config

__all__ = [
    # Version
    "__version__",
    # Core
    "ColumnRecord",
    "ForeignKeyRecord",
    "SchemaSnapshot",
    "SchemaGraphBuilder",
    "LayeredLayoutEngine",
    "OrthogonalRouter",
    "PathRenderer",
    "HighlightIndexer",
    "ViewportFitter",
    "DiagramSession",
    # Connectors
    "BaseSnapshotSource",
    "CSVSnapshotSource",
    "JSONSnapshotSource",
    "SnapshotSourceFactory",
    # Config
    "Config",
    "get_config",
    "load_config",
]
