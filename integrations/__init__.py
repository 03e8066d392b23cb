"""Service adapters for the project workflow.

Supports:
- Rig backend (examples, extension manifests, project creation)
- Local YAML example catalog (offline)

Usage:
    rig-project new --user-id 12345 --folder ./my-extension
    rig-project new --user-id 12345 --examples-file examples.yaml
"""

from .local_catalog import CatalogError, LocalExampleCatalog
from .rig_api import RigApiClient, RigApiError

__all__ = [
    "CatalogError",
    "LocalExampleCatalog",
    "RigApiClient",
    "RigApiError",
]
