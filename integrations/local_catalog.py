"""Example catalog read from a local YAML file.

The file holds either a list of examples or a mapping with an
``examples`` key:

    examples:
      - title: Hello World
        description: A simple panel extension
        frontendFolderName: frontend
        frontendCommand: yarn start
        backendCommand: node services/backend --cert conf/server --client-id {clientId} --secret {secret} --owner-id {ownerId}
"""

import logging
from pathlib import Path

import yaml
from pydantic import ValidationError

from schemas.project import Example

logger = logging.getLogger(__name__)


class CatalogError(Exception):
    """Raised when the catalog file cannot be read."""

    pass


class LocalExampleCatalog:
    """Offline example catalog."""

    def __init__(self, path: Path | str) -> None:
        self.path = Path(path)

    def load(self) -> list[Example]:
        """Parse the catalog file."""
        if not self.path.exists():
            raise CatalogError(f"Example catalog not found: {self.path}")

        try:
            data = yaml.safe_load(self.path.read_text()) or []
        except yaml.YAMLError as e:
            raise CatalogError(f"Invalid YAML in {self.path}: {e}") from e

        if isinstance(data, dict):
            data = data.get("examples", [])
        if not isinstance(data, list):
            raise CatalogError(f"Expected a list of examples in {self.path}")

        try:
            examples = [Example.model_validate(item) for item in data]
        except ValidationError as e:
            raise CatalogError(f"Invalid example in {self.path}: {e}") from e

        logger.debug(f"Read {len(examples)} examples from {self.path}")
        return examples

    async def fetch_examples(self) -> list[Example]:
        return self.load()
