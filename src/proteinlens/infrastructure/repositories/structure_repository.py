# src/proteinlens/infrastructure/repositories/structure_repository.py
"""Repository implementation for parsed structural models."""

import asyncio
import logging
import os
from typing import Dict, List, Optional

from ...core.domain.interfaces.catalogs import StructureCatalog
from ...core.domain.models.structural_model import StructuralModel
from ...core.errors import CatalogError, StructureNotAvailableError
from ...core.interfaces.repository import Repository
from ...core.services.structure_parser import StructureParser

logger = logging.getLogger(__name__)


class StructureRepository(Repository[StructuralModel]):
    """Loads structures from a local directory, falling back to a remote catalog."""

    def __init__(
        self,
        parser: Optional[StructureParser] = None,
        catalog: Optional[StructureCatalog] = None,
        data_dir: Optional[str] = None,
    ):
        """
        Initialize repository.

        Args:
            parser: Parser used for every structure text
            catalog: Remote source of structure text, if any
            data_dir: Directory containing ``<ID>.pdb`` files, if any
        """
        self._parser = parser or StructureParser()
        self._catalog = catalog
        self._data_dir = data_dir
        self._cache: Dict[str, StructuralModel] = {}

    async def get(self, id: str) -> Optional[StructuralModel]:
        """
        Retrieve a parsed structure by entry id.

        Args:
            id: Structure entry identifier

        Returns:
            StructuralModel, or None when no source has the entry
        """
        key = id.strip().upper()
        if key in self._cache:
            return self._cache[key]

        text = await asyncio.get_running_loop().run_in_executor(None, self._read_local, key)
        if text is None and self._catalog is not None:
            try:
                text = await self._catalog.fetch_structure_text(key)
            except CatalogError as e:
                logger.warning(f"Could not download structure {key}: {e}")
                return None
        if text is None:
            return None

        model = self._parser.parse(text)
        if model.atom_count == 0:
            logger.warning(f"Structure {key} contains no atom records")
            return None

        self._cache[key] = model
        return model

    async def require(self, id: str) -> StructuralModel:
        """
        Retrieve a structure or fail.

        Raises:
            StructureNotAvailableError: If no source yields a non-empty model
        """
        model = await self.get(id)
        if model is None:
            raise StructureNotAvailableError(id.strip().upper())
        return model

    def list(self) -> List[str]:
        """List entry ids of the structure files in the data directory."""
        if not self._data_dir or not os.path.isdir(self._data_dir):
            return []
        return sorted(
            os.path.splitext(file_name)[0].upper()
            for file_name in os.listdir(self._data_dir)
            if file_name.lower().endswith(".pdb")
        )

    def _read_local(self, key: str) -> Optional[str]:
        if not self._data_dir:
            return None
        for file_name in (f"{key}.pdb", f"{key.lower()}.pdb"):
            file_path = os.path.join(self._data_dir, file_name)
            if os.path.exists(file_path):
                with open(file_path, "r") as f:
                    return f.read()
        return None
