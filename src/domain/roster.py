"""
Roster Module

Loads the sewadar roster from a CSV file.
"""

import csv
from pathlib import Path
from typing import Dict, List, Optional

from .entities import Sewadar
from infrastructure.logger import get_logger

logger = get_logger("Roster")


class Roster:
    """
    Read-only set of sewadars.

    The CSV should have a Name column and may have an ID column.
    Rows without an id get a positional one ("S001", "S002", ...).
    """

    NAME_COLUMNS = ('Name', 'name', 'NAME', 'Sewadar')
    ID_COLUMNS = ('ID', 'Id', 'id')

    def __init__(self, sewadars: Optional[List[Sewadar]] = None):
        self._sewadars: List[Sewadar] = []
        self._by_id: Dict[str, Sewadar] = {}
        for sewadar in sewadars or []:
            self._add(sewadar)

    def _add(self, sewadar: Sewadar) -> bool:
        if sewadar.id in self._by_id:
            logger.warning(f"Duplicate sewadar id '{sewadar.id}' ignored ({sewadar.name})")
            return False
        self._sewadars.append(sewadar)
        self._by_id[sewadar.id] = sewadar
        return True

    def load_from_csv(self, csv_path: Path) -> List[Sewadar]:
        """
        Replace the roster with the contents of a CSV file.

        Args:
            csv_path: Path to the CSV file

        Returns:
            The loaded sewadars (empty if the file does not exist)
        """
        self._sewadars = []
        self._by_id = {}

        if not csv_path.exists():
            logger.warning(f"Roster file not found: {csv_path}")
            return []

        with open(csv_path, 'r', encoding='utf-8-sig', newline='') as f:
            reader = csv.DictReader(f)
            for row_number, row in enumerate(reader, start=1):
                name = self._first_value(row, self.NAME_COLUMNS)
                if not name:
                    continue
                sewadar_id = self._first_value(row, self.ID_COLUMNS) or f"S{row_number:03d}"
                self._add(Sewadar(id=sewadar_id, name=name))

        logger.info(f"Loaded {len(self._sewadars)} sewadars from {csv_path}")
        return list(self._sewadars)

    @staticmethod
    def _first_value(row: Dict[str, str], columns) -> str:
        for column in columns:
            value = row.get(column)
            if value and value.strip():
                return value.strip()
        return ""

    @property
    def all_sewadars(self) -> List[Sewadar]:
        """Get all sewadars in file order."""
        return list(self._sewadars)

    def get_by_id(self, sewadar_id: str) -> Optional[Sewadar]:
        """Find sewadar by id."""
        return self._by_id.get(sewadar_id)

    def __len__(self) -> int:
        return len(self._sewadars)

    def __iter__(self):
        return iter(self._sewadars)
