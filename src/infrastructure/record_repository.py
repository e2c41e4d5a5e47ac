"""
Record Repository Module

JSON file persistence for the attendance record collection.
"""

import json
from pathlib import Path
from typing import List

from domain.entities import AttendanceRecord
from domain.errors import ValidationError
from domain.time_codec import is_canonical_time, parse_iso_date
from infrastructure.logger import get_logger

logger = get_logger("RecordRepository")


class RecordFormatError(ValueError):
    """Raised when a stored record entry is missing keys or holds invalid values."""
    pass


class JsonRecordRepository:
    """
    Loads and saves the full record list as a JSON array.

    Keys are stored in camelCase (sewadarId, startTime, ...). endTime is
    omitted while a shift is active.
    """

    def __init__(self, path: Path):
        self.path = Path(path)

    def load(self) -> List[AttendanceRecord]:
        """
        Read all records.

        Returns:
            Records in stored order; empty if the file is missing or unreadable
        """
        if not self.path.exists():
            logger.info(f"No record file yet at {self.path}")
            return []

        try:
            with open(self.path, 'r', encoding='utf-8') as f:
                data = json.load(f)
            if not isinstance(data, list):
                raise RecordFormatError("Record file must contain a JSON list")
            records = [self._dict_to_record(item) for item in data]
            self._check_unique_ids(records)
        except (json.JSONDecodeError, RecordFormatError) as e:
            logger.warning(f"Failed to load records from {self.path}, starting empty. Error: {e}")
            return []

        logger.info(f"Loaded {len(records)} records from {self.path}")
        return records

    def save(self, records: List[AttendanceRecord]) -> None:
        """Write all records, replacing the file."""
        self.path.parent.mkdir(parents=True, exist_ok=True)
        data = [self._record_to_dict(r) for r in records]
        with open(self.path, 'w', encoding='utf-8') as f:
            json.dump(data, f, indent=2, ensure_ascii=False)
        logger.debug(f"Saved {len(records)} records to {self.path}")

    @staticmethod
    def _record_to_dict(record: AttendanceRecord) -> dict:
        data = {
            "id": record.id,
            "sewadarId": record.sewadar_id,
            "sewadarName": record.sewadar_name,
            "date": record.date,
            "counter": record.counter,
            "startTime": record.start_time,
        }
        if record.end_time is not None:
            data["endTime"] = record.end_time
        return data

    @staticmethod
    def _check_unique_ids(records: List[AttendanceRecord]) -> None:
        seen = set()
        for record in records:
            if record.id in seen:
                raise RecordFormatError(f"Duplicate record id '{record.id}'")
            seen.add(record.id)

    @staticmethod
    def _dict_to_record(data: dict) -> AttendanceRecord:
        if not isinstance(data, dict):
            raise RecordFormatError(f"Record entry is not an object: {data!r}")
        try:
            record = AttendanceRecord(
                id=data["id"],
                sewadar_id=data["sewadarId"],
                sewadar_name=data.get("sewadarName", ""),
                date=data["date"],
                counter=data.get("counter", ""),
                start_time=data["startTime"],
                end_time=data.get("endTime") or None,
            )
        except KeyError as e:
            raise RecordFormatError(f"Record entry missing key {e}")

        try:
            parse_iso_date(record.date)
        except ValidationError as e:
            raise RecordFormatError(f"Record '{record.id}': {e}")
        if not is_canonical_time(record.start_time):
            raise RecordFormatError(f"Record '{record.id}' has invalid startTime {record.start_time!r}")
        if record.end_time is not None and not is_canonical_time(record.end_time):
            raise RecordFormatError(f"Record '{record.id}' has invalid endTime {record.end_time!r}")
        return record
