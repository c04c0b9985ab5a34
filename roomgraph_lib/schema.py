# --- roomgraph_lib/schema.py ---
import json
import logging
import os
from dataclasses import asdict, dataclass, field
from typing import Any, Dict, List, Optional, Sequence

log = logging.getLogger("roomgraph.persist")

# Sentinel for fields left untouched by update_room.
_UNSET: Any = object()


@dataclass
class RoomRecord:
    """A single persisted point region (room or destination).

    Field order is part of the on-disk format; textual substitution over the
    serialized document relies on it staying stable across save/reload.
    """

    id: str
    number: Optional[int]
    floor: int
    x: int
    y: int
    room_type: str = ""
    description: str = ""
    nodes: List[str] = field(default_factory=list)


def encode_records(records: Sequence[RoomRecord], indent: int = 4) -> str:
    """Serializes room records to the pretty-printed JSON document text."""
    return json.dumps([asdict(r) for r in records], indent=indent, ensure_ascii=False)


def parse_records(text: str) -> List[RoomRecord]:
    """Parses document text back into room records."""
    data = json.loads(text)
    if not isinstance(data, list):
        raise ValueError("Room document must be a JSON array of room objects")

    records = []
    for room_data in data:
        records.append(
            RoomRecord(
                id=room_data["id"],
                number=room_data.get("number"),
                floor=room_data["floor"],
                x=room_data["x"],
                y=room_data["y"],
                room_type=room_data.get("room_type", ""),
                description=room_data.get("description", ""),
                nodes=list(room_data.get("nodes", [])),
            )
        )
    return records


class RoomDocument:
    """The live, human-editable serialization of a floor's point regions."""

    def __init__(self, text: str, floor: int, indent: int = 4):
        self.text = text
        self.floor = floor
        self.indent = indent

    @classmethod
    def from_points(cls, points, floor: int, indent: int = 4) -> "RoomDocument":
        """Builds a document with one record per point region, in order."""
        records = []
        for point in points:
            x, y = point.position()
            records.append(
                RoomRecord(
                    id=point.hash(),
                    number=None,
                    floor=floor,
                    x=x,
                    y=y,
                    nodes=list(point.connections),
                )
            )
        log.debug("Encoded %d room records for floor %d.", len(records), floor)
        return cls(encode_records(records, indent), floor, indent)

    @classmethod
    def load(cls, input_path: str, floor: Optional[int] = None, indent: int = 4):
        """
        Reloads a previously saved document from disk.

        Args:
            input_path: The path to the saved .json file.
            floor: The floor index. When omitted it is taken from the first
                record, or 0 for an empty document.
            indent: Indentation used by later structured re-serialization.

        Returns:
            A RoomDocument whose text is exactly the file's content.
        """
        with open(input_path, "r", encoding="utf-8") as f:
            text = f.read()

        if floor is None:
            records = parse_records(text)
            floor = records[0].floor if records else 0
        return cls(text, floor, indent)

    def records(self) -> List[RoomRecord]:
        return parse_records(self.text)

    def replace(self, from_text: str, to_text: str) -> int:
        """
        Replaces every literal occurrence of `from_text` in the document text.

        This is a raw substitution over the whole document: a `from_text`
        that also occurs inside another record's id, description or nodes is
        replaced there as well.

        Returns:
            The number of occurrences replaced.
        """
        if not from_text:
            return 0
        count = self.text.count(from_text)
        self.text = self.text.replace(from_text, to_text)
        log.debug("Replaced %d occurrence(s) of '%s' with '%s'.", count, from_text, to_text)
        return count

    def rename_room(self, identity: str, new_identity: str) -> int:
        """
        Structured rename: updates the matching record's id and every
        connection entry equal to `identity`, then re-serializes.

        Returns:
            The number of fields changed.
        """
        records = self.records()
        changed = 0
        for record in records:
            if record.id == identity:
                record.id = new_identity
                changed += 1
            for i, node in enumerate(record.nodes):
                if node == identity:
                    record.nodes[i] = new_identity
                    changed += 1

        if not changed:
            raise KeyError(identity)
        self.text = encode_records(records, self.indent)
        log.debug("Renamed '%s' to '%s' (%d fields).", identity, new_identity, changed)
        return changed

    def update_room(
        self,
        identity: str,
        number: Any = _UNSET,
        room_type: Any = _UNSET,
        description: Any = _UNSET,
    ) -> RoomRecord:
        """Structured update of a record's editable fields, keyed by id."""
        records = self.records()
        updates: Dict[str, Any] = {
            "number": number,
            "room_type": room_type,
            "description": description,
        }
        for record in records:
            if record.id != identity:
                continue
            for name, value in updates.items():
                if value is not _UNSET:
                    setattr(record, name, value)
            self.text = encode_records(records, self.indent)
            return record
        raise KeyError(identity)

    def save(self, output_path: str) -> None:
        """
        Writes the current document text to `output_path`.

        Args:
            output_path: The path to the output .json file. Its parent
                directory is created when missing.

        Raises:
            OSError: If the directory or file cannot be written. The
                in-memory text is left unchanged.
        """
        directory = os.path.dirname(output_path)
        if directory:
            os.makedirs(directory, exist_ok=True)
        with open(output_path, "w", encoding="utf-8") as f:
            f.write(self.text)
        log.info("Saved room document to '%s'", output_path)
