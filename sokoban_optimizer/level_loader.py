import json
from dataclasses import asdict, dataclass
from typing import List

FIELDS = ("title", "definition", "solution")


@dataclass
class LevelRecord:
    title: str
    definition: str
    solution: str


def load_records(path: str) -> List[LevelRecord]:
    """Reads a JSON array of {title, definition, solution} objects.
    Extra keys are ignored.
    """
    with open(path, 'r', encoding='utf-8') as f:
        data = json.load(f)
    if not isinstance(data, list):
        raise ValueError(f"{path}: expected a JSON array of levels")
    records = []
    for idx, item in enumerate(data):
        missing = [k for k in FIELDS if not isinstance(item, dict) or k not in item]
        if missing:
            raise ValueError(f"{path}: level #{idx} is missing {', '.join(missing)}")
        records.append(LevelRecord(*(str(item[k]) for k in FIELDS)))
    return records


def save_records(path: str, records: List[LevelRecord]) -> None:
    with open(path, 'w', encoding='utf-8') as f:
        json.dump([asdict(r) for r in records], f, indent=2)
        f.write('\n')
