import csv
import datetime as _dt
import json
from typing import List

from associations import AssociationStore

try:
    from openpyxl import Workbook
except ImportError:  # pragma: no cover - optional dependency
    Workbook = None


CSV_HEADERS = [
    "MimeType",
    "Handler",
]


def association_rows(store: AssociationStore) -> List[List[str]]:
    rows: List[List[str]] = []
    for record in store.records():
        for handler in record.handlers:
            rows.append([record.mime_type, handler])
    return rows


def export_csv(file_path: str, store: AssociationStore) -> None:
    with open(file_path, "w", newline="", encoding="utf-8") as csv_file:
        writer = csv.writer(csv_file)
        writer.writerow(CSV_HEADERS)
        writer.writerows(association_rows(store))


def export_xlsx(file_path: str, store: AssociationStore) -> None:
    if Workbook is None:
        raise RuntimeError("openpyxl is required for XLSX export. Install it with: pip install openpyxl")
    book = Workbook(write_only=True)
    sheet = book.create_sheet("Associations")
    sheet.append(CSV_HEADERS)
    for row in association_rows(store):
        sheet.append(row)
    book.save(file_path)


def save_json(file_path: str, store: AssociationStore) -> None:
    payload = {
        "exported_at": _dt.datetime.now().isoformat(timespec="seconds"),
        "associations": [record.to_dict() for record in store.records()],
    }
    with open(file_path, "w", encoding="utf-8") as fh:
        json.dump(payload, fh, indent=2)


def export_store(file_path: str, store: AssociationStore) -> None:
    # Plain associations only: a live default per type would mean one xdg-mime run per type.
    lowered = file_path.lower()
    if lowered.endswith(".json"):
        save_json(file_path, store)
    elif lowered.endswith(".csv"):
        export_csv(file_path, store)
    else:
        export_xlsx(file_path, store)
