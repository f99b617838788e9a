from __future__ import annotations

from datetime import datetime
from pathlib import Path

import openpyxl
import pytest


class MemoryFileAccess:
    """In-memory file access that records every read."""

    def __init__(self, files: dict[str, bytes]):
        self.files = files
        self.reads: list[str] = []

    async def read_bytes(self, file_path: str) -> bytes:
        self.reads.append(file_path)
        try:
            return self.files[file_path]
        except KeyError:
            raise FileNotFoundError(f"No such file or directory: '{file_path}'") from None


def create_sample_workbook(path: Path) -> None:
    wb = openpyxl.Workbook()
    ws = wb.active
    ws.title = "Products"

    ws["A1"].value = "Name"
    ws["B1"].value = "Price"
    ws["C1"].value = "Launched"
    ws["D1"].value = "Active"

    ws["A2"].value = "Widget"
    ws["B2"].value = 9.99
    ws["C2"].value = datetime(2024, 1, 15)
    ws["D2"].value = True

    # Row 3 left blank on purpose.
    ws["A4"].value = "Gadget"
    ws["B4"].value = 20
    ws["D4"].value = False

    regions = wb.create_sheet("Regions")
    regions["A1"].value = "Region"
    regions["B1"].value = "Code"
    regions["A2"].value = "North"
    regions["B2"].value = 1

    wb.save(path)
    wb.close()


@pytest.fixture
def sample_workbook(tmp_path: Path) -> Path:
    path = tmp_path / "products.xlsx"
    create_sample_workbook(path)
    return path


@pytest.fixture
def sample_csv(tmp_path: Path) -> Path:
    path = tmp_path / "rows.csv"
    path.write_text("a,b,c\n1,2.5,x\n\n3,4,y\n", encoding="utf-8")
    return path
