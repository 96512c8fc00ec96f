"""
Walk-through of an image record's lifecycle.

Creates a record in a directory-backed store, edits it, saves it, reloads
it, and deletes it, printing the slot states along the way.

Usage:
    python examples/record_lifecycle_demo.py [library_dir]
"""

import asyncio
import logging
import sys
import tempfile
from io import BytesIO
from pathlib import Path

# Add parent directory to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from PIL import Image

from Snap_Libs.ImageEditingLib import FilterTransform
from Snap_Libs.RecordStoreLib import FileMediaStore, ImageRecord


def make_photo() -> bytes:
    image = Image.new("RGB", (640, 480), (70, 120, 200))
    image.paste((240, 200, 60), (220, 140, 420, 340))
    buffer = BytesIO()
    image.save(buffer, format="JPEG")
    return buffer.getvalue()


def show(label: str, record: ImageRecord) -> None:
    print(f"{label:<28} {record!r}")


async def run(library_dir: Path) -> None:
    store = FileMediaStore(library_dir)
    print(f"Library: {library_dir}")
    print("-" * 60)

    record = ImageRecord(store=store)
    show("fresh", record)

    record.set_original(make_photo())
    show("after set_original", record)

    record.set_transform(FilterTransform(warmth=0.4, vignette=0.5))
    show("after set_transform", record)

    thumbnail = await record.get_thumbnail()
    show(f"thumbnail ({len(thumbnail)} bytes)", record)

    await record.save()
    show("after save", record)

    loaded = await ImageRecord.from_database(record.id, store=store)
    show("reloaded", loaded)

    edited = await loaded.get_edited()
    show(f"edited ({len(edited)} bytes)", loaded)

    print(f"\nRecords in library: {len(await ImageRecord.get_all(store=store))}")
    await loaded.delete()
    print(f"Records after delete: {len(await ImageRecord.get_all(store=store))}")


def main() -> None:
    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")

    if len(sys.argv) > 1:
        asyncio.run(run(Path(sys.argv[1])))
        return

    with tempfile.TemporaryDirectory() as tmpdir:
        asyncio.run(run(Path(tmpdir)))


if __name__ == "__main__":
    main()
