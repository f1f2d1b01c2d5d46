#!/usr/bin/env python3
# SPDX-License-Identifier: Apache-2.0
"""Sample script: generate every language from the EN section of design.json.

Usage:
    cd examples
    python localize_document.py

Environment variables (read from .env in the project root):
    LOCALIZATION_CSV_URL: load strings from this URL instead of strings.csv
"""

from __future__ import annotations

import asyncio
import logging
import os
from pathlib import Path

from dotenv import load_dotenv

from sheet_localizer.core.applier import LocalizeOptions
from sheet_localizer.core.models import Document
from sheet_localizer.host.memory import InMemoryHost
from sheet_localizer.pipeline import LocalizationService

EXAMPLES_DIR = Path(__file__).parent
PROJECT_ROOT = EXAMPLES_DIR.parent

load_dotenv(PROJECT_ROOT / ".env")

# Shrink text that overflows after generation
AUTOSIZE = True
MIN_FONT_SIZE = 8.0

OUTPUT_PATH = PROJECT_ROOT / "output" / "design_localized.json"


async def main() -> None:
    document = Document.load(EXAMPLES_DIR / "design.json")
    host = InMemoryHost(document)
    service = LocalizationService(host, notification_sink=print)

    csv_url = os.environ.get("LOCALIZATION_CSV_URL")
    if csv_url:
        result = await service.load_csv_url(csv_url)
    else:
        result = await service.load_csv_text(
            (EXAMPLES_DIR / "strings.csv").read_text(encoding="utf-8")
        )
    if not result.success:
        raise SystemExit(f"Load failed: {result.error}")

    await service.generate_all_languages()
    # Generated sections are localized without autosize; fit them in a second pass
    await service.localize_all(
        LocalizeOptions(autosize_enabled=AUTOSIZE, min_font_size=MIN_FONT_SIZE)
    )

    document.save(OUTPUT_PATH)
    print(f"Saved: {OUTPUT_PATH}")


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO, format="%(levelname)s: %(message)s")
    asyncio.run(main())
