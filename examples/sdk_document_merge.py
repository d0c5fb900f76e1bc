#!/usr/bin/env python3
"""
Document merge example: fill a Word agreement template with JSON data.

Expects Agreement/input/TermsAndConditions_FINAL.docx and
Agreement/data/data.json relative to the working directory.
"""

import asyncio
import json
import time
from pathlib import Path

from pdf_services import (
    Credentials,
    DocumentMergeOperation,
    ExecutionContext,
    FileRef,
    ServiceApiError,
    ServiceUsageError,
)
from pdf_services.options import DocumentMergeOptions, OutputFormat

TEMPLATE_NAME = "Agreement"


async def main():
    base = Path(TEMPLATE_NAME)
    data = json.loads((base / "data" / "data.json").read_text(encoding="utf-8"))
    output = base / "output" / f"{TEMPLATE_NAME}_{int(time.time() * 1000)}.pdf"

    credentials = Credentials.from_file("pdfservices-api-credentials.json")
    options = (
        DocumentMergeOptions.builder()
        .with_json_data(data)
        .with_output_format(OutputFormat.PDF)
        .build()
    )
    operation = DocumentMergeOperation.create_new(options)
    operation.set_input(
        FileRef.create_from_local_file(base / "input" / "TermsAndConditions_FINAL.docx")
    )

    async with ExecutionContext.create(credentials) as context:
        try:
            result = await operation.execute(context)
            saved = await result.save_as_file(output)
            print(f"✓ Merged document saved to {saved}")
        except (ServiceApiError, ServiceUsageError) as e:
            print(f"❌ Exception encountered while executing operation: {e}")


if __name__ == "__main__":
    asyncio.run(main())
