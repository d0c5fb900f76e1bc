#!/usr/bin/env python3
"""
Basic SDK usage examples for the PDF Services SDK.

Reads credentials from pdfservices-api-credentials.json in the working
directory and processes sample.pdf.
"""

import asyncio
from pathlib import Path

from pdf_services import (
    CompressPDFOperation,
    Credentials,
    ExecutionContext,
    FileRef,
    OCROperation,
    PDFPropertiesOperation,
    ServiceApiError,
    ServiceUsageError,
)
from pdf_services.options import CompressionLevel, CompressPDFOptions, PDFPropertiesOptions

OUTPUT_DIR = Path("output")


async def compress_pdf(context: ExecutionContext):
    """Compress a PDF with medium compression."""
    print("=== Compress PDF ===")

    options = (
        CompressPDFOptions.builder()
        .with_compression_level(CompressionLevel.MEDIUM)
        .build()
    )
    operation = CompressPDFOperation.create_new(options)
    operation.set_input(FileRef.create_from_local_file("sample.pdf"))

    result = await operation.execute(context)
    saved = await result.save_as_file(OUTPUT_DIR / "compressed.pdf")
    print(f"✓ Saved to {saved}")


async def ocr_pdf(context: ExecutionContext):
    """Make a scanned PDF searchable with default settings."""
    print("\n=== OCR ===")

    operation = OCROperation.create_new()
    operation.set_input(FileRef.create_from_local_file("sample.pdf"))

    result = await operation.execute(context)
    saved = await result.save_as_file(OUTPUT_DIR / "searchable.pdf")
    print(f"✓ Saved to {saved}")


async def pdf_properties(context: ExecutionContext):
    """Print document-level properties."""
    print("\n=== PDF Properties ===")

    options = PDFPropertiesOptions.builder().include_page_level_properties(False).build()
    operation = PDFPropertiesOperation.create_new(options)
    operation.set_input(FileRef.create_from_local_file("sample.pdf"))

    properties = await operation.execute(context)
    document = properties.get("document", {})
    print(f"✓ Pages: {document.get('page_count')}")


async def main():
    credentials = Credentials.from_file("pdfservices-api-credentials.json")

    async with ExecutionContext.create(credentials) as context:
        try:
            # Operations sharing a context reuse one session token
            await asyncio.gather(
                compress_pdf(context),
                ocr_pdf(context),
                pdf_properties(context),
            )
        except ServiceUsageError as e:
            print(f"❌ Quota exhausted: {e}")
        except ServiceApiError as e:
            print(f"❌ Service error: {e}")


if __name__ == "__main__":
    asyncio.run(main())
