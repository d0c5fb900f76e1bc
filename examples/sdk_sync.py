#!/usr/bin/env python3
"""
Blocking usage for scripts without an event loop.
"""

from pdf_services import Credentials, ExecutionContext, FileRef, ProtectPDFOperation
from pdf_services.options import EncryptionAlgorithm, PasswordProtectOptions, Permission
from pdf_services.sync import sync_wrapper


def main():
    credentials = Credentials.from_file("pdfservices-api-credentials.json")
    context = ExecutionContext.create(credentials)

    options = (
        PasswordProtectOptions.builder()
        .set_user_password("open-sesame")
        .set_owner_password("owner-only")
        .set_encryption_algorithm(EncryptionAlgorithm.AES_256)
        .set_permissions([Permission.PRINT_LOW_QUALITY])
        .build()
    )
    operation = ProtectPDFOperation.create_new(options)
    operation.set_input(FileRef.create_from_local_file("sample.pdf"))

    try:
        result = operation.execute_sync(context)
        saved = sync_wrapper(result.save_as_file)("output/protected.pdf")
        print(f"✓ Protected PDF saved to {saved}")
    finally:
        sync_wrapper(context.close)()


if __name__ == "__main__":
    main()
