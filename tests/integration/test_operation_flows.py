"""
End-to-end flows through ExecutionContext against the in-process fake service.
"""

import asyncio
import json

import pytest

from pdf_services import (
    CompressPDFOperation,
    Credentials,
    DocumentMergeOperation,
    ExecutionContext,
    FileRef,
    ServiceApiError,
    UsageError,
)
from pdf_services.options import (
    CompressionLevel,
    CompressPDFOptions,
    DocumentMergeOptions,
    OutputFormat,
)
from tests.helpers.fake_service import BASE_URI, IMS_URI


class TestCompressFlow:
    @pytest.mark.asyncio
    async def test_compress_and_save(self, credentials, fake_service, fast_config, sample_pdf, tmp_path):
        fake_service.polls_in_progress = 2
        async with fake_service.client() as client:
            async with ExecutionContext.create(credentials, fast_config, client) as context:
                options = (
                    CompressPDFOptions.builder()
                    .with_compression_level(CompressionLevel.MEDIUM)
                    .build()
                )
                operation = CompressPDFOperation.create_new(options)
                operation.set_input(FileRef.create_from_local_file(sample_pdf))

                result = await operation.execute(context)

        saved = await result.save_as_file(tmp_path / "output" / "compressed.pdf")
        assert saved.exists()
        assert saved.stat().st_size > 0
        assert fake_service.submissions[0][1]["compressionLevel"] == "MEDIUM"

        with pytest.raises(UsageError):
            await result.save_as_file(tmp_path / "output" / "again.pdf")

    @pytest.mark.asyncio
    async def test_concurrent_operations_share_token(
        self, credentials, fake_service, fast_config, sample_pdf
    ):
        async with fake_service.client() as client:
            async with ExecutionContext.create(credentials, fast_config, client) as context:
                operations = []
                for _ in range(5):
                    operation = CompressPDFOperation.create_new()
                    operation.set_input(FileRef.create_from_local_file(sample_pdf))
                    operations.append(operation.execute(context))

                results = await asyncio.gather(*operations)

        assert len(results) == 5
        assert len(fake_service.token_requests) == 1
        assert len(fake_service.submissions) == 5


class TestDocumentMergeFlow:
    @pytest.mark.asyncio
    async def test_merge_agreement_from_credentials_file(
        self, fake_service, fast_config, sample_docx, tmp_path
    ):
        credentials_file = tmp_path / "pdfservices-api-credentials.json"
        credentials_file.write_text(
            json.dumps(
                {
                    "client_credentials": {"client_id": "id", "client_secret": "secret"},
                    "service_token_credentials": {"auth_code": "code", "ims_uri": IMS_URI},
                    "base_uri": BASE_URI,
                }
            )
        )
        data = {"customerName": "Kane Miller", "customerVisits": 100}

        async with fake_service.client() as client:
            context = ExecutionContext.create(
                Credentials.from_file(credentials_file), fast_config, client
            )
            options = (
                DocumentMergeOptions.builder()
                .with_json_data(data)
                .with_output_format(OutputFormat.PDF)
                .build()
            )
            operation = DocumentMergeOperation.create_new(options)
            operation.set_input(FileRef.create_from_local_file(sample_docx))
            result = await operation.execute(context)

        saved = await result.save_as_file(tmp_path / "Agreement.pdf")
        assert saved.suffix == ".pdf"
        assert fake_service.submissions[0][1]["jsonDataForMerge"] == data

    @pytest.mark.asyncio
    async def test_service_failure_surfaces(self, credentials, fake_service, fast_config, sample_docx):
        import httpx

        fake_service.override(
            "GET",
            f"{BASE_URI}/operation/",
            lambda request: httpx.Response(
                200,
                json={
                    "status": "failed",
                    "error": {
                        "code": "INVALID_TEMPLATE",
                        "message": "Template is malformed",
                        "status": 400,
                    },
                },
            ),
        )
        options = (
            DocumentMergeOptions.builder()
            .with_json_data({"a": 1})
            .with_output_format(OutputFormat.PDF)
            .build()
        )
        operation = DocumentMergeOperation.create_new(options)
        operation.set_input(FileRef.create_from_local_file(sample_docx))

        async with fake_service.client() as client:
            async with ExecutionContext.create(credentials, fast_config, client) as context:
                with pytest.raises(ServiceApiError) as exc_info:
                    await operation.execute(context)

        assert exc_info.value.error_code == "INVALID_TEMPLATE"
        assert exc_info.value.request_tracking_id == "job-1"
