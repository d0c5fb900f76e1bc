import pytest

from pdf_services.credentials import Credentials
from pdf_services.settings import ClientConfig
from tests.helpers.fake_service import BASE_URI, IMS_URI, FakePDFServices

PDF_BYTES = b"%PDF-1.4\n1 0 obj << /Type /Catalog >> endobj\ntrailer << /Root 1 0 R >>\n%%EOF\n"


@pytest.fixture
def credentials():
    return Credentials.service_token(
        client_id="test-client-id",
        client_secret="test-client-secret",
        auth_code="test-auth-code",
        ims_uri=IMS_URI,
        base_uri=BASE_URI,
    )


@pytest.fixture
def fast_config():
    return ClientConfig(
        processing_timeout=5,
        poll_interval=0.01,
        max_poll_interval=0.05,
        max_retries=2,
        retry_delay=0,
    )


@pytest.fixture
def fake_service():
    return FakePDFServices()


@pytest.fixture
def sample_pdf(tmp_path):
    path = tmp_path / "sample.pdf"
    path.write_bytes(PDF_BYTES)
    return path


@pytest.fixture
def sample_docx(tmp_path):
    path = tmp_path / "template.docx"
    path.write_bytes(b"PK\x03\x04 fake docx")
    return path
