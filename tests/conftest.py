import io

import pytest
import requests
from PIL import Image
from werkzeug.datastructures import FileStorage, MultiDict

from rugqc import create_app
from rugqc.extensions import db


@pytest.fixture
def app(tmp_path):
    app = create_app('testing', overrides={
        'UPLOAD_DIR': str(tmp_path / 'uploads'),
        'LOCAL_OPTIONS_FILE': str(tmp_path / 'data' / 'local_options.json'),
        'LOG_FILE': str(tmp_path / 'logs' / 'app.log'),
        'PUBLIC_BASE_URL': 'http://qc.test',
        'EMAIL_ENDPOINT_URL': 'http://qc.test/api/v1/send-email',
    })
    with app.app_context():
        yield app
        db.session.remove()
        db.drop_all()


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def auth_headers(app):
    return {
        'Authorization': f"Bearer {app.config['API_SECRET_TOKEN']}",
        'X-User-Id': '7',
        'X-User-Name': 'Rakesh Kumar',
        'X-User-Role': 'inspector',
    }


@pytest.fixture
def png_bytes():
    buf = io.BytesIO()
    Image.new('RGB', (64, 48), (200, 30, 30)).save(buf, 'PNG')
    return buf.getvalue()


@pytest.fixture
def make_file(png_bytes):
    def _make(filename='photo.png', data=None):
        return FileStorage(stream=io.BytesIO(data if data is not None else png_bytes),
                           filename=filename, content_type='image/png')
    return _make


@pytest.fixture
def inspection_values():
    """Every required field filled in, as posted by the form."""
    return {
        'company': 'EHI',
        'inspection_date': '2026-10-14',
        'qc_inspector_name': 'Rakesh Kumar',
        'customer_name': 'POTTERY BARN',
        'customer_code': 'P-05',
        'customer_po_no': 'PO-44812',
        'ops_no': 'OPS-2291',
        'buyer_design_name': 'Chevron Jute',
        'empl_design_no': 'EM-1182',
        'color_name': 'Ivory',
        'product_sizes': '5x8, 8x10',
        'merchant': 'Ankit Sharma',
        'total_order_qty': '500',
        'inspected_lot_qty': '500',
        'aql': '2.5',
        'sample_size': '50',
        'accepted_qty': '48',
        'rejected_qty': '2',
        'inspection_result': 'PASS',
    }


@pytest.fixture
def request_form(inspection_values):
    def _make(**changes):
        values = dict(inspection_values)
        values.update(changes)
        return MultiDict(values)
    return _make


class FakeImageFetcher:
    """Serves known URLs, raises like requests does for anything else."""

    def __init__(self, images=None):
        self.images = dict(images or {})
        self.calls = []

    def __call__(self, url):
        self.calls.append(url)
        if url not in self.images:
            raise requests.HTTPError(f'404 Client Error: Not Found for url: {url}')
        return self.images[url]


@pytest.fixture
def image_fetcher(png_bytes):
    return FakeImageFetcher({
        'http://qc.test/api/v1/files/final-inspection-images/1_id_photo_id.png': png_bytes,
        'http://qc.test/api/v1/files/final-inspection-images/2_other_0_extra.png': png_bytes,
    })


class FakeSender:
    def __init__(self, result=True, error=None):
        self.result = result
        self.error = error
        self.calls = []

    def __call__(self, recipients, subject, html, pdf_base64, pdf_filename):
        self.calls.append({'recipients': recipients, 'subject': subject, 'html': html,
                           'pdf_base64': pdf_base64, 'pdf_filename': pdf_filename})
        if self.error:
            raise self.error
        return self.result


@pytest.fixture
def sender():
    return FakeSender()


@pytest.fixture
def make_sender():
    return FakeSender
