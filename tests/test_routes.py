import io
import json

import pytest

from rugqc.models.inspection import InspectionRecord
from rugqc.services import inspection_service, report_pdf


@pytest.fixture
def sent(monkeypatch, image_fetcher, sender):
    monkeypatch.setattr(report_pdf, 'fetch_image', image_fetcher)
    monkeypatch.setattr(inspection_service, 'dispatch', sender)
    return sender.calls


def _submit(client, auth_headers, values, png_bytes, **extra):
    data = dict(values)
    data['approved_sample_photo'] = (io.BytesIO(png_bytes), 'sample.png')
    data['other_photos'] = [(io.BytesIO(png_bytes), 'extra1.png'), (io.BytesIO(png_bytes), 'extra2.png')]
    data.update(extra)
    return client.post('/api/v1/inspections', headers=auth_headers, data=data,
                       content_type='multipart/form-data')


def test_health(client):
    assert client.get('/api/v1/health').get_json()['database'] == 'connected'


def test_requires_token(client):
    resp = client.get('/api/v1/inspections')
    assert resp.status_code == 401
    assert resp.get_json()['success'] is False


def test_viewer_cannot_submit(client, auth_headers, inspection_values, png_bytes):
    headers = dict(auth_headers, **{'X-User-Role': 'viewer'})
    assert _submit(client, headers, inspection_values, png_bytes).status_code == 403


def test_defaults(client, auth_headers):
    data = client.get('/api/v1/inspections/defaults', headers=auth_headers).get_json()['data']
    assert data['document_no'] == 'EHI/IP/01' and data['inspection_result'] == 'PASS'


def test_submit_without_recipients(client, auth_headers, inspection_values, png_bytes, sent, app):
    resp = _submit(client, auth_headers, inspection_values, png_bytes,
                   backing='NOT OK', not_ok_backing=(io.BytesIO(png_bytes), 'backing.png'),
                   defects=json.dumps([{'defect_code': 'D05', 'major_count': 1, 'minor_count': 2}]))
    assert resp.status_code == 201, resp.get_json()
    body = resp.get_json()
    assert body['data']['email_sent'] is False
    assert sent == []

    doc = body['data']['inspection']
    assert doc['created_by'] == 'Rakesh Kumar'
    assert doc['photos']['approved_sample_photo'].startswith(
        'http://qc.test/api/v1/files/final-inspection-images/')
    assert doc['photos']['approved_sample_photo'].endswith('_approved_sample_photo_sample.png')
    assert [u.rsplit('_', 2)[-2] for u in doc['other_photos']] == ['0', '1']
    assert doc['not_ok_photos']['backing'].endswith('_notok_backing_backing.png')
    assert doc['defects'][0]['description'] == 'Backing glue / latex showing'

    path = doc['photos']['approved_sample_photo'].split('/api/v1/files/', 1)[1]
    photo = client.get(f'/api/v1/files/{path}')
    assert photo.status_code == 200 and photo.data == png_bytes


def test_submit_with_recipients_sends_report(client, auth_headers, inspection_values, png_bytes, sent):
    client.put('/api/v1/settings/email', headers=auth_headers,
               json={'recipients': ['QA@EasternMills.com', 'qa@easternmills.com']})
    resp = _submit(client, auth_headers, inspection_values, png_bytes)
    assert resp.get_json()['data']['email_sent'] is True
    assert sent[0]['recipients'] == ['qa@easternmills.com']
    assert sent[0]['pdf_filename'] == 'Final_Inspection_OPS-2291_2026-10-14.pdf'


def test_submit_validation_error(client, auth_headers, inspection_values, png_bytes, sent):
    resp = _submit(client, auth_headers, dict(inspection_values, customer_name='', sample_size='x'), png_bytes)
    assert resp.status_code == 400
    fields = {e['field'] for e in resp.get_json()['errors']}
    assert {'customer_name', 'sample_size'} <= fields
    assert InspectionRecord.query.count() == 0


def test_submit_rejects_non_image(client, auth_headers, inspection_values, png_bytes, sent):
    resp = _submit(client, auth_headers, inspection_values, png_bytes,
                   id_photo=(io.BytesIO(b'MZ'), 'setup.exe'))
    assert resp.status_code == 400
    assert InspectionRecord.query.count() == 0


def test_list_get_pdf_delete(client, auth_headers, inspection_values, png_bytes, sent):
    first = _submit(client, auth_headers, inspection_values, png_bytes).get_json()['data']['inspection']
    second = _submit(client, auth_headers, dict(inspection_values, ops_no='OPS-3000'), png_bytes,
                     approved_sample_photo=(io.BytesIO(png_bytes), 'sample2.png'),
                     other_photos=[]).get_json()['data']['inspection']

    listing = client.get('/api/v1/inspections', headers=auth_headers).get_json()
    assert [r['id'] for r in listing['data']] == [second['id'], first['id']]
    assert listing['meta']['total'] == 2

    search = client.get('/api/v1/inspections?search=OPS-3000', headers=auth_headers).get_json()
    assert [r['id'] for r in search['data']] == [second['id']]

    detail = client.get(f"/api/v1/inspections/{first['id']}", headers=auth_headers).get_json()['data']
    assert detail['customer_name'] == 'POTTERY BARN'

    pdf = client.get(f"/api/v1/inspections/{first['id']}/pdf", headers=auth_headers)
    assert pdf.status_code == 200 and pdf.mimetype == 'application/pdf'
    assert pdf.data.startswith(b'%PDF')
    assert 'Final_Inspection_OPS-2291_2026-10-14.pdf' in pdf.headers['Content-Disposition']

    unconfirmed = client.delete(f"/api/v1/inspections/{first['id']}", headers=auth_headers)
    assert unconfirmed.status_code == 400
    assert InspectionRecord.query.count() == 2

    deleted = client.delete(f"/api/v1/inspections/{first['id']}?confirm=true", headers=auth_headers)
    assert deleted.status_code == 200
    assert client.get(f"/api/v1/inspections/{first['id']}", headers=auth_headers).status_code == 404


def test_resend(client, auth_headers, inspection_values, png_bytes, sent):
    record = _submit(client, auth_headers, inspection_values, png_bytes).get_json()['data']['inspection']
    url = f"/api/v1/inspections/{record['id']}/resend"

    assert client.post(url, headers=auth_headers).status_code == 400

    client.put('/api/v1/settings/email', headers=auth_headers, json={'recipients': ['ops@easternmills.com']})
    resp = client.post(url, headers=auth_headers)
    assert resp.status_code == 200
    assert sent[-1]['recipients'] == ['ops@easternmills.com']


def test_email_settings_validation(client, auth_headers):
    resp = client.put('/api/v1/settings/email', headers=auth_headers, json={'recipients': ['bad-address']})
    assert resp.status_code == 400
    assert client.get('/api/v1/settings/email', headers=auth_headers).get_json()['data']['recipients'] == []


def test_options_and_customers(client, auth_headers):
    resp = client.post('/api/v1/options/merchants', headers=auth_headers, json={'value': 'Irfan'})
    assert resp.status_code == 201
    assert 'Irfan' in client.get('/api/v1/options/merchants', headers=auth_headers).get_json()['data']
    assert client.get('/api/v1/options/colours', headers=auth_headers).status_code == 404

    resp = client.post('/api/v1/customers', headers=auth_headers, json={'name': 'nordic knots', 'code': 'n-09'})
    assert resp.status_code == 201
    customers = client.get('/api/v1/customers', headers=auth_headers).get_json()['data']
    assert {'name': 'NORDIC KNOTS', 'code': 'N-09'} in customers

    dup = client.post('/api/v1/customers', headers=auth_headers, json={'name': 'Nordic Knots', 'code': 'N-10'})
    assert dup.status_code == 409
    missing = client.post('/api/v1/customers', headers=auth_headers, json={'name': 'X'})
    assert missing.status_code == 400


def test_lookups(client, auth_headers):
    codes = client.get('/api/v1/lookups/defect-codes', headers=auth_headers).get_json()['data']
    assert codes[0] == {'code': 'D01', 'description': 'Color variation / shading'}
    photos = client.get('/api/v1/lookups/photo-types', headers=auth_headers).get_json()['data']
    assert len(photos) == 11
    form = client.get('/api/v1/lookups/form', headers=auth_headers).get_json()['data']
    assert form['companies'][1] == {'code': 'EMPL', 'name': 'Eastern Mills Pvt. Ltd.', 'document_no': 'EMPL/IP/01'}


@pytest.mark.parametrize('method, url, body', [
    ('post', '/api/v1/customers', {'name': 5, 'code': 'A-1'}),
    ('post', '/api/v1/customers', ['NORDIC KNOTS', 'N-09']),
    ('post', '/api/v1/options/merchants', ['Irfan']),
    ('post', '/api/v1/options/merchants', {'value': 12}),
    ('put', '/api/v1/settings/email', ['qa@easternmills.com']),
])
def test_malformed_json_bodies_rejected(client, auth_headers, method, url, body):
    resp = getattr(client, method)(url, headers=auth_headers, json=body)
    assert resp.status_code == 400
    assert resp.get_json()['success'] is False


def test_resend_without_email_endpoint(client, auth_headers, inspection_values, png_bytes, sent, app):
    record = _submit(client, auth_headers, inspection_values, png_bytes).get_json()['data']['inspection']
    client.put('/api/v1/settings/email', headers=auth_headers, json={'recipients': ['ops@easternmills.com']})
    app.config['EMAIL_ENDPOINT_URL'] = None
    resp = client.post(f"/api/v1/inspections/{record['id']}/resend", headers=auth_headers)
    assert resp.status_code == 409
    assert sent == []
