import pytest

from rugqc.exceptions import DeliveryError, FormValidationError, UploadError
from rugqc.extensions import db
from rugqc.models.audit import AuditLog
from rugqc.models.inspection import InspectionRecord
from rugqc.services.form_state import InspectionForm
from rugqc.services.inspection_service import build_record, submit_inspection, delete_record


class FakeUploader:
    def __init__(self, error=None):
        self.error = error
        self.forms = []

    def upload_form(self, form):
        self.forms.append(form)
        if self.error:
            raise self.error
        return {
            'photos': {'id_photo': 'http://qc.test/api/v1/files/final-inspection-images/1_id_photo_id.png'},
            'other_photos': ['http://qc.test/api/v1/files/final-inspection-images/2_other_0_extra.png'],
            'not_ok_photos': {},
        }


def test_build_record_sections_and_counts(inspection_values):
    values = dict(InspectionForm().fields, **inspection_values)
    values['backing'] = 'NOT OK'
    values['gross_weight'] = '22 kg'
    record = build_record(values, [{'defect_code': 'D01', 'description': 'Shading',
                                    'major_count': '', 'minor_count': '4'}], {})
    assert record.total_order_qty == 500 and record.rejected_qty == 2
    assert record.product_quality['backing'] == 'NOT OK'
    assert record.packaging['gross_weight'] == '22 kg'
    assert record.packaging['packing_type'] == 'Solid'
    assert record.defects == [{'defect_code': 'D01', 'description': 'Shading',
                               'major_count': 0, 'minor_count': 4}]
    assert record.created_at is not None


def test_build_record_empty_quantities_become_zero(inspection_values):
    values = dict(InspectionForm().fields, **inspection_values)
    values['accepted_qty'] = ''
    assert build_record(values, [], {}).accepted_qty == 0


def test_submit_persists_and_skips_delivery_without_recipients(app, request_form, sender, image_fetcher):
    form = InspectionForm.from_request(request_form())
    result = submit_inspection(form, [], uploader=FakeUploader(), image_fetcher=image_fetcher, send=sender)

    assert result['email_sent'] is False and result['delivery_error'] is None
    assert sender.calls == []
    record = InspectionRecord.query.one()
    assert record.photos == {'id_photo': 'http://qc.test/api/v1/files/final-inspection-images/1_id_photo_id.png'}
    assert result['inspection']['id'] == record.id
    assert AuditLog.query.filter_by(table_name='final_inspections', action='INSERT').count() == 1
    # form is back to defaults for the next inspection
    assert form.fields['customer_name'] == ''


def test_submit_delivers_to_recipients(app, request_form, sender, image_fetcher):
    form = InspectionForm.from_request(request_form())
    result = submit_inspection(form, ['qa@easternmills.com'], uploader=FakeUploader(),
                               image_fetcher=image_fetcher, send=sender)
    assert result['email_sent'] is True
    call = sender.calls[0]
    assert call['recipients'] == ['qa@easternmills.com']
    assert call['subject'] == 'Final Inspection: POTTERY BARN - Chevron Jute [PASS] - EHI/IP/01'
    assert call['pdf_filename'] == 'Final_Inspection_OPS-2291_2026-10-14.pdf'
    assert call['pdf_base64'].startswith('JVBER')  # %PDF
    assert 'PASSED' in call['html']


def test_delivery_failure_keeps_record(app, request_form, image_fetcher, make_sender):
    failing = make_sender(error=DeliveryError('relay down'))
    form = InspectionForm.from_request(request_form())
    result = submit_inspection(form, ['qa@easternmills.com'], uploader=FakeUploader(),
                               image_fetcher=image_fetcher, send=failing)
    assert result['email_sent'] is False
    assert result['delivery_error'] == 'relay down'
    assert InspectionRecord.query.count() == 1


def test_validation_failure_writes_nothing(app, request_form):
    uploader = FakeUploader()
    form = InspectionForm.from_request(request_form(ops_no=''))
    with pytest.raises(FormValidationError):
        submit_inspection(form, [], uploader=uploader)
    assert uploader.forms == []
    assert InspectionRecord.query.count() == 0


def test_upload_failure_writes_nothing(app, request_form):
    form = InspectionForm.from_request(request_form())
    with pytest.raises(UploadError):
        submit_inspection(form, [], uploader=FakeUploader(error=UploadError()))
    assert InspectionRecord.query.count() == 0
    # state is kept so the inspector can resubmit
    assert form.fields['ops_no'] == 'OPS-2291'


def test_delete_record_audited(app, request_form):
    form = InspectionForm.from_request(request_form())
    record_id = submit_inspection(form, [], uploader=FakeUploader())['inspection']['id']
    delete_record(db.session.get(InspectionRecord, record_id))
    assert InspectionRecord.query.count() == 0
    entry = AuditLog.query.filter_by(action='DELETE').one()
    assert entry.record_id == record_id and entry.old_data['ops_no'] == 'OPS-2291'


def test_delivery_error_with_unexpected_relay_reply_keeps_record(app, request_form, image_fetcher, monkeypatch):
    class Reply:
        status_code = 502
        ok = False
        text = ''

        def json(self):
            return ['bad gateway']

    monkeypatch.setattr('rugqc.services.delivery.requests.post', lambda *args, **kwargs: Reply())
    form = InspectionForm.from_request(request_form())
    result = submit_inspection(form, ['qa@easternmills.com'], uploader=FakeUploader(), image_fetcher=image_fetcher)
    assert result['email_sent'] is False
    assert result['delivery_error'] == 'HTTP 502'
    assert InspectionRecord.query.count() == 1


def test_delivery_skipped_without_endpoint(app, request_form, sender, image_fetcher):
    app.config['EMAIL_ENDPOINT_URL'] = None
    form = InspectionForm.from_request(request_form())
    result = submit_inspection(form, ['qa@easternmills.com'], uploader=FakeUploader(),
                               image_fetcher=image_fetcher, send=sender)
    assert result['email_sent'] is False and result['delivery_error'] is None
    assert sender.calls == []
    assert InspectionRecord.query.count() == 1
