import json
from datetime import date

import pytest
from werkzeug.datastructures import MultiDict

from rugqc.constants import OK_NOT_OK_FIELDS, REQUIRED_FIELDS
from rugqc.exceptions import FormValidationError
from rugqc.services.form_state import InspectionForm


def _fields(errors):
    return {e['field'] for e in errors}


def test_defaults():
    form = InspectionForm(today=date(2026, 10, 14))
    assert form.fields['inspection_date'] == '2026-10-14'
    assert form.fields['company'] == 'EHI'
    assert form.fields['document_no'] == 'EHI/IP/01'
    assert form.fields['aql'] == '2.5'
    assert form.fields['packing_type'] == 'Solid'
    assert form.fields['inspection_result'] == 'PASS'
    assert form.fields['approved_sample_available'] == 'Yes'
    assert all(form.fields[f] == 'OK' for f in OK_NOT_OK_FIELDS)
    assert form.fields['customer_name'] == ''
    assert form.defects == [] and form.photos == {}


def test_company_derives_document_number():
    form = InspectionForm()
    form.set_company('EMPL')
    assert form.fields['document_no'] == 'EMPL/IP/01'
    form.set_field('document_no', 'HAND/EDITED')
    assert form.fields['document_no'] == 'EMPL/IP/01'


def test_unknown_company_rejected():
    with pytest.raises(FormValidationError):
        InspectionForm().set_company('ACME')


def test_size_tags_joined():
    form = InspectionForm()
    form.set_size_tags(['5x8', ' 8x10 ', '5x8', ''])
    assert form.size_tags == ['5x8', '8x10']
    assert form.fields['product_sizes'] == '5x8, 8x10'


def test_defect_rows():
    form = InspectionForm()
    row = form.add_defect('D01')
    assert row['description'] == 'Color variation / shading'
    form.add_defect(description='Loose thread at corner', minor_count=2)
    form.update_defect(0, defect_code='D03', major_count=1)
    assert form.defects[0]['description'] == 'Loose or missing tufts'
    assert form.defects[0]['major_count'] == 1
    form.remove_defect(1)
    assert len(form.defects) == 1
    with pytest.raises(KeyError):
        form.update_defect(0, severity='high')


def test_missing_required_fields_on_defaults():
    missing = InspectionForm().missing_required_fields()
    assert 'customer_name' in missing and 'total_order_qty' in missing
    assert 'company' not in missing and 'inspection_date' not in missing
    assert set(missing) <= set(REQUIRED_FIELDS)


def test_validate_blocks_missing_fields():
    with pytest.raises(FormValidationError) as exc:
        InspectionForm().validate()
    assert 'ops_no' in _fields(exc.value.errors)


def test_validate_accepts_complete_form(request_form):
    form = InspectionForm.from_request(request_form())
    form.validate()


@pytest.mark.parametrize('field, value', [
    ('inspection_result', 'MAYBE'),
    ('backing', 'FINE'),
    ('approved_sample_available', 'Perhaps'),
    ('aql', '3.3'),
    ('packing_type', 'Loose'),
    ('inspection_date', '14/10/2026'),
    ('inspection_date', '2026-13-45'),
    ('total_order_qty', '99999999999'),
    ('ops_no', 'O' * 101),
    ('customer_code', 'P' * 51),
    ('sample_size', 'fifty'),
    ('rejected_qty', '-1'),
])
def test_validate_rejects_bad_values(request_form, field, value):
    form = InspectionForm.from_request(request_form(**{field: value}))
    with pytest.raises(FormValidationError) as exc:
        form.validate()
    assert field in _fields(exc.value.errors)


def test_custom_aql_level_accepted(request_form):
    form = InspectionForm.from_request(request_form(aql='10.0'), aql_levels=['2.5', '10.0'])
    form.validate()


def test_from_request_sanitizes_and_reads_sizes(request_form):
    data = request_form(customer_name='<b>CHARLES & HUNT</b>')
    data.setlist('size_tags', ['6x9', '9x12'])
    form = InspectionForm.from_request(data)
    assert form.fields['customer_name'] == 'CHARLES & HUNT'
    assert form.fields['product_sizes'] == '6x9, 9x12'


def test_from_request_reads_defects(request_form):
    data = request_form(defects=json.dumps([
        {'defect_code': 'D02', 'major_count': '1', 'minor_count': ''},
        {'description': 'Glue marks', 'major_count': 0, 'minor_count': 3},
    ]))
    form = InspectionForm.from_request(data)
    assert form.defects[0] == {'defect_code': 'D02', 'description': 'Size out of tolerance',
                               'major_count': 1, 'minor_count': 0}
    assert form.defects[1]['minor_count'] == 3


def test_from_request_reports_bad_defect_counts(request_form):
    data = request_form(defects=json.dumps([{'defect_code': 'D02', 'major_count': 'two'}]))
    with pytest.raises(FormValidationError) as exc:
        InspectionForm.from_request(data)
    assert 'defects[0].major_count' in _fields(exc.value.errors)


def test_from_request_attaches_files(request_form, make_file):
    files = MultiDict([
        ('id_photo', make_file('id.png')),
        ('other_photos', make_file('a.png')),
        ('other_photos', make_file('b.png')),
        ('not_ok_backing', make_file('backing.png')),
        ('not_ok_hand_feel', make_file('feel.png')),
    ])
    form = InspectionForm.from_request(request_form(backing='NOT OK'), files)
    assert list(form.photos) == ['id_photo']
    assert [f.filename for f in form.other_photos] == ['a.png', 'b.png']
    # hand_feel is still OK, so its photo is not carried forward
    assert list(form.pending_not_ok_photos()) == ['backing']


def test_reset_restores_defaults(request_form, make_file):
    form = InspectionForm.from_request(request_form(company='EMPL'))
    form.add_defect('D01')
    form.attach_photo('id_photo', make_file())
    form.reset()
    assert form.fields['company'] == 'EHI'
    assert form.fields['customer_name'] == ''
    assert form.defects == [] and form.photos == {}


def test_validate_accepts_values_at_column_limits(request_form):
    form = InspectionForm.from_request(request_form(ops_no='O' * 100, total_order_qty=str(2 ** 31 - 1),
                                                    inspection_date='2028-02-29'))
    form.validate()
