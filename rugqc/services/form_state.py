"""In-progress inspection state, from defaults to a validated submission.

Nothing here touches storage. The state is checked with ``validate()``
and handed to ``inspection_service.submit_inspection``.
"""
import json
from datetime import date

from marshmallow import ValidationError

from rugqc.constants import (
    COMPANIES, DOCUMENT_NUMBERS, DEFAULT_COMPANY, DEFAULT_AQL, AQL_LEVELS, PACKING_TYPES,
    OK_NOT_OK, YES_NO, INSPECTION_RESULTS, OK_NOT_OK_FIELDS, YES_NO_FIELDS, ORDER_FIELDS,
    QUANTITY_FIELDS, PRODUCT_QUALITY_TEXT, PACKAGING_TEXT, DEFECT_TRACKING_TEXT, REQUIRED_FIELDS,
    FIELD_LABELS, PHOTO_KEYS, DEFECT_DESCRIPTIONS,
)
from rugqc.exceptions import FormValidationError, QuantityParseError
from rugqc.models.inspection import InspectionRecord
from rugqc.schemas.inspection_schema import DefectSchema
from rugqc.utils.quantities import parse_quantity
from rugqc.utils.validators import sanitize_string, validate_iso_date

NOT_OK_FILE_PREFIX = 'not_ok_'
OTHER_PHOTOS_FIELD = 'other_photos'

FORM_FIELDS = (
    ['company', 'document_no'] + ORDER_FIELDS + QUANTITY_FIELDS + ['aql']
    + YES_NO_FIELDS + OK_NOT_OK_FIELDS + PRODUCT_QUALITY_TEXT + PACKAGING_TEXT
    + DEFECT_TRACKING_TEXT + ['qc_inspector_remarks', 'inspection_result']
)

# Limits of the columns the fields are stored in
FIELD_MAX_LENGTHS = {
    column.name: column.type.length for column in InspectionRecord.__table__.columns
    if column.name in FORM_FIELDS and getattr(column.type, 'length', None)
}
MAX_QUANTITY = 2 ** 31 - 1


def default_fields(today=None):
    today = today or date.today()
    fields = {name: '' for name in FORM_FIELDS}
    fields.update({
        'company': DEFAULT_COMPANY,
        'document_no': DOCUMENT_NUMBERS[DEFAULT_COMPANY],
        'inspection_date': today.isoformat(),
        'aql': DEFAULT_AQL,
        'packing_type': PACKING_TYPES[0],
        'inspection_result': 'PASS',
    })
    for name in OK_NOT_OK_FIELDS:
        fields[name] = 'OK'
    for name in YES_NO_FIELDS:
        fields[name] = 'Yes'
    return fields


class InspectionForm:
    """Field values plus the photo and defect state of one inspection."""

    def __init__(self, aql_levels=None, today=None):
        self.aql_levels = list(aql_levels or AQL_LEVELS)
        self._today = today
        self.reset()

    def reset(self):
        self.fields = default_fields(self._today)
        self.size_tags = []
        self.photos = {}
        self.other_photos = []
        self.not_ok_photos = {}
        self.defects = []

    # ─── Fields ───

    def set_field(self, name, value):
        if name not in self.fields:
            raise KeyError(name)
        if name == 'company':
            self.set_company(value)
        elif name == 'document_no':
            # Derived from the company
            return
        elif name == 'product_sizes':
            self.set_size_tags([t for t in str(value or '').split(',')])
        else:
            self.fields[name] = '' if value is None else value

    def set_company(self, company):
        if company not in COMPANIES:
            raise FormValidationError(errors=[{
                'field': 'company', 'message': f'Must be one of: {", ".join(COMPANIES)}'}])
        self.fields['company'] = company
        self.fields['document_no'] = DOCUMENT_NUMBERS[company]

    def set_size_tags(self, tags):
        self.size_tags = []
        for tag in tags:
            tag = str(tag).strip()
            if tag and tag not in self.size_tags:
                self.size_tags.append(tag)
        self.fields['product_sizes'] = ', '.join(self.size_tags)

    # ─── Photos ───

    def attach_photo(self, slot, file):
        if slot not in PHOTO_KEYS:
            raise KeyError(slot)
        if file is None:
            self.photos.pop(slot, None)
        else:
            self.photos[slot] = file

    def add_other_photo(self, file):
        self.other_photos.append(file)

    def remove_other_photo(self, index):
        del self.other_photos[index]

    def attach_not_ok_photo(self, field, file):
        if field not in OK_NOT_OK_FIELDS:
            raise KeyError(field)
        if file is None:
            self.not_ok_photos.pop(field, None)
        else:
            self.not_ok_photos[field] = file

    def pending_not_ok_photos(self):
        """NOT-OK photos whose check is still marked NOT OK, in check order."""
        return {field: self.not_ok_photos[field] for field in OK_NOT_OK_FIELDS
                if field in self.not_ok_photos and self.fields.get(field) == 'NOT OK'}

    # ─── Defects ───

    def add_defect(self, defect_code='', description='', major_count=0, minor_count=0):
        row = {'defect_code': defect_code, 'description': description,
               'major_count': major_count, 'minor_count': minor_count}
        if defect_code and not description:
            row['description'] = DEFECT_DESCRIPTIONS.get(defect_code, '')
        self.defects.append(row)
        return row

    def update_defect(self, index, **changes):
        row = self.defects[index]
        unknown = set(changes) - set(row)
        if unknown:
            raise KeyError(', '.join(sorted(unknown)))
        row.update(changes)
        if 'defect_code' in changes and changes['defect_code'] in DEFECT_DESCRIPTIONS:
            row['description'] = DEFECT_DESCRIPTIONS[changes['defect_code']]
        return row

    def remove_defect(self, index):
        return self.defects.pop(index)

    # ─── Validation ───

    def missing_required_fields(self):
        return [name for name in REQUIRED_FIELDS if not str(self.fields.get(name) or '').strip()]

    def validate(self):
        errors = [{'field': name, 'message': f'{FIELD_LABELS.get(name, name)} is required'}
                  for name in self.missing_required_fields()]

        def check_choice(name, choices):
            value = self.fields.get(name)
            if value and value not in choices:
                errors.append({'field': name, 'message': f'Must be one of: {", ".join(choices)}'})

        check_choice('company', COMPANIES)
        check_choice('aql', self.aql_levels)
        check_choice('inspection_result', INSPECTION_RESULTS)
        check_choice('packing_type', PACKING_TYPES)
        for name in OK_NOT_OK_FIELDS:
            check_choice(name, OK_NOT_OK)
        for name in YES_NO_FIELDS:
            check_choice(name, YES_NO)

        date_error = validate_iso_date(self.fields.get('inspection_date'))
        if date_error:
            errors.append({'field': 'inspection_date', 'message': date_error})

        for name in QUANTITY_FIELDS:
            try:
                qty = parse_quantity(self.fields.get(name), field=name, empty=0)
            except QuantityParseError as e:
                errors.extend(e.errors)
                continue
            if qty > MAX_QUANTITY:
                errors.append({'field': name, 'message': f'Must be at most {MAX_QUANTITY}'})

        for name, length in FIELD_MAX_LENGTHS.items():
            value = self.fields.get(name)
            if isinstance(value, str) and len(value) > length:
                errors.append({'field': name, 'message': f'Must be at most {length} characters'})

        for i, row in enumerate(self.defects):
            for key in ('major_count', 'minor_count'):
                try:
                    parse_quantity(row.get(key), field=key, empty=0)
                except QuantityParseError as e:
                    errors.append({'field': f'defects[{i}].{key}', 'message': e.message})

        if errors:
            raise FormValidationError(errors=errors)

    def to_values(self):
        return dict(self.fields)

    # ─── Request binding ───

    @classmethod
    def from_request(cls, form, files=None, aql_levels=None):
        """Build the state from a multipart form and its uploaded files.

        Defect rows come as a JSON list in the ``defects`` form field; NOT-OK
        photos as files named ``not_ok_<check_field>``.
        """
        state = cls(aql_levels=aql_levels)
        errors = []

        if form.get('company'):
            try:
                state.set_company(form.get('company').strip())
            except FormValidationError as e:
                errors.extend(e.errors)
                state.fields['company'] = form.get('company')

        for name in FORM_FIELDS:
            if name in ('company', 'document_no', 'product_sizes') or name not in form:
                continue
            value = form.get(name)
            state.fields[name] = sanitize_string(value) if isinstance(value, str) else value

        size_tags = form.getlist('size_tags') if hasattr(form, 'getlist') else []
        if size_tags:
            state.set_size_tags(sanitize_string(t) for t in size_tags)
        elif 'product_sizes' in form:
            state.set_field('product_sizes', sanitize_string(form.get('product_sizes')))

        raw_defects = form.get('defects')
        if raw_defects:
            try:
                rows = json.loads(raw_defects) if isinstance(raw_defects, str) else raw_defects
            except ValueError:
                rows = None
            if not isinstance(rows, list) or not all(isinstance(r, dict) for r in rows):
                errors.append({'field': 'defects', 'message': 'defects must be a JSON list of rows'})
            else:
                schema = DefectSchema()
                for i, row in enumerate(rows):
                    try:
                        state.defects.append(schema.load(row))
                    except ValidationError as e:
                        for key, msgs in e.normalized_messages().items():
                            for msg in (msgs if isinstance(msgs, list) else [msgs]):
                                errors.append({'field': f'defects[{i}].{key}', 'message': msg})

        if files:
            for slot in PHOTO_KEYS:
                file = files.get(slot)
                if file and file.filename:
                    state.attach_photo(slot, file)
            for file in files.getlist(OTHER_PHOTOS_FIELD):
                if file and file.filename:
                    state.add_other_photo(file)
            for field in OK_NOT_OK_FIELDS:
                file = files.get(f'{NOT_OK_FILE_PREFIX}{field}')
                if file and file.filename:
                    state.attach_not_ok_photo(field, file)

        if errors:
            raise FormValidationError(errors=errors)
        return state
