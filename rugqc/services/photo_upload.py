"""Sequential photo upload for a submission.

Every photo is written once under
``{collection}/{epoch_millis}_{field_key}_{filename}``. The first failure
aborts the run with ``UploadError``; files already written stay in storage
but no record references them.
"""
import logging
import time

from flask import current_app

from rugqc.constants import PHOTO_KEYS, PHOTO_LABELS, FIELD_LABELS
from rugqc.exceptions import UploadError, FormValidationError
from rugqc.utils.file_upload import save_file, is_allowed_file, safe_name

logger = logging.getLogger(__name__)


def epoch_millis():
    return int(time.time() * 1000)


def build_storage_path(collection, field_key, filename, millis):
    return f'{collection}/{millis}_{field_key}_{safe_name(filename)}'


class PhotoUploader:

    def __init__(self, save=None, collection=None, clock=None):
        self.save = save or save_file
        self.collection = collection or current_app.config.get('PHOTO_COLLECTION', 'final-inspection-images')
        self.clock = clock or epoch_millis

    def upload(self, field_key, file):
        path = build_storage_path(self.collection, field_key, file.filename, self.clock())
        try:
            url = self.save(file, path)
        except UploadError:
            logger.error(f'Photo upload failed for {field_key}: {path} exists')
            raise
        except Exception as e:
            logger.error(f'Photo upload failed for {field_key} ({path}): {e}')
            raise UploadError(f'Could not upload {field_key}. Please resubmit the inspection.') from e
        logger.info(f'Uploaded {field_key} -> {path}')
        return url

    def upload_form(self, form):
        """Upload every photo attached to ``form`` and return the URL maps.

        Order: named slots in slot order, then supplementary photos, then
        NOT-OK photos in check order.
        """
        not_ok = form.pending_not_ok_photos()
        check_extensions(form.photos, form.other_photos, not_ok)

        photos = {}
        for slot in PHOTO_KEYS:
            if slot in form.photos:
                photos[slot] = self.upload(slot, form.photos[slot])

        other_photos = [self.upload(f'other_{i}', file) for i, file in enumerate(form.other_photos)]

        not_ok_photos = {}
        for field, file in not_ok.items():
            not_ok_photos[field] = self.upload(f'notok_{field}', file)

        return {'photos': photos, 'other_photos': other_photos, 'not_ok_photos': not_ok_photos}


def check_extensions(photos, other_photos, not_ok_photos):
    errors = []
    for slot, file in photos.items():
        if not is_allowed_file(file.filename):
            errors.append({'field': slot, 'message': f'{PHOTO_LABELS[slot]}: file type not allowed'})
    for i, file in enumerate(other_photos):
        if not is_allowed_file(file.filename):
            errors.append({'field': f'other_photos[{i}]', 'message': 'File type not allowed'})
    for field, file in not_ok_photos.items():
        if not is_allowed_file(file.filename):
            errors.append({'field': f'not_ok_{field}',
                           'message': f'{FIELD_LABELS.get(field, field)}: file type not allowed'})
    if errors:
        raise FormValidationError('Only image files can be uploaded', errors=errors)
