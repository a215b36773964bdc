from flask import Blueprint, current_app, abort

from rugqc.utils.file_upload import serve_local_file

file_bp = Blueprint('files', __name__)


# Photo URLs end up in emailed reports, so no auth here
@file_bp.route('/files/<path:storage_path>', methods=['GET'])
def get_file(storage_path):
    if current_app.config.get('UPLOAD_STORAGE', 'local') != 'local':
        abort(404)
    return serve_local_file(storage_path)
