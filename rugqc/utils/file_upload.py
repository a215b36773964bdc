import os
from werkzeug.utils import secure_filename
from flask import current_app, send_from_directory

from rugqc.exceptions import UploadError


def get_extension(filename):
    return filename.rsplit('.', 1)[1].lower() if '.' in filename else ''


def is_allowed_file(filename):
    allowed = current_app.config.get('ALLOWED_EXTENSIONS', {'jpg', 'jpeg', 'png'})
    return get_extension(filename) in allowed


def safe_name(filename):
    return secure_filename(filename or '') or 'photo'


def save_file(file, storage_path):
    """Write ``file`` once at ``storage_path`` and return its public URL."""
    storage = current_app.config.get('UPLOAD_STORAGE', 'local')
    if storage == 'local':
        upload_dir = current_app.config.get('UPLOAD_DIR', './uploads')
        filepath = os.path.join(upload_dir, *storage_path.split('/'))
        if os.path.exists(filepath):
            raise UploadError(f'Storage path already exists: {storage_path}')
        os.makedirs(os.path.dirname(filepath), exist_ok=True)
        file.save(filepath)
        base_url = current_app.config.get('PUBLIC_BASE_URL', '').rstrip('/')
        return f"{base_url}/api/v1/files/{storage_path}"
    else:
        import boto3
        s3 = boto3.client('s3', region_name=current_app.config.get('AWS_REGION'))
        bucket = current_app.config.get('AWS_S3_BUCKET')
        file.seek(0)
        s3.upload_fileobj(file, bucket, storage_path,
                          ExtraArgs={'ContentType': file.mimetype or 'application/octet-stream'})
        return f"https://{bucket}.s3.amazonaws.com/{storage_path}"


def serve_local_file(storage_path):
    upload_dir = os.path.abspath(current_app.config.get('UPLOAD_DIR', './uploads'))
    return send_from_directory(upload_dir, storage_path)
