import os
import uuid
from werkzeug.utils import secure_filename
from flask import current_app
from learnplaces.domain.block_types import PICTURE, VIDEO
from learnplaces.domain.exceptions import ValidationError

ALLOWED_EXTENSIONS = {
    PICTURE: {'png', 'jpg', 'jpeg', 'gif'},
    VIDEO: {'mp4', 'mov', 'avi', 'webm'},
}

def allowed_file(filename, kind):
    return '.' in filename and filename.rsplit('.', 1)[1].lower() in ALLOWED_EXTENSIONS.get(kind, set())

def save_file(file, kind):
    if not file.filename or not allowed_file(file.filename, kind):
        raise ValidationError(
            "File type not allowed",
            fields={"file": f"allowed: {', '.join(sorted(ALLOWED_EXTENSIONS.get(kind, ())))}"},
        )

    filename = secure_filename(file.filename)
    ext = filename.rsplit('.', 1)[1].lower()
    unique_filename = f"{uuid.uuid4().hex}.{ext}"

    upload_folder = current_app.config.get('UPLOAD_FOLDER', 'uploads')
    os.makedirs(upload_folder, exist_ok=True)
    file_path = os.path.join(upload_folder, unique_filename)

    file.save(file_path)
    current_app.logger.debug("Stored upload %s as %s", filename, file_path)

    return f"/{upload_folder.strip('/')}/{unique_filename}"


def delete_file(file_url):
    """
    Deletes an uploaded file given the URL returned by save_file.
    """
    if not file_url:
        return False

    # Uploads are stored flat inside UPLOAD_FOLDER
    upload_folder = current_app.config.get('UPLOAD_FOLDER', 'uploads')
    file_path = os.path.join(upload_folder, os.path.basename(file_url))

    if os.path.exists(file_path):
        try:
            os.remove(file_path)
            return True
        except OSError as e:
            current_app.logger.error(f"Failed to delete file {file_path}: {e}")
            return False
    return False
