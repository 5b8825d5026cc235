"""Local storage for uploaded media (message attachments, post media, gallery files, profile images)."""
import logging
import os
import secrets
from typing import Optional, Dict, Any, Tuple

from werkzeug.utils import secure_filename

from alumni_server.exception.ValidationError import ValidationError

logger = logging.getLogger(__name__)

UPLOAD_URL_PREFIX = '/uploads'


class MediaAttachment:
    """Optional media carried by a message, post or gallery item."""

    def __init__(self, media_url: str, media_type: str, file_name: str, file_size: Optional[int] = None):
        self.media_url = media_url
        self.media_type = media_type
        self.file_name = file_name
        self.file_size = file_size

    def to_dict(self) -> Dict[str, Any]:
        return {
            'mediaUrl': self.media_url,
            'mediaType': self.media_type,
            'fileName': self.file_name,
        }

    def to_db_doc(self) -> Dict[str, Any]:
        return {
            'media_url': self.media_url,
            'media_type': self.media_type,
            'file_name': self.file_name,
        }

    @classmethod
    def from_doc(cls, doc: Dict[str, Any]) -> Optional['MediaAttachment']:
        if not doc or not doc.get('media_url'):
            return None
        return cls(doc['media_url'], doc.get('media_type'), doc.get('file_name'))


def _stream_size(file_storage) -> int:
    stream = file_storage.stream
    stream.seek(0, os.SEEK_END)
    size = stream.tell()
    stream.seek(0)
    return size


def save_upload(file_storage, upload_dir: str, max_size_mb: int,
                allowed_types: Optional[Tuple[str, ...]] = None) -> MediaAttachment:
    """Persist an uploaded file under upload_dir and describe it.

    mediaType is the MIME major type (image, video, application, ...).
    """
    if file_storage is None or not file_storage.filename:
        raise ValidationError('No file uploaded')

    mimetype = file_storage.mimetype or 'application/octet-stream'
    media_type = mimetype.split('/')[0]
    if allowed_types and media_type not in allowed_types:
        raise ValidationError(f"Only {' and '.join(t + 's' for t in allowed_types)} are allowed")

    size = _stream_size(file_storage)
    if size > max_size_mb * 1024 * 1024:
        raise ValidationError(f'File size must be less than {max_size_mb}MB')

    original_name = file_storage.filename
    stored_name = f"{secrets.token_hex(8)}-{secure_filename(original_name) or 'upload'}"
    os.makedirs(upload_dir, exist_ok=True)
    file_storage.save(os.path.join(upload_dir, stored_name))
    logger.info("Stored upload %s (%s, %d bytes)", stored_name, mimetype, size)

    return MediaAttachment(
        media_url=f'{UPLOAD_URL_PREFIX}/{stored_name}',
        media_type=media_type,
        file_name=original_name,
        file_size=size,
    )
