"""User service - own profile, profile updates and the alumni directory."""
import logging
from typing import Dict, Any, List, Optional

from alumni_server.dto.user_dto import UserDTO
from alumni_server.exception import ValidationError, NotFoundError
from alumni_server.utils.generator import parse_object_id
from alumni_server.utils.uploads import save_upload
from alumni_server.utils.validation import PROFILE_FIELDS, validate_profile_update

logger = logging.getLogger(__name__)

# wire name -> stored field
_FIELD_MAP = {
    'bio': 'bio',
    'favoriteTeacher': 'favorite_teacher',
    'hobby': 'hobby',
    'classOf': 'class_of',
    'clan': 'clan',
}
_IMAGE_FIELDS = {'profilePicture': 'profile_picture', 'coverPhoto': 'cover_photo'}


class UserService:

    def __init__(self, user_repo, upload_dir, max_upload_size_mb):
        self.users = user_repo
        self.upload_dir = upload_dir
        self.max_upload_size_mb = max_upload_size_mb

    def _get_user_doc(self, user_id):
        oid = parse_object_id(user_id)
        user = self.users.get_by_id(oid) if oid else None
        if not user:
            raise NotFoundError('User not found')
        return user

    def get_profile(self, user_id: str) -> Dict[str, Any]:
        return UserDTO.from_doc(self._get_user_doc(user_id)).to_profile()

    def update_profile(self, user_id: str, data: Dict[str, Any], files=None) -> Dict[str, Any]:
        """Apply text fields and optional image uploads.

        Returns {'updated': bool, 'user': profile}.
        """
        user = self._get_user_doc(user_id)
        updates = {k: data[k] for k in PROFILE_FIELDS if data.get(k) is not None}
        ok, errors = validate_profile_update(updates)
        if not ok:
            raise ValidationError('Invalid profile data', errors=errors)

        fields = {_FIELD_MAP[k]: str(v).strip() for k, v in updates.items()}
        for wire_name, stored_name in _IMAGE_FIELDS.items():
            upload = files.get(wire_name) if files else None
            if upload is not None and upload.filename:
                attachment = save_upload(upload, self.upload_dir, self.max_upload_size_mb, allowed_types=('image',))
                fields[stored_name] = attachment.media_url

        if not fields:
            return {'updated': False, 'user': UserDTO.from_doc(user).to_profile()}

        updated = self.users.update_fields(user['_id'], fields)
        logger.info("Updated profile of %s: %s", user['_id'], sorted(fields))
        return {'updated': True, 'user': UserDTO.from_doc(updated).to_profile()}

    def search(self, q: Optional[str] = None, class_of: Optional[str] = None,
               clan: Optional[str] = None) -> List[Dict[str, Any]]:
        q = (q or '').strip() or None
        docs = self.users.search(q=q, class_of=(class_of or '').strip() or None, clan=(clan or '').strip() or None)
        return [UserDTO.from_doc(doc).to_profile() for doc in docs]

    def get_by_username(self, username: str) -> Dict[str, Any]:
        user = self.users.get_by_username(username)
        if not user or not user.get('is_verified'):
            raise NotFoundError('User not found')
        return UserDTO.from_doc(user).to_profile()
