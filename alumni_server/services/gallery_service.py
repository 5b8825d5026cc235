"""Gallery service - shared photos and videos with reactions."""
import logging
from typing import Dict, Any, List, Optional

from alumni_server.dto.gallery_dto import GalleryItemDTO
from alumni_server.exception import ValidationError, NotFoundError
from alumni_server.utils.generator import parse_object_id
from alumni_server.utils.time_utils import utc_now
from alumni_server.utils.uploads import save_upload
from alumni_server.utils.validation import GALLERY_REACTION_TYPES, validate_reaction

logger = logging.getLogger(__name__)

GALLERY_MEDIA_TYPES = ('image', 'video')


class GalleryService:

    def __init__(self, gallery_repo, user_repo, upload_dir, max_upload_size_mb):
        self.gallery = gallery_repo
        self.users = user_repo
        self.upload_dir = upload_dir
        self.max_upload_size_mb = max_upload_size_mb

    def _build(self, docs) -> List[Dict[str, Any]]:
        if not docs:
            return []
        reactions = self.gallery.reactions_for(d['_id'] for d in docs)
        dtos = [GalleryItemDTO(d, reactions.get(d['_id'])) for d in docs]
        user_ids = set()
        for dto in dtos:
            user_ids.update(dto.user_ids())
        users = self.users.find_by_ids(user_ids)
        return [dto.to_dict(users) for dto in dtos]

    def list_items(self) -> List[Dict[str, Any]]:
        return self._build(self.gallery.list_items())

    def upload(self, user_id: str, file_storage, title: Optional[str] = None,
               description: Optional[str] = None) -> Dict[str, Any]:
        attachment = save_upload(file_storage, self.upload_dir, self.max_upload_size_mb,
                                 allowed_types=GALLERY_MEDIA_TYPES)
        now = utc_now()
        doc = {
            'user_id': parse_object_id(user_id),
            'title': (title or '').strip() or None,
            'description': (description or '').strip() or None,
            'media_url': attachment.media_url,
            'media_type': attachment.media_type,
            'file_name': attachment.file_name,
            'file_size': attachment.file_size,
            'created_at': now,
            'updated_at': now,
        }
        doc['_id'] = self.gallery.create(doc)
        logger.info("User %s uploaded gallery item %s", user_id, doc['_id'])
        return self._build([doc])[0]

    def react(self, user_id: str, data: Dict[str, Any]) -> Dict[str, Any]:
        if not data.get('galleryId'):
            raise ValidationError('galleryId is required', errors={'galleryId': 'galleryId is required'})
        ok, errors = validate_reaction(data, GALLERY_REACTION_TYPES)
        if not ok:
            raise ValidationError('Invalid reaction', errors=errors)
        oid = parse_object_id(data['galleryId'])
        item = self.gallery.get(oid) if oid else None
        if not item:
            raise NotFoundError('Gallery item not found')
        self.gallery.set_reaction(parse_object_id(user_id), item['_id'], data['type'])
        return self._build([item])[0]
