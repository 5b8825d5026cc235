from alumni_server.dto.user_dto import UserDTO
from alumni_server.utils.time_utils import to_iso


class GalleryItemDTO:
    def __init__(self, doc, reactions=None):
        self.doc = doc
        self.reactions = reactions or []

    def user_ids(self):
        ids = {self.doc['user_id']}
        ids.update(r['user_id'] for r in self.reactions)
        return ids

    def to_dict(self, users):
        owner = UserDTO.from_doc(users.get(self.doc['user_id']))
        return {
            'id': str(self.doc['_id']),
            'userId': str(self.doc['user_id']),
            'title': self.doc.get('title'),
            'description': self.doc.get('description'),
            'mediaUrl': self.doc.get('media_url'),
            'mediaType': self.doc.get('media_type'),
            'fileName': self.doc.get('file_name'),
            'fileSize': self.doc.get('file_size'),
            'createdAt': to_iso(self.doc.get('created_at')),
            'updatedAt': to_iso(self.doc.get('updated_at')),
            'user': owner.to_summary() if owner else None,
            'reactions': [self._reaction(r, users) for r in self.reactions],
        }

    @staticmethod
    def _reaction(doc, users):
        user = UserDTO.from_doc(users.get(doc['user_id']))
        return {
            'id': str(doc['_id']),
            'userId': str(doc['user_id']),
            'type': doc.get('type'),
            'createdAt': to_iso(doc.get('created_at')),
            'user': user.to_summary() if user else None,
        }
