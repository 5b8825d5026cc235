from alumni_server.dto.user_dto import UserDTO
from alumni_server.utils.time_utils import to_iso


class FeedbackDTO:
    def __init__(self, doc):
        self.doc = doc

    @property
    def is_anonymous(self):
        return self.doc.get('type') == 'anonymous'

    def to_dict(self, users=None):
        body = {
            'id': str(self.doc['_id']),
            'content': self.doc.get('content'),
            'rating': self.doc.get('rating'),
            'type': self.doc.get('type'),
            'isAnonymous': self.is_anonymous,
            'createdAt': to_iso(self.doc.get('created_at')),
        }
        # Anonymous entries never reveal their author
        if not self.is_anonymous:
            author = UserDTO.from_doc((users or {}).get(self.doc['user_id']))
            body['userId'] = str(self.doc['user_id'])
            body['user'] = author.to_summary() if author else None
        return body
