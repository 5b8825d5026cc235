from alumni_server.dto.user_dto import UserDTO
from alumni_server.utils.time_utils import to_iso
from alumni_server.utils.uploads import MediaAttachment


def _user_summary(users, user_id):
    user = UserDTO.from_doc(users.get(user_id))
    return user.to_summary() if user else None


class ReactionDTO:
    def __init__(self, doc):
        self.doc = doc

    def to_dict(self, users):
        return {
            'id': str(self.doc['_id']),
            'userId': str(self.doc['user_id']),
            'type': self.doc.get('type'),
            'createdAt': to_iso(self.doc.get('created_at')),
            'user': _user_summary(users, self.doc['user_id']),
        }


class CommentDTO:
    def __init__(self, doc):
        self.doc = doc

    def to_dict(self, users):
        return {
            'id': str(self.doc['_id']),
            'postId': str(self.doc['post_id']),
            'userId': str(self.doc['user_id']),
            'content': self.doc.get('content'),
            'createdAt': to_iso(self.doc.get('created_at')),
            'user': _user_summary(users, self.doc['user_id']),
        }


class PostDTO:
    def __init__(self, doc, reactions=None, comments=None):
        self.doc = doc
        self.reactions = reactions or []
        self.comments = comments or []

    def user_ids(self):
        """Every user referenced by the post, its reactions and its comments."""
        ids = {self.doc['user_id']}
        ids.update(r['user_id'] for r in self.reactions)
        ids.update(c['user_id'] for c in self.comments)
        return ids

    def to_dict(self, users):
        media = MediaAttachment.from_doc(self.doc.get('media'))
        body = {
            'id': str(self.doc['_id']),
            'userId': str(self.doc['user_id']),
            'content': self.doc.get('content'),
            'mediaUrl': None,
            'mediaType': None,
            'fileName': None,
            'createdAt': to_iso(self.doc.get('created_at')),
            'user': _user_summary(users, self.doc['user_id']),
            'reactions': [ReactionDTO(r).to_dict(users) for r in self.reactions],
            'comments': [CommentDTO(c).to_dict(users) for c in self.comments],
        }
        if media:
            body.update(media.to_dict())
        return body
