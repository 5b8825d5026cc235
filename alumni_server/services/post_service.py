"""Community feed service - posts, reactions and comments."""
import logging
from typing import Dict, Any, List, Optional

from alumni_server.dto.post_dto import PostDTO, CommentDTO, ReactionDTO
from alumni_server.exception import ValidationError, NotFoundError
from alumni_server.utils.generator import parse_object_id
from alumni_server.utils.time_utils import utc_now
from alumni_server.utils.uploads import MediaAttachment
from alumni_server.utils.validation import POST_REACTION_TYPES, validate_comment, validate_reaction

logger = logging.getLogger(__name__)


class PostService:

    def __init__(self, post_repo, user_repo):
        self.posts = post_repo
        self.users = user_repo

    def _build(self, docs) -> List[Dict[str, Any]]:
        """Attach users, reactions and comments with one query per collection."""
        if not docs:
            return []
        ids = [d['_id'] for d in docs]
        reactions = self.posts.reactions_for(ids)
        comments = self.posts.comments_for(ids)
        dtos = [PostDTO(d, reactions.get(d['_id']), comments.get(d['_id'])) for d in docs]
        user_ids = set()
        for dto in dtos:
            user_ids.update(dto.user_ids())
        users = self.users.find_by_ids(user_ids)
        return [dto.to_dict(users) for dto in dtos]

    def _require_post(self, post_id):
        oid = parse_object_id(post_id)
        post = self.posts.get(oid) if oid else None
        if not post:
            raise NotFoundError('Post not found')
        return post

    def list_posts(self) -> List[Dict[str, Any]]:
        return self._build(self.posts.list_posts())

    def get_post(self, post_id: str) -> Dict[str, Any]:
        return self._build([self._require_post(post_id)])[0]

    def create_post(self, user_id: str, content: Optional[str] = None,
                    media: Optional[MediaAttachment] = None) -> Dict[str, Any]:
        if content is not None and not isinstance(content, str):
            raise ValidationError('Invalid post content', errors={'content': 'content must be a string'})
        content = (content or '').strip() or None
        if content is None and media is None:
            raise ValidationError('Post content or media is required')
        doc = {
            'user_id': parse_object_id(user_id),
            'content': content,
            'media': media.to_db_doc() if media else None,
            'created_at': utc_now(),
        }
        doc['_id'] = self.posts.create(doc)
        logger.info("User %s created post %s", user_id, doc['_id'])
        return self._build([doc])[0]

    def add_reaction(self, user_id: str, post_id: str, data: Dict[str, Any]) -> Dict[str, Any]:
        ok, errors = validate_reaction(data, POST_REACTION_TYPES)
        if not ok:
            raise ValidationError('Invalid reaction', errors=errors)
        post = self._require_post(post_id)
        user_oid = parse_object_id(user_id)
        reaction = self.posts.set_reaction(user_oid, post['_id'], data['type'])
        return ReactionDTO(reaction).to_dict(self.users.find_by_ids([user_oid]))

    def remove_reaction(self, user_id: str, post_id: str) -> None:
        post = self._require_post(post_id)
        if not self.posts.remove_reaction(parse_object_id(user_id), post['_id']):
            raise NotFoundError('Reaction not found')

    def add_comment(self, user_id: str, post_id: str, data: Dict[str, Any]) -> Dict[str, Any]:
        ok, errors = validate_comment(data)
        if not ok:
            raise ValidationError('Invalid comment', errors=errors)
        post = self._require_post(post_id)
        user_oid = parse_object_id(user_id)
        comment = self.posts.add_comment(user_oid, post['_id'], str(data['content']).strip())
        return CommentDTO(comment).to_dict(self.users.find_by_ids([user_oid]))
