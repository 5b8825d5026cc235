import logging

from alumni_server.dto.feedback_dto import FeedbackDTO
from alumni_server.exception import ValidationError
from alumni_server.utils.generator import parse_object_id
from alumni_server.utils.time_utils import utc_now
from alumni_server.utils.validation import validate_feedback

logger = logging.getLogger(__name__)


class FeedbackService:

    def __init__(self, feedback_repo, user_repo):
        self.feedback = feedback_repo
        self.users = user_repo

    def submit(self, user_id, data):
        ok, errors = validate_feedback(data)
        if not ok:
            raise ValidationError('Invalid feedback', errors=errors)
        doc = {
            'user_id': parse_object_id(user_id),
            'content': str(data['content']).strip(),
            'rating': int(data['rating']),
            'type': data['type'],
            'created_at': utc_now(),
        }
        doc['_id'] = self.feedback.create(doc)
        if doc['type'] == 'private':
            # Private feedback is only surfaced to administrators through the logs
            logger.info("Private feedback %s from %s (rating %s): %s",
                        doc['_id'], user_id, doc['rating'], doc['content'])
        return FeedbackDTO(doc).to_dict(self.users.find_by_ids([doc['user_id']]))

    def list_public(self):
        docs = self.feedback.list_visible()
        authors = {d['user_id'] for d in docs if d.get('type') != 'anonymous'}
        users = self.users.find_by_ids(authors)
        return [FeedbackDTO(d).to_dict(users) for d in docs]
