import re

from pymongo import ReturnDocument

from alumni_server.repository.base_repository import BaseRepository, storage_guard
from alumni_server.utils.time_utils import utc_now


class UserRepository(BaseRepository):
    def __init__(self, db=None, collection_name="users"):
        super().__init__(db, collection_name)

    def get_by_id(self, user_id):
        return self.find_one({'_id': user_id})

    def get_by_email(self, email):
        return self.find_one({'email': email})

    def get_by_username(self, username):
        return self.find_one({'username': username})

    def get_by_identifier(self, identifier):
        """Login accepts either the email or the username."""
        return self.find_one({'$or': [{'email': identifier}, {'username': identifier}]})

    @storage_guard
    def update_fields(self, user_id, fields):
        """Apply fields and return the updated document."""
        return self.collection.find_one_and_update(
            {'_id': user_id},
            {'$set': fields},
            return_document=ReturnDocument.AFTER,
        )

    def mark_verified(self, email, code):
        """Verify only when the stored code still matches; returns True on success."""
        return self.update(
            {'email': email, 'verification_code': code, 'is_verified': False},
            {'is_verified': True, 'verification_code': None},
        ) > 0

    def set_reset_code(self, user_id, code, expires_at):
        return self.update({'_id': user_id}, {'reset_code': code, 'reset_code_expires': expires_at})

    def reset_password(self, email, code, password_hash):
        """Swap the password if the reset code matches and has not expired."""
        return self.update(
            {'email': email, 'reset_code': code, 'reset_code_expires': {'$gt': utc_now()}},
            {'password': password_hash, 'reset_code': None, 'reset_code_expires': None},
        ) > 0

    def search(self, q=None, class_of=None, clan=None):
        query = {'is_verified': True}
        if q:
            pattern = {'$regex': re.escape(q), '$options': 'i'}
            query['$or'] = [{'name': pattern}, {'username': pattern}]
        if class_of:
            query['class_of'] = class_of
        if clan:
            query['clan'] = clan
        return self.find(query, sort=[('name', 1)])
