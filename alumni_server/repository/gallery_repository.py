from collections import defaultdict

from pymongo import ASCENDING, DESCENDING

from alumni_server.repository.base_repository import BaseRepository, storage_guard
from alumni_server.utils.time_utils import utc_now


class GalleryRepository(BaseRepository):
    def __init__(self, db, collection_name="gallery"):
        super().__init__(db, collection_name)
        from alumni_server.repository.mongo_helper import MongoRepositorySingleton
        self.reactions = MongoRepositorySingleton.get_collection('gallery_reactions', db)

    def list_items(self):
        return self.find({}, sort=[('created_at', DESCENDING), ('_id', DESCENDING)])

    def get(self, gallery_id):
        return self.find_one({'_id': gallery_id})

    @storage_guard
    def reactions_for(self, gallery_ids):
        grouped = defaultdict(list)
        for doc in self.reactions.find({'gallery_id': {'$in': list(gallery_ids)}}).sort('created_at', ASCENDING):
            grouped[doc['gallery_id']].append(doc)
        return grouped

    @storage_guard
    def set_reaction(self, user_id, gallery_id, reaction_type):
        self.reactions.delete_many({'user_id': user_id, 'gallery_id': gallery_id})
        doc = {'user_id': user_id, 'gallery_id': gallery_id, 'type': reaction_type, 'created_at': utc_now()}
        doc['_id'] = self.reactions.insert_one(doc).inserted_id
        return doc
