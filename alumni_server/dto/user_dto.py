from alumni_server.utils.time_utils import to_iso


class UserDTO:
    """Wire views of a stored user document.

    Storage keeps snake_case fields; every view here is camelCase and
    never carries the password hash or one-time codes.
    """

    def __init__(self, user_id, name=None, username=None, email=None, class_of=None, clan=None,
                 profile_picture=None, cover_photo=None, bio=None, favorite_teacher=None, hobby=None,
                 is_verified=False, created_at=None, **kwargs):
        self.user_id = user_id
        self.name = name
        self.username = username
        self.email = email
        self.class_of = class_of
        self.clan = clan
        self.profile_picture = profile_picture
        self.cover_photo = cover_photo
        self.bio = bio
        self.favorite_teacher = favorite_teacher
        self.hobby = hobby
        self.is_verified = is_verified
        self.created_at = created_at

    @classmethod
    def from_doc(cls, doc):
        if not doc:
            return None
        fields = {k: v for k, v in doc.items() if k not in ('_id', 'password')}
        return cls(user_id=doc.get('_id'), **fields)

    @property
    def id(self):
        return str(self.user_id) if self.user_id is not None else None

    def to_summary(self):
        """Compact form embedded in posts, comments and conversations."""
        return {
            'id': self.id,
            'name': self.name,
            'username': self.username,
            'profilePicture': self.profile_picture,
        }

    def to_profile(self):
        body = self.to_summary()
        body.update({
            'email': self.email,
            'classOf': self.class_of,
            'clan': self.clan,
            'coverPhoto': self.cover_photo,
            'bio': self.bio,
            'favoriteTeacher': self.favorite_teacher,
            'hobby': self.hobby,
            'isVerified': bool(self.is_verified),
            'createdAt': to_iso(self.created_at),
        })
        return body

    def to_sender_info(self):
        return {'name': self.name, 'username': self.username}
