from . import user_dto as _user_dto
from . import post_dto as _post_dto
from . import gallery_dto as _gallery_dto
from . import feedback_dto as _feedback_dto

UserDTO = _user_dto.UserDTO
PostDTO = _post_dto.PostDTO
ReactionDTO = _post_dto.ReactionDTO
CommentDTO = _post_dto.CommentDTO
GalleryItemDTO = _gallery_dto.GalleryItemDTO
FeedbackDTO = _feedback_dto.FeedbackDTO

__all__ = ['UserDTO', 'PostDTO', 'ReactionDTO', 'CommentDTO', 'GalleryItemDTO', 'FeedbackDTO']
