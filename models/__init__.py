from .user_model import UserModel
from .category_model import Category
from .vote_option_model import VoteOption
from .property_model import Property
from .vote_model import Vote

__all__ = ['UserModel', 'Category', 'VoteOption', 'Property', 'Vote']
