from .categories import Categories
from .posts import Posts
from .post_categories import PostCategories
