class AuthMessage:
    UNAUTHORIZED = "You must be logged in to perform this action"


class PostMessage:
    NOT_FOUND = "Post not found"
    SLUG_CONFLICT_ON_CREATE = "A post with this title already exists. Please use a different title."
    SLUG_CONFLICT = "A post with this title already exists"
    EMPTY_SLUG = "Title must contain at least one letter or number"
    FORBIDDEN_UPDATE = "You do not have permission to update this post"
    FORBIDDEN_DELETE = "You do not have permission to delete this post"
    FORBIDDEN_ACCESS = "You do not have permission to access this post"
    DELETED = "Post deleted successfully"


class CategoryMessage:
    NOT_FOUND = "Category not found"
    CONFLICT = "A category with this name already exists"
    EMPTY_SLUG = "Category name must contain at least one letter or number"
    DELETED = "Category deleted successfully"
