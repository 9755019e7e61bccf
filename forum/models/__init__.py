# forum/models/__init__.py
from .user import User
from .course import Course
from .topic import Topic
from .comment import Comment
from .reply import Reply

# Firestore collection names
USERS = 'users'
COURSES = 'courses'
TOPICS = 'topics'
COMMENTS = 'comments'
REPLIES = 'replies'

__all__ = ['User', 'Course', 'Topic', 'Comment', 'Reply', 'USERS', 'COURSES', 'TOPICS', 'COMMENTS', 'REPLIES']
