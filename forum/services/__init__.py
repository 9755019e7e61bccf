# forum/services/__init__.py
from .base import BaseForumService
from .mailer import log_reset_mailer

__all__ = ['BaseForumService', 'log_reset_mailer']
