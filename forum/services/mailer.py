# forum/services/mailer.py
import logging

logger = logging.getLogger(__name__)


def log_reset_mailer(email: str, token: str) -> None:
    """
    Default password-reset mailer. Delivery happens outside this service;
    in development the token is only announced in the log (masked).
    """
    logger.info(f"Password reset requested for {email}; token {token[:6]}... issued")
