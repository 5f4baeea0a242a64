import logging
from pathlib import Path

from config import TOKEN_FILE

logger = logging.getLogger(__name__)


class TokenStore:
    """Durable storage for the bearer token: one file, one token."""

    def __init__(self, path=TOKEN_FILE):
        self.path = Path(path)

    def load(self):
        try:
            token = self.path.read_text(encoding="utf-8").strip()
        except FileNotFoundError:
            return ""
        return token

    def save(self, token):
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text(token, encoding="utf-8")

    def clear(self):
        self.path.unlink(missing_ok=True)


class Session:
    """
    The client's authenticated identity.

    Unauthenticated while there is no token; Authenticated once a token is
    present. The user profile is only known after a login or registration in
    this process, a session restored by hydrate() has a token and no user.
    """

    def __init__(self, store):
        self.store = store
        self.token = ""
        self.user = None

    @property
    def is_authenticated(self):
        return bool(self.token)

    def hydrate(self):
        self.token = self.store.load()
        self.user = None
        if self.token:
            logger.info("Restored session from %s", self.store.path)
        return self.is_authenticated

    def start(self, user, token):
        self.user = user
        self.token = token
        self.store.save(token)

    def clear(self):
        self.user = None
        self.token = ""
        self.store.clear()
