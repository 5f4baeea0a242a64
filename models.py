from datetime import date, datetime, timezone

from flask import current_app
from flask_login import UserMixin
from itsdangerous import BadSignature, URLSafeTimedSerializer
from sqlalchemy.orm import validates

from choices import Priority, Status
from extensions import db

TOKEN_SALT = "api-token"


def _now():
    return datetime.now(timezone.utc).replace(tzinfo=None)


def _isoformat(value):
    return value.isoformat() if value else None


class User(UserMixin, db.Model):                     # Model for storing user data
    id = db.Column(db.Integer, primary_key=True)
    name = db.Column(db.String(100), nullable=False)
    email = db.Column(db.String(120), unique=True, nullable=False)
    password = db.Column(db.String(200), nullable=False)   # bcrypt hash, never serialized

    def to_dict(self):
        return {"id": self.id, "name": self.name, "email": self.email}

    def get_token(self):
        """Signed bearer token carrying this user's id."""
        return _serializer().dumps(self.id)

    @staticmethod
    def from_token(token):
        """Return the user a token was issued for, or None if it is invalid or expired."""
        try:
            user_id = _serializer().loads(token, max_age=current_app.config["TOKEN_MAX_AGE"])
        except BadSignature:     # SignatureExpired is a subclass
            return None
        return db.session.get(User, user_id)


def _serializer():
    return URLSafeTimedSerializer(current_app.config["SECRET_KEY"], salt=TOKEN_SALT)


class Task(db.Model):                                 # Model for storing the details of a task
    id = db.Column(db.Integer, primary_key=True)
    user_id = db.Column(db.Integer, db.ForeignKey("user.id"), nullable=False)   # id of the owner
    title = db.Column(db.String(200), nullable=False)
    description = db.Column(db.Text, nullable=True)
    due_date = db.Column(db.Date, nullable=True)
    priority = db.Column(db.String(20), nullable=False, default=Priority.MEDIUM.value)
    status = db.Column(db.String(20), nullable=False, default=Status.TODO.value)
    created_at = db.Column(db.DateTime, nullable=False, default=_now)
    updated_at = db.Column(db.DateTime, nullable=False, default=_now, onupdate=_now)

    # Fields a client may set through the API, by their JSON name
    EDITABLE_FIELDS = {
        "title": "title",
        "description": "description",
        "dueDate": "due_date",
        "priority": "priority",
        "status": "status",
    }

    def __init__(self, **kwargs):
        # Run the owner and title checks even when the caller leaves them out.
        kwargs.setdefault("user_id", None)
        kwargs.setdefault("title", None)
        if kwargs.get("priority") is None:
            kwargs["priority"] = Priority.MEDIUM
        if kwargs.get("status") is None:
            kwargs["status"] = Status.TODO
        super().__init__(**kwargs)

    @validates("user_id")
    def _check_owner(self, key, value):
        if value is None:
            raise ValueError("Task owner is required.")
        if self.user_id is not None and value != self.user_id:
            raise ValueError("Task owner cannot be changed.")
        return value

    @validates("title")
    def _check_title(self, key, value):
        if not isinstance(value, str) or not value.strip():
            raise ValueError("Task title is required.")
        return value

    @validates("description")
    def _check_description(self, key, value):
        if value is not None and not isinstance(value, str):
            raise ValueError("Task description must be text.")
        return value

    @validates("due_date")
    def _check_due_date(self, key, value):
        if value is None or value == "":
            return None
        if isinstance(value, datetime):
            return value.date()
        if isinstance(value, date):
            return value
        if isinstance(value, str):
            try:
                return date.fromisoformat(value[:10])
            except ValueError:
                pass
        raise ValueError(f"Invalid due date {value!r}. Expected YYYY-MM-DD.")

    @validates("priority")
    def _check_priority(self, key, value):
        return Priority.parse(value).value

    @validates("status")
    def _check_status(self, key, value):
        return Status.parse(value).value

    def apply(self, data):
        """Set every editable field present in `data` (keyed by JSON name)."""
        for json_name, attr in self.EDITABLE_FIELDS.items():
            if json_name in data:
                setattr(self, attr, data[json_name])

    def to_dict(self):
        return {
            "id": self.id,
            "owner": self.user_id,
            "title": self.title,
            "description": self.description,
            "dueDate": _isoformat(self.due_date),
            "priority": self.priority,
            "status": self.status,
            "createdAt": _isoformat(self.created_at),
            "updatedAt": _isoformat(self.updated_at),
        }
