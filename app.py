import re

from flask import Blueprint, Flask, current_app, jsonify, request
from flask_login import current_user, login_required
from sqlalchemy.exc import IntegrityError
from werkzeug.exceptions import HTTPException

from config import Config
from extensions import db, bcrypt, login_manager
from logging_setup import setup_logging
from models import User, Task

api = Blueprint("api", __name__, url_prefix="/api")

EMAIL_REGEX = r'^[\w\.-]+@[\w\.-]+\.\w+$'  # basic email pattern
MIN_PASSWORD_LENGTH = 6
EMAIL_TAKEN = "Email already registered. Try logging in."


def create_app(config_object=Config):
    app = Flask(__name__)
    app.config.from_object(config_object)
    app.logger.setLevel(app.config["LOG_LEVEL"])

    # Initialize extensions
    db.init_app(app)
    bcrypt.init_app(app)
    login_manager.init_app(app)

    app.register_blueprint(api)
    app.register_error_handler(HTTPException, handle_http_error)

    with app.app_context():
        db.create_all()

    return app


def error_response(message, status):
    return jsonify({"message": message}), status


def handle_http_error(error):    # Every error leaves the API as {"message": ...}
    return error_response(error.description, error.code)


def read_json():
    data = request.get_json(silent=True)
    return data if isinstance(data, dict) else {}


def read_text(data, key):
    value = data.get(key)
    return value.strip() if isinstance(value, str) else ""


@login_manager.request_loader     # Resolves "Authorization: Bearer <token>" to a user
def load_user_from_request(req):
    scheme, _, token = req.headers.get("Authorization", "").partition(" ")
    if scheme.lower() != "bearer" or not token.strip():
        return None
    return User.from_token(token.strip())


@login_manager.unauthorized_handler
def unauthorized():
    return error_response("Not authorized", 401)


def email_taken(email):
    return User.query.filter_by(email=email).first() is not None


def auth_payload(user):
    return {"user": user.to_dict(), "token": user.get_token()}


@api.route("/auth/register", methods=["POST"])   # This function is used to register a new user
def register():
    data = read_json()
    name = read_text(data, "name")
    email = read_text(data, "email")
    password = read_text(data, "password")

    # --- VALIDATIONS ---
    if not name or not email or not password:
        return error_response("All fields are required.", 400)

    if not re.match(EMAIL_REGEX, email):
        return error_response("Invalid email format.", 400)

    if len(password) < MIN_PASSWORD_LENGTH:
        return error_response(f"Password must be at least {MIN_PASSWORD_LENGTH} characters long.", 400)

    # Check if email already exists
    if email_taken(email):
        return error_response(EMAIL_TAKEN, 400)

    # --- HASH PASSWORD ---
    hashed_password = bcrypt.generate_password_hash(password).decode("utf-8")

    # --- CREATE USER ---
    new_user = User(name=name, email=email, password=hashed_password)
    db.session.add(new_user)
    try:
        db.session.commit()
    except IntegrityError:     # same email registered concurrently
        db.session.rollback()
        return error_response(EMAIL_TAKEN, 400)

    current_app.logger.info("Registered user %s", new_user.id)
    return jsonify(auth_payload(new_user)), 201


@api.route("/auth/login", methods=["POST"])   # This function is used to log in and receive a token
def login():
    data = read_json()
    email = read_text(data, "email")
    password = read_text(data, "password")

    # Basic validation
    if not email or not password:
        return error_response("Please fill in all fields.", 400)

    user = User.query.filter_by(email=email).first()

    if user and bcrypt.check_password_hash(user.password, password):
        current_app.logger.info("User %s logged in", user.id)
        return jsonify(auth_payload(user))

    current_app.logger.warning("Failed login for %s", email)
    return error_response("Invalid email or password.", 401)


def get_own_task(task_id):
    # Another user's task is reported exactly like a missing one
    return Task.query.filter_by(id=task_id, user_id=current_user.id).first_or_404(
        description="Task not found"
    )


@api.route("/tasks", methods=["GET"])   # This function lists the tasks of the current user, newest first
@login_required
def list_tasks():
    tasks = (
        Task.query.filter_by(user_id=current_user.id)
        .order_by(Task.created_at.desc(), Task.id.desc())
        .all()
    )
    return jsonify([task.to_dict() for task in tasks])


@api.route("/tasks", methods=["POST"])   # This function is used to add a new task
@login_required
def create_task():
    data = read_json()
    fields = {attr: data[key] for key, attr in Task.EDITABLE_FIELDS.items() if key in data}

    try:
        new_task = Task(user_id=current_user.id, **fields)   # link task to logged-in user
    except ValueError as e:
        return error_response(str(e), 400)

    db.session.add(new_task)
    db.session.commit()

    current_app.logger.info("User %s created task %s", current_user.id, new_task.id)
    return jsonify(new_task.to_dict()), 201


@api.route("/tasks/<int:task_id>", methods=["GET"])
@login_required
def get_task(task_id):
    return jsonify(get_own_task(task_id).to_dict())


@api.route("/tasks/<int:task_id>", methods=["PUT"])   # This is the function to edit the task
@login_required
def update_task(task_id):
    task = get_own_task(task_id)

    try:
        task.apply(read_json())
    except ValueError as e:
        db.session.rollback()
        return error_response(str(e), 400)

    db.session.commit()

    current_app.logger.info("User %s updated task %s", current_user.id, task.id)
    return jsonify(task.to_dict())


@api.route("/tasks/<int:task_id>", methods=["DELETE"])   # This is the function used to delete a task
@login_required
def delete_task(task_id):
    task = get_own_task(task_id)

    db.session.delete(task)
    db.session.commit()

    current_app.logger.info("User %s deleted task %s", current_user.id, task_id)
    return jsonify({"message": "Task removed"})


if __name__ == "__main__":
    setup_logging(Config.LOG_LEVEL)
    create_app().run(debug=True)
