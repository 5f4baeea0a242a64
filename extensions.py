from flask_sqlalchemy import SQLAlchemy
from flask_bcrypt import Bcrypt
from flask_login import LoginManager

db = SQLAlchemy()                 # Task and user storage
bcrypt = Bcrypt()                 # Password hashing
login_manager = LoginManager()    # Resolves the bearer token of each API request to a user
