# portfolio/authentication/views.py
import re
from datetime import datetime, timedelta
from flask import current_app
from jose import JWTError, jwt
from sqlalchemy.exc import OperationalError
from werkzeug.security import generate_password_hash, check_password_hash
from portfolio.init_db import db
from portfolio.authentication.models import User
from portfolio.logging_config import setup_logging

logger = setup_logging()

EMAIL_RE = re.compile(r"[^@\s]+@[^@\s]+\.[^@\s]+")
MIN_PASSWORD_LENGTH = 6


def create_access_token(user):
    expires = datetime.utcnow() + timedelta(hours=current_app.config['JWT_EXPIRES_HOURS'])
    payload = {'userId': user.id, 'exp': expires}
    return jwt.encode(payload, current_app.config['JWT_SECRET'], algorithm=current_app.config['JWT_ALGORITHM'])


def decode_access_token(token):
    """Return the user id carried by ``token``, or None when it is invalid or expired."""
    try:
        payload = jwt.decode(token, current_app.config['JWT_SECRET'],
                             algorithms=[current_app.config['JWT_ALGORITHM']])
    except JWTError:
        return None
    user_id = payload.get('userId')
    if not isinstance(user_id, int):
        return None
    return user_id


def bearer_token(request):
    header = request.headers.get('Authorization', '')
    parts = header.split()
    if len(parts) == 2 and parts[0].lower() == 'bearer':
        return parts[1]
    return None


def load_user_from_request(request):
    token = bearer_token(request)
    if not token:
        return None
    user_id = decode_access_token(token)
    if user_id is None:
        return None
    return db.session.get(User, user_id)


def authenticate(email, password):
    user = User.query.filter_by(email=email).first()
    if not user or not check_password_hash(user.password, password):
        return None
    return user


def create_admin_user(name, email, password):
    name = (name or '').strip()
    email = (email or '').strip().lower()

    if not name or not email or not password:
        raise ValueError('All fields are required')
    if not EMAIL_RE.match(email):
        raise ValueError('Invalid email address')
    if len(password) < MIN_PASSWORD_LENGTH:
        raise ValueError(f'Password must be at least {MIN_PASSWORD_LENGTH} characters')
    if User.query.filter_by(email=email).first():
        raise ValueError('User with this email already exists')

    user = User(name=name, email=email,
                password=generate_password_hash(password, method='pbkdf2:sha256'),
                role='admin')
    db.session.add(user)
    db.session.commit()
    logger.info(f"Admin user '{email}' created successfully.")
    return user


def create_admin_from_config(app):
    email = app.config.get('ADMIN_EMAIL')
    password = app.config.get('ADMIN_PASSWORD')
    if not email or not password:
        return None

    try:
        if User.query.filter_by(email=email.strip().lower()).first():
            logger.info(f"Admin user '{email}' already exists.")
            return None
        return create_admin_user(app.config.get('ADMIN_NAME'), email, password)
    except ValueError as e:
        logger.error(f"Could not bootstrap admin user: {e}")
    except OperationalError as e:
        db.session.rollback()
        logger.error(f"OperationalError when creating admin user: {e}")
    return None
