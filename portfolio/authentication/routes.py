# portfolio/authentication/routes.py
import click
from flask import Blueprint, jsonify, request
from flask.cli import with_appcontext
from flask_login import login_required, current_user
from portfolio.logging_config import setup_logging
from portfolio.authentication.views import authenticate, create_access_token, create_admin_user


auth_bp = Blueprint('auth', __name__)

# Setup logging
logger = setup_logging()


@auth_bp.route('/login', methods=['POST'])
def login_post():
    data = request.get_json(silent=True) or {}
    email = (data.get('email') or '').strip().lower()
    password = data.get('password')

    if not email or not password:
        logger.warning("Login attempt with missing fields.")
        return jsonify({'error': 'Email and password are required'}), 400

    user = authenticate(email, password)
    if not user:
        logger.warning(f"Failed login attempt for email: {email}")
        return jsonify({'error': 'Invalid credentials'}), 401

    token = create_access_token(user)
    logger.info(f"User {email} logged in successfully.")
    return jsonify({'token': token, 'user': user.to_dict()}), 200


@auth_bp.route('/me', methods=['GET'])
@login_required
def get_current_user():
    return jsonify(current_user.to_dict()), 200


@click.command('create-admin')
@click.option('--name', prompt='Admin name')
@click.option('--email', prompt='Admin email')
@click.option('--password', prompt='Admin password (min 6 chars)', hide_input=True,
              confirmation_prompt=True)
@with_appcontext
def create_admin_cmd(name, email, password):
    """Create an admin user who can sign in to the dashboard."""
    try:
        user = create_admin_user(name, email, password)
    except ValueError as e:
        raise click.ClickException(str(e))
    click.echo(f"Admin user created: {user.email} (id {user.id})")
