# portfolio/contact/routes.py
import re
from flask import Blueprint, request, jsonify
from flask_login import login_required
from sqlalchemy.exc import SQLAlchemyError
from portfolio.init_db import db
from portfolio.errors import error_response
from portfolio.logging_config import setup_logging
from portfolio.contact.models import ContactMessage
from portfolio.contact.views import send_contact_notification


contact_bp = Blueprint('contact', __name__)

logger = setup_logging()


@contact_bp.route('', methods=['POST'])
def submit_message():
    data = request.get_json(silent=True) or {}
    name = (data.get('name') or '').strip()
    email = (data.get('email') or '').strip()
    message = (data.get('message') or '').strip()

    if not name or not email or not message:
        logger.warning("Contact submission with missing fields.")
        return error_response('Name, email and message are required', 400)

    if not re.match(r"[^@\s]+@[^@\s]+\.[^@\s]+", email):
        logger.warning("Invalid email format in contact submission.")
        return error_response('Invalid email address', 400)

    try:
        contact_message = ContactMessage(name=name, email=email, message=message)
        db.session.add(contact_message)
        db.session.commit()
    except SQLAlchemyError as e:
        db.session.rollback()
        logger.error(f"Error saving contact message: {e}")
        return error_response('Failed to send message', 500, e)

    send_contact_notification(contact_message)

    logger.info(f"Contact message {contact_message.id} received from {email}.")
    return jsonify({'message': 'Message sent successfully', 'id': contact_message.id}), 201


@contact_bp.route('', methods=['GET'])
@login_required
def list_messages():
    query = ContactMessage.query
    if request.args.get('unread') in ('1', 'true'):
        query = query.filter(ContactMessage.read.is_(False))
    try:
        messages = query.order_by(ContactMessage.created_at.desc(), ContactMessage.id.desc()).all()
    except SQLAlchemyError as e:
        logger.error(f"Error fetching messages: {e}")
        return error_response('Failed to fetch messages', 500, e)
    return jsonify([message.to_dict() for message in messages]), 200


@contact_bp.route('/<int:message_id>/read', methods=['PATCH'])
@login_required
def mark_read(message_id):
    message = db.session.get(ContactMessage, message_id)
    if not message:
        return error_response('Message not found', 404)
    try:
        message.read = True
        db.session.commit()
    except SQLAlchemyError as e:
        db.session.rollback()
        logger.error(f"Error updating message {message_id}: {e}")
        return error_response('Failed to update message', 500, e)
    return jsonify(message.to_dict()), 200


@contact_bp.route('/<int:message_id>', methods=['DELETE'])
@login_required
def delete_message(message_id):
    message = db.session.get(ContactMessage, message_id)
    if not message:
        return error_response('Message not found', 404)
    try:
        db.session.delete(message)
        db.session.commit()
    except SQLAlchemyError as e:
        db.session.rollback()
        logger.error(f"Error deleting message {message_id}: {e}")
        return error_response('Failed to delete message', 500, e)
    return jsonify({'message': 'Message deleted successfully'}), 200
