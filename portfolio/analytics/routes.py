# portfolio/analytics/routes.py
from flask import Blueprint, request, jsonify
from flask_login import login_required
from sqlalchemy.exc import SQLAlchemyError
from portfolio.init_db import db
from portfolio.errors import error_response
from portfolio.logging_config import setup_logging
from portfolio.analytics.models import CONTENT_TYPES
from portfolio.analytics.views import (record_page_view, record_content_view,
                                       count_content_views, compute_dashboard)


analytics_bp = Blueprint('analytics', __name__)

logger = setup_logging()


def client_ip():
    forwarded = request.headers.get('X-Forwarded-For') or ''
    ip = forwarded.split(',')[0].strip()
    return ip or request.remote_addr


def _tracking_failed(kind, error):
    db.session.rollback()
    logger.error(f"Error tracking {kind}: {error}",
                 extra={'event': 'tracking_failed', 'kind': kind, 'error': type(error).__name__})


def _content_id(value):
    try:
        return int(value)
    except (TypeError, ValueError):
        return None


@analytics_bp.route('/page-view', methods=['POST'])
def track_page_view():
    data = request.get_json(silent=True) or {}
    page = data.get('page')
    if not page or not isinstance(page, str):
        return error_response('page is required', 400)
    referrer = data.get('referrer')
    if referrer is not None and not isinstance(referrer, str):
        return error_response('referrer must be a string', 400)

    try:
        record_page_view(page, referrer, client_ip(), request.headers.get('User-Agent'))
    except SQLAlchemyError as e:
        _tracking_failed('page_view', e)
        return error_response('Failed to track page view', 500, e)
    return jsonify({'success': True}), 200


@analytics_bp.route('/content-view', methods=['POST'])
def track_content_view():
    data = request.get_json(silent=True) or {}
    content_type = data.get('contentType')
    content_id = _content_id(data.get('contentId'))

    if content_type not in CONTENT_TYPES:
        return error_response(f"contentType must be one of: {', '.join(CONTENT_TYPES)}", 400)
    if content_id is None:
        return error_response('contentId must be an integer', 400)

    try:
        record_content_view(content_type, content_id)
    except SQLAlchemyError as e:
        _tracking_failed('content_view', e)
        return error_response('Failed to track content view', 500, e)
    return jsonify({'success': True}), 200


@analytics_bp.route('/dashboard', methods=['GET'])
@login_required
def dashboard():
    try:
        report = compute_dashboard()
    except SQLAlchemyError as e:
        logger.error(f"Error fetching analytics: {e}")
        return error_response('Failed to fetch analytics', 500, e)
    return jsonify(report), 200


@analytics_bp.route('/content/<content_type>/<int:content_id>', methods=['GET'])
@login_required
def content_views(content_type, content_id):
    if content_type not in CONTENT_TYPES:
        return error_response(f"contentType must be one of: {', '.join(CONTENT_TYPES)}", 400)
    try:
        views = count_content_views(content_type, content_id)
    except SQLAlchemyError as e:
        logger.error(f"Error fetching content views: {e}")
        return error_response('Failed to fetch content views', 500, e)
    return jsonify({'views': views}), 200
