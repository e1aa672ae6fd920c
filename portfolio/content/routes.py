# portfolio/content/routes.py
from flask import Blueprint, request, jsonify
from flask_login import login_required
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from portfolio.init_db import db
from portfolio.errors import error_response
from portfolio.logging_config import setup_logging
from portfolio.visibility import viewer_is_admin, is_visible, visible_query
from portfolio.content.models import Project, Blog, Experience, Achievement
from portfolio.content.views import apply_payload, filter_rows


projects_bp = Blueprint('projects', __name__)
blogs_bp = Blueprint('blogs', __name__)
experiences_bp = Blueprint('experiences', __name__)
achievements_bp = Blueprint('achievements', __name__)

logger = setup_logging()


def _get_visible(model, row_id):
    row = db.session.get(model, row_id)
    if not is_visible(viewer_is_admin(), row):
        return None
    return row


def _list_visible(model, order_by):
    return visible_query(model, viewer_is_admin()).order_by(*order_by).all()


def _create(model, label):
    row = apply_payload(model(), request.get_json(silent=True), partial=False)
    try:
        db.session.add(row)
        db.session.commit()
    except IntegrityError as e:
        db.session.rollback()
        logger.warning(f"Integrity error creating {label}: {e.orig}")
        return error_response(f'Failed to create {label}', 409, e.orig)
    except SQLAlchemyError as e:
        db.session.rollback()
        logger.error(f"Error creating {label}: {e}")
        return error_response(f'Failed to create {label}', 500, e)
    logger.info(f"Created {label} {row.id}.")
    return jsonify(row.to_dict()), 201


def _update(model, row_id, label):
    row = db.session.get(model, row_id)
    if not row:
        return error_response(f'{label.capitalize()} not found', 404)
    apply_payload(row, request.get_json(silent=True), partial=True)
    try:
        db.session.commit()
    except IntegrityError as e:
        db.session.rollback()
        logger.warning(f"Integrity error updating {label} {row_id}: {e.orig}")
        return error_response(f'Failed to update {label}', 409, e.orig)
    except SQLAlchemyError as e:
        db.session.rollback()
        logger.error(f"Error updating {label} {row_id}: {e}")
        return error_response(f'Failed to update {label}', 500, e)
    return jsonify(row.to_dict()), 200


def _delete(model, row_id, label):
    row = db.session.get(model, row_id)
    if not row:
        return error_response(f'{label.capitalize()} not found', 404)
    try:
        db.session.delete(row)
        db.session.commit()
    except SQLAlchemyError as e:
        db.session.rollback()
        logger.error(f"Error deleting {label} {row_id}: {e}")
        return error_response(f'Failed to delete {label}', 500, e)
    logger.info(f"Deleted {label} {row_id}.")
    return jsonify({'message': f'{label.capitalize()} deleted successfully'}), 200


# Projects

@projects_bp.route('', methods=['GET'])
def list_projects():
    try:
        projects = _list_visible(Project, [Project.created_at.desc(), Project.id.desc()])
    except SQLAlchemyError as e:
        logger.error(f"Error fetching projects: {e}")
        return error_response('Failed to fetch projects', 500, e)
    projects = filter_rows(projects, request.args.get('q'),
                           technologies=request.args.get('technology'))
    return jsonify([project.to_dict() for project in projects]), 200


@projects_bp.route('/<int:project_id>', methods=['GET'])
def get_project(project_id):
    project = _get_visible(Project, project_id)
    if not project:
        return error_response('Project not found', 404)
    return jsonify(project.to_dict()), 200


@projects_bp.route('', methods=['POST'])
@login_required
def create_project():
    return _create(Project, 'project')


@projects_bp.route('/<int:project_id>', methods=['PUT'])
@login_required
def update_project(project_id):
    return _update(Project, project_id, 'project')


@projects_bp.route('/<int:project_id>', methods=['DELETE'])
@login_required
def delete_project(project_id):
    return _delete(Project, project_id, 'project')


# Blogs

@blogs_bp.route('', methods=['GET'])
def list_blogs():
    try:
        blogs = _list_visible(Blog, [Blog.created_at.desc(), Blog.id.desc()])
    except SQLAlchemyError as e:
        logger.error(f"Error fetching blogs: {e}")
        return error_response('Failed to fetch blogs', 500, e)
    blogs = filter_rows(blogs, request.args.get('q'), type=request.args.get('type'))
    return jsonify([blog.to_dict() for blog in blogs]), 200


@blogs_bp.route('/<int:blog_id>', methods=['GET'])
def get_blog(blog_id):
    blog = _get_visible(Blog, blog_id)
    if not blog:
        return error_response('Blog not found', 404)
    return jsonify(blog.to_dict()), 200


@blogs_bp.route('/slug/<slug>', methods=['GET'])
def get_blog_by_slug(slug):
    blog = Blog.query.filter_by(slug=slug).first()
    if not is_visible(viewer_is_admin(), blog):
        return error_response('Blog not found', 404)
    return jsonify(blog.to_dict()), 200


@blogs_bp.route('', methods=['POST'])
@login_required
def create_blog():
    return _create(Blog, 'blog')


@blogs_bp.route('/<int:blog_id>', methods=['PUT'])
@login_required
def update_blog(blog_id):
    return _update(Blog, blog_id, 'blog')


@blogs_bp.route('/<int:blog_id>', methods=['DELETE'])
@login_required
def delete_blog(blog_id):
    return _delete(Blog, blog_id, 'blog')


# Experiences

@experiences_bp.route('', methods=['GET'])
def list_experiences():
    try:
        experiences = Experience.query.order_by(Experience.start_date.desc(), Experience.id.desc()).all()
    except SQLAlchemyError as e:
        logger.error(f"Error fetching experiences: {e}")
        return error_response('Failed to fetch experiences', 500, e)
    return jsonify([experience.to_dict() for experience in experiences]), 200


@experiences_bp.route('/<int:experience_id>', methods=['GET'])
def get_experience(experience_id):
    experience = db.session.get(Experience, experience_id)
    if not experience:
        return error_response('Experience not found', 404)
    return jsonify(experience.to_dict()), 200


@experiences_bp.route('', methods=['POST'])
@login_required
def create_experience():
    return _create(Experience, 'experience')


@experiences_bp.route('/<int:experience_id>', methods=['PUT'])
@login_required
def update_experience(experience_id):
    return _update(Experience, experience_id, 'experience')


@experiences_bp.route('/<int:experience_id>', methods=['DELETE'])
@login_required
def delete_experience(experience_id):
    return _delete(Experience, experience_id, 'experience')


# Achievements

@achievements_bp.route('', methods=['GET'])
def list_achievements():
    try:
        achievements = _list_visible(Achievement, [Achievement.created_at.desc(), Achievement.id.desc()])
    except SQLAlchemyError as e:
        logger.error(f"Error fetching achievements: {e}")
        return error_response('Failed to fetch achievements', 500, e)
    achievements = filter_rows(achievements, request.args.get('q'),
                               category=request.args.get('category'))
    return jsonify([achievement.to_dict() for achievement in achievements]), 200


@achievements_bp.route('/<int:achievement_id>', methods=['GET'])
def get_achievement(achievement_id):
    achievement = _get_visible(Achievement, achievement_id)
    if not achievement:
        return error_response('Achievement not found', 404)
    return jsonify(achievement.to_dict()), 200


@achievements_bp.route('', methods=['POST'])
@login_required
def create_achievement():
    return _create(Achievement, 'achievement')


@achievements_bp.route('/<int:achievement_id>', methods=['PUT'])
@login_required
def update_achievement(achievement_id):
    return _update(Achievement, achievement_id, 'achievement')


@achievements_bp.route('/<int:achievement_id>', methods=['DELETE'])
@login_required
def delete_achievement(achievement_id):
    return _delete(Achievement, achievement_id, 'achievement')
