# portfolio/analytics/models.py
from datetime import datetime
from portfolio.init_db import db

CONTENT_TYPES = ('project', 'blog', 'achievement')


class PageView(db.Model):
    __tablename__ = 'page_view'
    id = db.Column(db.Integer, primary_key=True)
    page = db.Column(db.String(500), nullable=False)
    ip_address = db.Column(db.String(64))
    user_agent = db.Column(db.String(500))
    referrer = db.Column(db.String(1000))
    created_at = db.Column(db.DateTime, default=datetime.utcnow, index=True)


class ContentView(db.Model):
    __tablename__ = 'content_view'
    id = db.Column(db.Integer, primary_key=True)
    content_type = db.Column(db.String(20), nullable=False)
    # Not a foreign key: views of deleted content are kept
    content_id = db.Column(db.Integer, nullable=False)
    created_at = db.Column(db.DateTime, default=datetime.utcnow, index=True)
