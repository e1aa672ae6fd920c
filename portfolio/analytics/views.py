# portfolio/analytics/views.py
"""Event logging and the aggregate report behind the admin dashboard.

Every figure is computed on request with plain count/group-by queries; nothing
is cached or pre-aggregated.
"""
from datetime import datetime, timedelta
from sqlalchemy import func
from portfolio.init_db import db
from portfolio.analytics.models import PageView, ContentView
from portfolio.content.models import Project, Blog, Experience, Achievement
from portfolio.contact.models import ContactMessage
from portfolio.media import resolve_media_url

RECENT_VIEWS_DAYS = 30
RECENT_MESSAGES_DAYS = 7
TOP_PAGES_LIMIT = 10
TOP_CONTENT_LIMIT = 5


def record_page_view(page, referrer=None, ip_address=None, user_agent=None):
    page_view = PageView(
        page=page[:500],
        referrer=referrer[:1000] if referrer else None,
        ip_address=ip_address[:64] if ip_address else None,
        user_agent=user_agent[:500] if user_agent else None,
    )
    db.session.add(page_view)
    db.session.commit()
    return page_view


def record_content_view(content_type, content_id):
    content_view = ContentView(content_type=content_type, content_id=content_id)
    db.session.add(content_view)
    db.session.commit()
    return content_view


def count_content_views(content_type, content_id):
    return ContentView.query.filter_by(content_type=content_type, content_id=content_id).count()


def _day_string(value):
    # SQLite hands back a string, PostgreSQL a date
    return value.isoformat() if hasattr(value, 'isoformat') else str(value)


def page_views_by_day(since):
    day = func.date(PageView.created_at)
    rows = (db.session.query(day.label('day'), func.count(PageView.id))
            .filter(PageView.created_at >= since)
            .group_by(day)
            .order_by(day.desc())
            .all())
    return [{'date': _day_string(row_day), 'count': int(count)} for row_day, count in rows]


def top_pages(since, limit=TOP_PAGES_LIMIT):
    views = func.count(PageView.id)
    rows = (db.session.query(PageView.page, views)
            .filter(PageView.created_at >= since)
            .group_by(PageView.page)
            .order_by(views.desc(), PageView.page.asc())
            .limit(limit)
            .all())
    return [{'page': page, 'views': int(count)} for page, count in rows]


def top_content(model, content_type, limit=TOP_CONTENT_LIMIT):
    views = func.count(ContentView.id)
    ranked = (db.session.query(ContentView.content_id, views)
              .filter(ContentView.content_type == content_type)
              .group_by(ContentView.content_id)
              .order_by(views.desc(), ContentView.content_id.asc())
              .limit(limit)
              .all())

    ids = [content_id for content_id, _ in ranked]
    rows = {row.id: row for row in model.query.filter(model.id.in_(ids)).all()} if ids else {}

    result = []
    for content_id, count in ranked:
        row = rows.get(content_id)
        result.append({
            'id': content_id,
            'title': row.title if row else None,
            'thumbnail': row.thumbnail if row else None,
            'thumbnailUrl': resolve_media_url(row.thumbnail) if row else '',
            'views': int(count),
        })
    return result


def compute_dashboard(now=None):
    now = now or datetime.utcnow()
    views_since = now - timedelta(days=RECENT_VIEWS_DAYS)
    messages_since = now - timedelta(days=RECENT_MESSAGES_DAYS)

    overview = {
        'totalProjects': Project.query.count(),
        'totalBlogs': Blog.query.count(),
        'totalExperiences': Experience.query.count(),
        'totalAchievements': Achievement.query.count(),
        'totalMessages': ContactMessage.query.count(),
        'unreadMessages': ContactMessage.query.filter(ContactMessage.read.is_(False)).count(),
        'totalPageViews': PageView.query.count(),
        'totalContentViews': ContentView.query.count(),
        'recentPageViews': PageView.query.filter(PageView.created_at >= views_since).count(),
        'recentMessages': ContactMessage.query.filter(ContactMessage.created_at >= messages_since).count(),
    }

    charts = {
        'pageViewsByDay': page_views_by_day(views_since),
        'topPages': top_pages(views_since),
        'topProjects': top_content(Project, 'project'),
        'topBlogs': top_content(Blog, 'blog'),
    }

    return {'overview': overview, 'charts': charts}
