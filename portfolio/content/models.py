# portfolio/content/models.py
from datetime import datetime
from portfolio.init_db import db
from portfolio.media import resolve_media_url, resolve_media_urls, get_embed_url, get_video_thumbnail

BLOG_TYPES = ('article', 'video', 'tutorial')
ACHIEVEMENT_CATEGORIES = ('award', 'participation', 'certification', 'social')


def isoformat(value):
    return value.isoformat() if value else None


class Project(db.Model):
    __tablename__ = 'project'
    id = db.Column(db.Integer, primary_key=True)
    title = db.Column(db.String(255), nullable=False)
    description = db.Column(db.Text)
    challenge = db.Column(db.Text)
    contribution = db.Column(db.Text)
    technologies = db.Column(db.JSON, nullable=False, default=list)
    thumbnail = db.Column(db.Text)
    hero_image = db.Column(db.Text)
    video_url = db.Column(db.Text)
    github_url = db.Column(db.Text)
    live_url = db.Column(db.Text)
    accuracy = db.Column(db.String(50))
    speed = db.Column(db.String(50))
    images = db.Column(db.JSON, nullable=False, default=list)
    start_date = db.Column(db.DateTime)
    end_date = db.Column(db.DateTime)
    published = db.Column(db.Boolean, nullable=False, default=True)
    created_at = db.Column(db.DateTime, default=datetime.utcnow)

    # payload key -> column
    FIELDS = {
        'title': 'title',
        'description': 'description',
        'challenge': 'challenge',
        'contribution': 'contribution',
        'technologies': 'technologies',
        'thumbnail': 'thumbnail',
        'heroImage': 'hero_image',
        'videoUrl': 'video_url',
        'githubUrl': 'github_url',
        'liveUrl': 'live_url',
        'accuracy': 'accuracy',
        'speed': 'speed',
        'images': 'images',
        'startDate': 'start_date',
        'endDate': 'end_date',
        'published': 'published',
    }
    REQUIRED = ('title',)

    def to_dict(self):
        return {
            'id': self.id,
            'title': self.title,
            'description': self.description,
            'challenge': self.challenge,
            'contribution': self.contribution,
            'technologies': self.technologies or [],
            'thumbnail': self.thumbnail,
            'heroImage': self.hero_image,
            'videoUrl': self.video_url,
            'githubUrl': self.github_url,
            'liveUrl': self.live_url,
            'accuracy': self.accuracy,
            'speed': self.speed,
            'images': self.images or [],
            'startDate': isoformat(self.start_date),
            'endDate': isoformat(self.end_date),
            'published': self.published,
            'createdAt': isoformat(self.created_at),
            'thumbnailUrl': resolve_media_url(self.thumbnail),
            'heroImageUrl': resolve_media_url(self.hero_image),
            'imageUrls': resolve_media_urls(self.images),
            'videoEmbedUrl': get_embed_url(self.video_url),
        }


class Blog(db.Model):
    __tablename__ = 'blog'
    id = db.Column(db.Integer, primary_key=True)
    title = db.Column(db.String(255), nullable=False)
    slug = db.Column(db.String(255), unique=True, nullable=False)
    excerpt = db.Column(db.Text)
    content = db.Column(db.Text)
    thumbnail = db.Column(db.Text)
    pdf_url = db.Column(db.Text)
    type = db.Column(db.String(20), nullable=False, default='article')
    read_time = db.Column(db.String(50))
    video_url = db.Column(db.Text)
    published_at = db.Column(db.DateTime)
    published = db.Column(db.Boolean, nullable=False, default=True)
    created_at = db.Column(db.DateTime, default=datetime.utcnow)

    FIELDS = {
        'title': 'title',
        'slug': 'slug',
        'excerpt': 'excerpt',
        'content': 'content',
        'thumbnail': 'thumbnail',
        'pdfUrl': 'pdf_url',
        'type': 'type',
        'readTime': 'read_time',
        'videoUrl': 'video_url',
        'publishedAt': 'published_at',
        'published': 'published',
    }
    REQUIRED = ('title', 'slug')
    CHOICES = {'type': BLOG_TYPES}

    def to_dict(self):
        return {
            'id': self.id,
            'title': self.title,
            'slug': self.slug,
            'excerpt': self.excerpt,
            'content': self.content,
            'thumbnail': self.thumbnail,
            'pdfUrl': self.pdf_url,
            'type': self.type,
            'readTime': self.read_time,
            'videoUrl': self.video_url,
            'publishedAt': isoformat(self.published_at),
            'published': self.published,
            'createdAt': isoformat(self.created_at),
            'thumbnailUrl': resolve_media_url(self.thumbnail) or get_video_thumbnail(self.video_url),
            'pdfPreviewUrl': resolve_media_url(self.pdf_url, type='pdf'),
            'videoEmbedUrl': get_embed_url(self.video_url),
        }


class Experience(db.Model):
    __tablename__ = 'experience'
    id = db.Column(db.Integer, primary_key=True)
    company = db.Column(db.String(255), nullable=False)
    company_logo = db.Column(db.Text)
    position = db.Column(db.String(255), nullable=False)
    location = db.Column(db.String(255))
    start_date = db.Column(db.DateTime, nullable=False)
    end_date = db.Column(db.DateTime)
    current = db.Column(db.Boolean, nullable=False, default=False)
    description = db.Column(db.Text)
    skills = db.Column(db.JSON, nullable=False, default=list)
    created_at = db.Column(db.DateTime, default=datetime.utcnow)

    FIELDS = {
        'company': 'company',
        'companyLogo': 'company_logo',
        'position': 'position',
        'location': 'location',
        'startDate': 'start_date',
        'endDate': 'end_date',
        'current': 'current',
        'description': 'description',
        'skills': 'skills',
    }
    REQUIRED = ('company', 'position', 'startDate')

    def to_dict(self):
        return {
            'id': self.id,
            'company': self.company,
            'companyLogo': self.company_logo,
            'position': self.position,
            'location': self.location,
            'startDate': isoformat(self.start_date),
            'endDate': isoformat(self.end_date),
            'current': self.current,
            'description': self.description,
            'skills': self.skills or [],
            'companyLogoUrl': resolve_media_url(self.company_logo),
        }


class Achievement(db.Model):
    __tablename__ = 'achievement'
    id = db.Column(db.Integer, primary_key=True)
    title = db.Column(db.String(255), nullable=False)
    description = db.Column(db.Text)
    category = db.Column(db.String(30), nullable=False, default='award')
    date = db.Column(db.DateTime)
    images = db.Column(db.JSON, nullable=False, default=list)
    video_url = db.Column(db.Text)
    link = db.Column(db.Text)
    published = db.Column(db.Boolean, nullable=False, default=True)
    created_at = db.Column(db.DateTime, default=datetime.utcnow)

    FIELDS = {
        'title': 'title',
        'description': 'description',
        'category': 'category',
        'date': 'date',
        'images': 'images',
        'videoUrl': 'video_url',
        'link': 'link',
        'published': 'published',
    }
    REQUIRED = ('title',)
    CHOICES = {'category': ACHIEVEMENT_CATEGORIES}

    def to_dict(self):
        return {
            'id': self.id,
            'title': self.title,
            'description': self.description,
            'category': self.category,
            'date': isoformat(self.date),
            'images': self.images or [],
            'videoUrl': self.video_url,
            'link': self.link,
            'published': self.published,
            'createdAt': isoformat(self.created_at),
            'imageUrls': resolve_media_urls(self.images),
            'videoEmbedUrl': get_embed_url(self.video_url),
        }
