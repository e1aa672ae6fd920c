# portfolio/media.py
"""Turn stored media references into URLs a browser can load directly.

Three reference styles are stored in the database:

* ``local:/images/photo.jpg`` - a file served by the front end, root relative.
* ``drive://<fileId>`` or any Google Drive share link - rewritten to an
  embeddable Drive URL.
* anything else - already a direct URL, returned unchanged.

Resolution is purely syntactic. Nothing here checks that a file exists or is
shared publicly.
"""
import re

MEDIA_TYPES = ('image', 'pdf', 'video')
MEDIA_SIZES = ('small', 'medium', 'large', 'original')

LOCAL_PREFIX = 'local:'
DRIVE_PREFIX = 'drive://'

FILE_PATH_RE = re.compile(r'/file/d/([a-zA-Z0-9_-]+)')
ID_PARAM_RE = re.compile(r'[?&]id=([a-zA-Z0-9_-]+)')

YOUTUBE_RE = re.compile(
    r'(?:youtube\.com/(?:[^/]+/.+/|(?:v|e(?:mbed)?)/|.*[?&]v=)|youtu\.be/)([^"&?/\s]{11})'
)
VIMEO_RE = re.compile(r'vimeo\.com/(?:video/)?(\d+)')
DAILYMOTION_RE = re.compile(r'dailymotion\.com/(?:embed/)?video/([a-zA-Z0-9]+)')


def drive_url(file_id, media_type='image'):
    if media_type in ('pdf', 'video'):
        return f'https://drive.google.com/file/d/{file_id}/preview'
    # lh3 serves the raw bytes, which is what an <img> tag needs
    return f'https://lh3.googleusercontent.com/d/{file_id}'


def resolve_media_url(url, type='image', size='large'):
    """Resolve ``url`` to a directly loadable URL.

    ``size`` is accepted for callers that pass it along but does not change the
    result. Empty or non-string input gives an empty string.
    """
    if not url or not isinstance(url, str):
        return ''
    if type not in MEDIA_TYPES:
        raise ValueError(f'Unknown media type: {type}')
    if size not in MEDIA_SIZES:
        raise ValueError(f'Unknown media size: {size}')

    if url.startswith(LOCAL_PREFIX):
        return url[len(LOCAL_PREFIX):]

    if url.startswith(DRIVE_PREFIX):
        return drive_url(url[len(DRIVE_PREFIX):], type)

    match = FILE_PATH_RE.search(url)
    if match:
        return drive_url(match.group(1), type)

    match = ID_PARAM_RE.search(url)
    if match and 'drive.google.com' in url:
        return drive_url(match.group(1), type)

    return url


def resolve_media_urls(urls, type='image', size='large'):
    return [resolve_media_url(url, type=type, size=size) for url in urls or []]


def is_local_file(url):
    return bool(url) and url.startswith(LOCAL_PREFIX)


def is_drive_file(url):
    return bool(url) and (url.startswith(DRIVE_PREFIX) or 'drive.google.com' in url)


def extract_drive_file_id(url):
    if not url:
        return None
    if url.startswith(DRIVE_PREFIX):
        return url[len(DRIVE_PREFIX):]
    match = FILE_PATH_RE.search(url)
    if match:
        return match.group(1)
    if 'drive.google.com' in url:
        match = ID_PARAM_RE.search(url)
        if match:
            return match.group(1)
    return None


def get_embed_url(url):
    """Return an iframe-friendly URL for a video link."""
    if not url or not isinstance(url, str):
        return ''

    match = YOUTUBE_RE.search(url)
    if match:
        return f'https://www.youtube.com/embed/{match.group(1)}'

    if is_drive_file(url):
        file_id = extract_drive_file_id(url)
        if file_id:
            return drive_url(file_id, 'video')

    match = VIMEO_RE.search(url)
    if match:
        return f'https://player.vimeo.com/video/{match.group(1)}'

    match = DAILYMOTION_RE.search(url)
    if match:
        return f'https://www.dailymotion.com/embed/video/{match.group(1)}'

    return url


def get_video_thumbnail(url):
    # Only YouTube exposes thumbnails without an API call
    if not url or not isinstance(url, str):
        return ''
    match = YOUTUBE_RE.search(url)
    if match:
        return f'https://img.youtube.com/vi/{match.group(1)}/maxresdefault.jpg'
    return ''
