# portfolio/client.py
"""HTTP client for code that consumes the portfolio API.

The bearer token lives on an explicit :class:`ApiSession` handed to the
client, and read results are kept in a small LRU cache that is cleared for a
resource whenever that resource is written through the client.
"""
from collections import OrderedDict
import requests
from portfolio.logging_config import setup_logging

logger = setup_logging()

DEFAULT_TIMEOUT = 10


class ApiClientError(Exception):
    def __init__(self, status, message):
        super().__init__(f'{status}: {message}')
        self.status = status
        self.message = message


class ApiSession:
    def __init__(self, base_url, token=None):
        self.base_url = base_url.rstrip('/')
        self.token = token

    @property
    def is_authenticated(self):
        return bool(self.token)

    def url(self, path):
        return f'{self.base_url}/{path.lstrip("/")}'

    def headers(self):
        if not self.token:
            return {}
        return {'Authorization': f'Bearer {self.token}'}

    def logout(self):
        self.token = None


class ResourceCache:
    def __init__(self, max_entries=64):
        if max_entries < 1:
            raise ValueError('max_entries must be at least 1')
        self.max_entries = max_entries
        self._entries = OrderedDict()

    def __len__(self):
        return len(self._entries)

    def __contains__(self, key):
        return key in self._entries

    def get(self, resource, key):
        entry_key = (resource, key)
        if entry_key not in self._entries:
            return None
        self._entries.move_to_end(entry_key)
        return self._entries[entry_key]

    def set(self, resource, key, value):
        entry_key = (resource, key)
        self._entries[entry_key] = value
        self._entries.move_to_end(entry_key)
        while len(self._entries) > self.max_entries:
            self._entries.popitem(last=False)

    def invalidate(self, resource=None):
        if resource is None:
            self._entries.clear()
            return
        for entry_key in [k for k in self._entries if k[0] == resource]:
            del self._entries[entry_key]


class PortfolioClient:
    def __init__(self, session, cache=None, http=None, timeout=DEFAULT_TIMEOUT):
        self.session = session
        self.cache = cache if cache is not None else ResourceCache()
        self.http = http or requests.Session()
        self.timeout = timeout

    def _request(self, method, path, **kwargs):
        response = self.http.request(method, self.session.url(path),
                                     headers=self.session.headers(),
                                     timeout=self.timeout, **kwargs)
        if response.status_code >= 400:
            try:
                message = response.json().get('error', response.reason)
            except ValueError:
                message = response.reason
            raise ApiClientError(response.status_code, message)
        return response.json()

    def _cache_scope(self):
        # Admin and public readers see different rows
        return 'admin' if self.session.is_authenticated else 'public'

    def _cached(self, resource, key, path, **kwargs):
        cache_key = (self._cache_scope(), key)
        value = self.cache.get(resource, cache_key)
        if value is None:
            value = self._request('GET', path, **kwargs)
            self.cache.set(resource, cache_key, value)
        return value

    def login(self, email, password):
        data = self._request('POST', '/api/auth/login', json={'email': email, 'password': password})
        self.session.token = data['token']
        self.cache.invalidate()
        return data['user']

    def logout(self):
        self.session.logout()
        self.cache.invalidate()

    def list(self, resource, **params):
        key = ('list', tuple(sorted(params.items())))
        return self._cached(resource, key, f'/api/{resource}', params=params or None)

    def get(self, resource, item_id):
        return self._cached(resource, ('get', item_id), f'/api/{resource}/{item_id}')

    def blog_by_slug(self, slug):
        return self._cached('blogs', ('slug', slug), f'/api/blogs/slug/{slug}')

    def create(self, resource, data):
        result = self._request('POST', f'/api/{resource}', json=data)
        self.cache.invalidate(resource)
        return result

    def update(self, resource, item_id, data):
        result = self._request('PUT', f'/api/{resource}/{item_id}', json=data)
        self.cache.invalidate(resource)
        return result

    def delete(self, resource, item_id):
        result = self._request('DELETE', f'/api/{resource}/{item_id}')
        self.cache.invalidate(resource)
        return result

    def submit_contact(self, name, email, message):
        result = self._request('POST', '/api/contact', json={'name': name, 'email': email, 'message': message})
        self.cache.invalidate('contact')
        return result

    def mark_message_read(self, message_id):
        result = self._request('PATCH', f'/api/contact/{message_id}/read')
        self.cache.invalidate('contact')
        return result

    def dashboard(self):
        # Always fresh
        return self._request('GET', '/api/analytics/dashboard')

    def track_page_view(self, page, referrer=None):
        return self._track('page_view', '/api/analytics/page-view', {'page': page, 'referrer': referrer})

    def track_content_view(self, content_type, content_id):
        return self._track('content_view', '/api/analytics/content-view',
                           {'contentType': content_type, 'contentId': content_id})

    def _track(self, kind, path, payload):
        try:
            self._request('POST', path, json=payload)
        except (requests.RequestException, ApiClientError, ValueError) as e:
            logger.warning(f"Analytics tracking failed: {e}",
                           extra={'event': 'tracking_failed', 'kind': kind, 'error': type(e).__name__})
            return False
        return True
