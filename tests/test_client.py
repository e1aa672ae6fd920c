import logging
import pytest
import requests
from portfolio.client import ApiSession, ApiClientError, PortfolioClient, ResourceCache
from portfolio.content.models import Project
from tests.conftest import ADMIN_EMAIL, ADMIN_PASSWORD

BASE_URL = 'http://portfolio.test'


class FlaskResponse:
    def __init__(self, response):
        self.status_code = response.status_code
        self.reason = response.status.split(' ', 1)[-1]
        self._data = response.get_json(silent=True)

    def json(self):
        if self._data is None:
            raise ValueError('No JSON body')
        return self._data


class FlaskHttp:
    """Stands in for requests.Session by routing calls to the Flask test client."""

    def __init__(self, test_client):
        self.test_client = test_client
        self.calls = []

    def request(self, method, url, headers=None, timeout=None, params=None, json=None):
        path = url[len(BASE_URL):]
        self.calls.append((method, path))
        response = self.test_client.open(path, method=method, headers=headers,
                                         query_string=params, json=json)
        return FlaskResponse(response)


class BrokenHttp:
    def request(self, *args, **kwargs):
        raise requests.ConnectionError('analytics host unreachable')


@pytest.fixture
def http(client):
    return FlaskHttp(client)


@pytest.fixture
def api(http):
    return PortfolioClient(ApiSession(BASE_URL), http=http)


def test_session_headers():
    session = ApiSession(BASE_URL + '/')
    assert session.url('/api/projects') == 'http://portfolio.test/api/projects'
    assert session.headers() == {}
    session.token = 'abc'
    assert session.headers() == {'Authorization': 'Bearer abc'}
    session.logout()
    assert not session.is_authenticated


def test_cache_is_bounded_lru():
    cache = ResourceCache(max_entries=2)
    cache.set('projects', 'a', 1)
    cache.set('blogs', 'b', 2)
    cache.get('projects', 'a')
    cache.set('blogs', 'c', 3)
    assert len(cache) == 2
    assert cache.get('projects', 'a') == 1
    assert cache.get('blogs', 'b') is None

    cache.invalidate('blogs')
    assert len(cache) == 1
    with pytest.raises(ValueError):
        ResourceCache(max_entries=0)


def test_reads_are_cached_until_a_write(api, http, admin, add):
    add(Project(title='First'))
    api.login(ADMIN_EMAIL, ADMIN_PASSWORD)

    assert [p['title'] for p in api.list('projects')] == ['First']
    api.list('projects')
    assert http.calls.count(('GET', '/api/projects')) == 1

    api.create('projects', {'title': 'Second'})
    titles = [p['title'] for p in api.list('projects')]
    assert titles == ['Second', 'First']
    assert http.calls.count(('GET', '/api/projects')) == 2


def test_login_switches_cache_scope(api, http, admin, add):
    add(Project(title='Draft', published=False))
    assert api.list('projects') == []

    user = api.login(ADMIN_EMAIL, ADMIN_PASSWORD)
    assert user['email'] == ADMIN_EMAIL
    assert [p['title'] for p in api.list('projects')] == ['Draft']

    api.logout()
    assert api.list('projects') == []


def test_errors_raise_api_client_error(api):
    with pytest.raises(ApiClientError) as excinfo:
        api.get('projects', 42)
    assert excinfo.value.status == 404
    assert excinfo.value.message == 'Project not found'

    with pytest.raises(ApiClientError) as excinfo:
        api.dashboard()
    assert excinfo.value.status == 401


def test_contact_and_dashboard(api, admin):
    api.submit_contact('Ada', 'ada@example.com', 'Hello there')
    api.login(ADMIN_EMAIL, ADMIN_PASSWORD)
    messages = api.list('contact')
    assert [m['name'] for m in messages] == ['Ada']

    api.mark_message_read(messages[0]['id'])
    assert api.list('contact')[0]['read'] is True
    assert api.dashboard()['overview']['totalMessages'] == 1


def test_tracking_reports_success(api):
    assert api.track_page_view('/about') is True
    assert api.track_content_view('blog', 3) is True
    # the server rejects this one, the caller still gets a plain False
    assert api.track_content_view('podcast', 3) is False


def test_tracking_never_raises_when_the_server_is_down(caplog):
    api = PortfolioClient(ApiSession(BASE_URL), http=BrokenHttp())
    with caplog.at_level(logging.WARNING):
        assert api.track_page_view('/projects') is False
        assert api.track_content_view('project', 1) is False

    failures = [r for r in caplog.records if getattr(r, 'event', None) == 'tracking_failed']
    assert [r.kind for r in failures] == ['page_view', 'content_view']
    assert failures[0].error == 'ConnectionError'
