from datetime import datetime, timedelta
from jose import jwt
from portfolio.authentication.models import User
from portfolio.authentication.views import create_admin_from_config
from tests.conftest import ADMIN_EMAIL, ADMIN_PASSWORD


def _token(app, **claims):
    return jwt.encode(claims, app.config['JWT_SECRET'], algorithm='HS256')


def test_login_returns_token_and_user(client, admin):
    response = client.post('/api/auth/login', json={'email': ADMIN_EMAIL, 'password': ADMIN_PASSWORD})
    assert response.status_code == 200
    body = response.get_json()
    assert body['token']
    assert body['user'] == {'id': admin, 'name': 'Admin', 'email': ADMIN_EMAIL, 'role': 'admin'}
    assert 'password' not in body['user']


def test_login_email_is_case_insensitive(client, admin):
    response = client.post('/api/auth/login', json={'email': ADMIN_EMAIL.upper(), 'password': ADMIN_PASSWORD})
    assert response.status_code == 200


def test_login_rejects_bad_credentials(client, admin):
    response = client.post('/api/auth/login', json={'email': ADMIN_EMAIL, 'password': 'wrong-password'})
    assert response.status_code == 401
    assert response.get_json() == {'error': 'Invalid credentials'}
    assert client.post('/api/auth/login', json={'email': ADMIN_EMAIL}).status_code == 400
    assert client.post('/api/auth/login', data='not json').status_code == 400


def test_me(client, auth_headers):
    response = client.get('/api/auth/me', headers=auth_headers)
    assert response.status_code == 200
    assert response.get_json()['email'] == ADMIN_EMAIL
    assert client.get('/api/auth/me').status_code == 401


def test_token_signed_with_other_secret_is_rejected(client, admin):
    forged = jwt.encode({'userId': admin, 'exp': datetime.utcnow() + timedelta(hours=1)}, 'other', algorithm='HS256')
    assert client.get('/api/auth/me', headers={'Authorization': f'Bearer {forged}'}).status_code == 401


def test_expired_token_is_rejected(app, client, admin):
    expired = _token(app, userId=admin, exp=datetime.utcnow() - timedelta(minutes=1))
    assert client.get('/api/auth/me', headers={'Authorization': f'Bearer {expired}'}).status_code == 401


def test_token_for_missing_user_is_rejected(app, client, admin):
    orphan = _token(app, userId=admin + 100, exp=datetime.utcnow() + timedelta(hours=1))
    assert client.get('/api/auth/me', headers={'Authorization': f'Bearer {orphan}'}).status_code == 401


def test_malformed_authorization_header(client, token):
    assert client.get('/api/auth/me', headers={'Authorization': token}).status_code == 401
    assert client.get('/api/auth/me', headers={'Authorization': f'Token {token}'}).status_code == 401


def test_session_cookie_does_not_authenticate(client, admin):
    with client.session_transaction() as session:
        session['_user_id'] = str(admin)
    assert client.get('/api/auth/me').status_code == 401


def test_create_admin_command(app):
    runner = app.test_cli_runner()
    result = runner.invoke(args=['create-admin', '--name', 'Owner', '--email', 'Owner@Example.com',
                                 '--password', 'hunter22'])
    assert result.exit_code == 0, result.output
    assert 'owner@example.com' in result.output

    with app.app_context():
        user = User.query.filter_by(email='owner@example.com').one()
        assert user.role == 'admin'
        assert user.password != 'hunter22'


def test_create_admin_command_validates(app, admin):
    runner = app.test_cli_runner()
    result = runner.invoke(args=['create-admin', '--name', 'Dup', '--email', ADMIN_EMAIL, '--password', 'hunter22'])
    assert result.exit_code == 1
    assert 'already exists' in result.output

    result = runner.invoke(args=['create-admin', '--name', 'Short', '--email', 's@example.com', '--password', 'abc'])
    assert result.exit_code == 1
    assert 'at least 6 characters' in result.output


def test_admin_bootstrap_from_config(app):
    app.config.update(ADMIN_NAME='Boot', ADMIN_EMAIL='boot@example.com', ADMIN_PASSWORD='bootstrap1')
    with app.app_context():
        assert create_admin_from_config(app) is not None
        # second call is a no-op
        assert create_admin_from_config(app) is None
        assert User.query.filter_by(email='boot@example.com').count() == 1
