from flask_jwt_extended import decode_token

from roomfinder.models.user import User


def register(client, **overrides):
    payload = {'email': 'A@x.com', 'password': 'Password123!', 'name': 'Alice'}
    payload.update(overrides)
    return client.post('/auth/register', json=payload)


def test_register_returns_token_for_email(client):
    resp = register(client)

    assert resp.status_code == 201
    data = resp.get_json()
    assert data['user']['email'] == 'a@x.com'
    claims = decode_token(data['token'])
    assert claims['sub'] == 'a@x.com'
    assert claims['id'] == data['user']['id']


def test_register_validation(client):
    assert register(client, email='not-an-email').status_code == 400
    assert register(client, password='short').status_code == 400
    assert register(client, name='').status_code == 400

    assert register(client).status_code == 201
    assert register(client).status_code == 409


def test_login_and_me(client):
    register(client)

    resp = client.post('/auth/login', json={'email': 'a@x.com', 'password': 'wrong-password'})
    assert resp.status_code == 401

    resp = client.post('/auth/login', json={'email': 'a@x.com', 'password': 'Password123!'})
    assert resp.status_code == 200
    token = resp.get_json()['token']

    resp = client.get('/auth/me', headers={'Authorization': f'Bearer {token}'})
    assert resp.status_code == 200
    assert resp.get_json()['user']['name'] == 'Alice'
    assert User.query.filter_by(email='a@x.com').first().last_login_at is not None


def test_registered_user_cannot_like_own_room(client):
    token = register(client).get_json()['token']
    headers = {'Authorization': f'Bearer {token}'}
    room_id = client.post('/rooms', json={'title': 'Mine', 'location': 'Dhaka', 'rentAmount': 100},
                          headers=headers).get_json()['room']['id']

    resp = client.post(f'/rooms/{room_id}/like', headers=headers)
    assert resp.status_code == 400


def test_health(client):
    assert client.get('/health').get_json()['status'] == 'healthy'
    assert client.get('/no/such/route').status_code == 404
