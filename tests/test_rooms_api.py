from roomfinder.models.room_like import RoomLike


def create_room(client, headers, **overrides):
    payload = {'title': 'Room A', 'location': 'Dhaka', 'rentAmount': 5000}
    payload.update(overrides)
    return client.post('/rooms', json=payload, headers=headers)


class TestCreateRoom:
    def test_create_sets_owner_and_zero_likes(self, client, auth_headers):
        resp = create_room(client, auth_headers('owner@x.com', user_id=3))

        assert resp.status_code == 201
        room = resp.get_json()['room']
        assert room['likeCount'] == 0
        assert room['ownerEmail'] == 'owner@x.com'
        assert room['rentAmount'] == 5000.0
        assert room['available'] is True
        assert room['id']

    def test_required_fields(self, client, auth_headers):
        headers = auth_headers('owner@x.com')

        assert create_room(client, headers, title='').status_code == 400
        assert create_room(client, headers, location=None).status_code == 400
        assert create_room(client, headers, rentAmount='').status_code == 400
        assert create_room(client, headers, rentAmount='lots').status_code == 400

    def test_requires_identity(self, client):
        assert create_room(client, {}).status_code == 401

    def test_html_is_stripped(self, client, auth_headers):
        resp = create_room(client, auth_headers('owner@x.com'), title='<b>Sunny</b> room')
        assert resp.get_json()['room']['title'] == 'Sunny room'

    def test_available_flag_is_parsed_strictly(self, client, auth_headers):
        headers = auth_headers('owner@x.com')

        resp = create_room(client, headers, available='false')
        assert resp.status_code == 201
        assert resp.get_json()['room']['available'] is False

        resp = create_room(client, headers, available=False)
        assert resp.get_json()['room']['available'] is False

        assert create_room(client, headers, available='maybe').status_code == 400
        assert create_room(client, headers, available=0).status_code == 400


class TestReadRooms:
    def test_list_and_get(self, client, make_room):
        make_room('r1')
        make_room('r2', title='Room B')

        resp = client.get('/rooms')
        assert resp.status_code == 200
        assert {r['id'] for r in resp.get_json()} == {'r1', 'r2'}

        resp = client.get('/rooms/r2')
        assert resp.get_json()['title'] == 'Room B'

    def test_get_missing(self, client):
        assert client.get('/rooms/missing').status_code == 404


class TestUpdateRoom:
    def test_owner_updates_fields(self, client, make_room, auth_headers):
        make_room('r1', like_count=2)

        resp = client.put('/rooms/r1', json={'title': 'Room Z', 'rentAmount': '4500', 'likeCount': 99},
                          headers=auth_headers('owner@x.com'))

        assert resp.status_code == 200
        room = resp.get_json()['room']
        assert room['title'] == 'Room Z'
        assert room['rentAmount'] == 4500.0
        assert room['likeCount'] == 2
        assert room['updatedAt']

    def test_non_owner_denied(self, client, make_room, auth_headers):
        make_room('r1')

        resp = client.put('/rooms/r1', json={'title': 'Mine now'}, headers=auth_headers('a@x.com'))
        assert resp.status_code == 403

    def test_rejects_blank_title(self, client, make_room, auth_headers):
        make_room('r1')

        resp = client.put('/rooms/r1', json={'title': '  '}, headers=auth_headers('owner@x.com'))
        assert resp.status_code == 400

    def test_available_string_values(self, client, make_room, auth_headers):
        make_room('r1')
        headers = auth_headers('owner@x.com')

        resp = client.put('/rooms/r1', json={'available': 'false'}, headers=headers)
        assert resp.status_code == 200
        assert resp.get_json()['room']['available'] is False

        resp = client.put('/rooms/r1', json={'available': 'nope'}, headers=headers)
        assert resp.status_code == 400
        assert client.get('/rooms/r1').get_json()['available'] is False


class TestDeleteRoom:
    def test_delete_cascades_likes(self, client, make_room, auth_headers):
        make_room('r1')
        client.post('/rooms/r1/like', headers=auth_headers('a@x.com'))
        client.post('/rooms/r1/like', headers=auth_headers('b@x.com'))

        resp = client.delete('/rooms/r1', headers=auth_headers('owner@x.com'))
        assert resp.status_code == 200
        assert resp.get_json()['deletedLikes'] == 2
        assert RoomLike.query.filter_by(room_id='r1').count() == 0

        resp = client.get('/rooms/r1/like-status', headers=auth_headers('a@x.com'))
        assert resp.get_json() == {'hasLiked': False, 'likeCount': 0}

        resp = client.get('/user/likes/a@x.com', headers=auth_headers('a@x.com'))
        assert resp.get_json() == []

    def test_non_owner_denied(self, client, make_room, auth_headers):
        make_room('r1')

        assert client.delete('/rooms/r1', headers=auth_headers('a@x.com')).status_code == 403
        assert client.get('/rooms/r1').status_code == 200

    def test_delete_missing(self, client, auth_headers):
        assert client.delete('/rooms/missing', headers=auth_headers('owner@x.com')).status_code == 404
