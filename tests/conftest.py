from decimal import Decimal

import pytest
from flask_jwt_extended import create_access_token

from roomfinder import create_app, db
from roomfinder.models.room import Room
from roomfinder.models.user import User


@pytest.fixture()
def app():
    app = create_app('testing')
    with app.app_context():
        yield app
        db.session.remove()
        db.drop_all()


@pytest.fixture()
def client(app):
    return app.test_client()


@pytest.fixture()
def make_room(app):
    def _make_room(room_id='r1', owner_email='owner@x.com', like_count=0, **fields):
        room = Room(
            id=room_id,
            title=fields.pop('title', 'Room A'),
            location=fields.pop('location', 'Dhaka'),
            rent_amount=fields.pop('rent_amount', Decimal('5000')),
            owner_email=owner_email,
            like_count=like_count,
            **fields,
        )
        db.session.add(room)
        db.session.commit()
        return room.id
    return _make_room


@pytest.fixture()
def make_user(app):
    def _make_user(email, name='Test User', role='user', password='Password123!'):
        user = User(email=email, name=name, role=role)
        user.set_password(password)
        db.session.add(user)
        db.session.commit()
        return user.id
    return _make_user


@pytest.fixture()
def auth_headers(app):
    def _auth_headers(email, user_id=None):
        claims = {'id': user_id} if user_id is not None else {}
        token = create_access_token(identity=email, additional_claims=claims)
        return {'Authorization': f'Bearer {token}'}
    return _auth_headers
