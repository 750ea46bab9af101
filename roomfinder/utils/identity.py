from collections import namedtuple
from flask import current_app
from flask_jwt_extended import verify_jwt_in_request, get_jwt_identity, get_jwt
from flask_jwt_extended.exceptions import JWTExtendedException
from jwt.exceptions import PyJWTError

Caller = namedtuple('Caller', ['email', 'user_id'])


def resolve_caller():
    """Return the authenticated Caller, or None for anonymous requests.

    A missing, expired or malformed bearer token never raises here; the
    request is simply treated as anonymous and each route decides whether
    that is acceptable.
    """
    try:
        verify_jwt_in_request(optional=True)
        identity = get_jwt_identity()
    except (JWTExtendedException, PyJWTError) as e:
        current_app.logger.debug(f'Treating request as anonymous: {str(e)}')
        return None

    if not identity:
        return None

    claims = get_jwt()
    return Caller(email=str(identity).lower().strip(), user_id=claims.get('id'))
