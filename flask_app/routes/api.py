"""
JSON API routes: signup, login, profile and timezone difference.
"""
import logging

from flask import Blueprint, current_app, jsonify, request

from flask_app.services.timezone_diff_service import TimezoneDiffService
from flask_app.services.user_service import UserService
from flask_app.utils.validators import parse_signed_in, validate_login, validate_signup
from tzdiff.errors import TimezoneDiffError, ValidationError

logger = logging.getLogger(__name__)

api_bp = Blueprint('api', __name__)


def _json_body() -> dict:
    data = request.get_json(silent=True)
    return data if isinstance(data, dict) else {}


@api_bp.errorhandler(TimezoneDiffError)
def handle_timezone_diff_error(error):
    """Report per-request failures as a JSON error body."""
    body = {'error': error.message, 'kind': type(error).__name__}
    if isinstance(error, ValidationError) and len(error.errors) > 1:
        body['errors'] = error.errors
    return jsonify(body), error.status_code


@api_bp.route('/signup', methods=['POST'])
def signup():
    """Register a user with their timezone."""
    data = _json_body()
    errors = validate_signup(data)
    if errors:
        raise ValidationError(errors)

    user = UserService().create_user(
        username=data['username'].strip(),
        email=data['email'].strip(),
        timezone=data['timezone'].strip(),
        password=data['password'],
    )
    return jsonify({
        'id': user.id,
        'username': user.username,
        'email': user.email,
        'timezone': user.timezone,
    }), 201


@api_bp.route('/login', methods=['POST'])
def login():
    """Check credentials and return the user's public record."""
    data = _json_body()
    errors = validate_login(data)
    if errors:
        raise ValidationError(errors)

    user = UserService().authenticate(data['username'].strip(), data['password'])
    return jsonify(user.to_dict())


@api_bp.route('/profile/<username>')
def profile(username):
    """Public profile of a user."""
    return jsonify(UserService().get_profile(username).to_dict())


@api_bp.route('/timezone-diff/<username>')
def timezone_diff(username):
    """Hours the profile owner is ahead of the viewer."""
    signed_in = parse_signed_in(request.args.get('isSignedIn'))
    current_username = request.args.get('currentUsername') or None
    override = request.args.get('testTimezoneOverride') or request.args.get('testTimezone')

    logger.debug("timezone-diff target=%s signed_in=%s current=%s override=%s",
                 username, signed_in, current_username, override)

    service = TimezoneDiffService(current_app.extensions['tzdiff_settings'])
    response = service.get_difference(
        username,
        signed_in=signed_in,
        current_username=current_username,
        remote_address=request.remote_addr,
        override=override,
    )
    return jsonify(response.to_dict())
