import unittest
from unittest.mock import patch

from flask_app import create_app
from flask_app.models import IPGeolocation, User, db
from tzdiff.config_loader import AppSettings


def _geo_response(tz_name):
    class _Response:
        status_code = 200

        def json(self):
            return {'status': 'success', 'timezone': tz_name}

    return _Response()


class ApiRoutesTests(unittest.TestCase):
    @classmethod
    def setUpClass(cls):
        cls.app = create_app('testing', settings=AppSettings())

    def setUp(self):
        self.client = self.app.test_client()
        with self.app.app_context():
            User.query.delete()
            IPGeolocation.query.delete()
            db.session.commit()
        self._signup('alice', 'Europe/Istanbul')
        self._signup('bob', 'Asia/Singapore')

    def _signup(self, username, tz_name, password='pw'):
        return self.client.post('/api/signup', json={
            'username': username,
            'email': f'{username}@example.com',
            'timezone': tz_name,
            'password': password,
        })

    def test_signup_returns_public_record(self):
        response = self._signup('carol', 'America/New_York')

        self.assertEqual(response.status_code, 201)
        body = response.get_json()
        self.assertEqual(body['username'], 'carol')
        self.assertEqual(body['timezone'], 'America/New_York')
        self.assertNotIn('password', body)
        self.assertIn('id', body)

    def test_signup_missing_fields(self):
        response = self.client.post('/api/signup', json={'username': 'dave'})
        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.get_json()['error'], 'All fields are required')

    def test_signup_rejects_unknown_timezone(self):
        response = self._signup('dave', 'Not/AZone')
        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.get_json()['kind'], 'ValidationError')

    def test_signup_duplicate(self):
        response = self._signup('alice', 'UTC')
        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.get_json()['error'], 'Username or email already exists')

    def test_login(self):
        ok = self.client.post('/api/login', json={'username': 'alice', 'password': 'pw'})
        bad = self.client.post('/api/login', json={'username': 'alice', 'password': 'nope'})
        missing = self.client.post('/api/login', json={'username': 'alice'})

        self.assertEqual(ok.status_code, 200)
        self.assertEqual(ok.get_json()['timezone'], 'Europe/Istanbul')
        self.assertNotIn('password_hash', ok.get_json())
        self.assertEqual(bad.status_code, 401)
        self.assertEqual(missing.status_code, 400)

    def test_profile(self):
        self.assertEqual(self.client.get('/api/profile/bob').get_json()['timezone'], 'Asia/Singapore')
        response = self.client.get('/api/profile/nobody')
        self.assertEqual(response.status_code, 404)
        self.assertEqual(response.get_json()['kind'], 'UserNotFoundError')

    def test_signed_in_difference(self):
        response = self.client.get('/api/timezone-diff/bob?isSignedIn=true&currentUsername=alice')

        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.get_json(), {
            'userTimezone': 'Asia/Singapore',
            'visitorTimezone': 'Europe/Istanbul',
            'differenceHours': 5.0,
        })

    def test_self_comparison(self):
        response = self.client.get('/api/timezone-diff/alice?isSignedIn=true&currentUsername=alice')
        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.get_json()['kind'], 'SelfComparisonError')

    def test_signed_in_unknown_viewer(self):
        response = self.client.get('/api/timezone-diff/bob?isSignedIn=true&currentUsername=ghost')
        self.assertEqual(response.status_code, 404)
        self.assertEqual(response.get_json()['error'], 'Current user not found')

    def test_signed_in_without_current_username(self):
        response = self.client.get('/api/timezone-diff/bob?isSignedIn=true')
        self.assertEqual(response.status_code, 404)
        self.assertEqual(response.get_json()['error'], 'Current user not found')

    def test_anonymous_with_override(self):
        response = self.client.get('/api/timezone-diff/bob?isSignedIn=false&testTimezoneOverride=UTC')
        body = response.get_json()
        self.assertEqual(body['visitorTimezone'], 'UTC')
        self.assertEqual(body['differenceHours'], 8.0)

    def test_legacy_override_parameter(self):
        response = self.client.get('/api/timezone-diff/alice?testTimezone=Asia/Singapore')
        self.assertEqual(response.get_json()['differenceHours'], -5.0)

    def test_anonymous_defaults_to_utc(self):
        body = self.client.get('/api/timezone-diff/bob').get_json()
        self.assertEqual(body['visitorTimezone'], 'UTC')
        self.assertEqual(body['differenceHours'], 8.0)

    def test_signed_in_flag_must_be_literal_true(self):
        body = self.client.get('/api/timezone-diff/bob?isSignedIn=1&currentUsername=alice').get_json()
        self.assertEqual(body['visitorTimezone'], 'UTC')

    @patch('flask_app.services.geolocation_service.requests.get')
    def test_ip_timezone_wins_over_override(self, mock_get):
        mock_get.return_value = _geo_response('Europe/Istanbul')

        response = self.client.get('/api/timezone-diff/bob?testTimezoneOverride=UTC',
                                   environ_base={'REMOTE_ADDR': '8.8.8.8'})

        body = response.get_json()
        self.assertEqual(body['visitorTimezone'], 'Europe/Istanbul')
        self.assertEqual(body['differenceHours'], 5.0)

    def test_invalid_override_masked_to_zero(self):
        response = self.client.get('/api/timezone-diff/bob?testTimezoneOverride=Not/AZone')
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.get_json()['differenceHours'], 0)

    def test_unknown_target(self):
        response = self.client.get('/api/timezone-diff/nobody')
        self.assertEqual(response.status_code, 404)
        self.assertEqual(response.get_json()['error'], 'User not found')


class ProxyFixTests(unittest.TestCase):
    @patch('flask_app.services.geolocation_service.requests.get')
    def test_forwarded_for_used_when_proxy_trusted(self, mock_get):
        mock_get.return_value = _geo_response('Asia/Singapore')
        app = create_app('testing', settings=AppSettings(trust_proxy=True))
        client = app.test_client()
        client.post('/api/signup', json={
            'username': 'bob', 'email': 'bob@example.com',
            'timezone': 'Asia/Singapore', 'password': 'pw',
        })

        response = client.get('/api/timezone-diff/bob', headers={'X-Forwarded-For': '8.8.8.8'})

        self.assertEqual(response.get_json()['differenceHours'], 0.0)
        self.assertIn('8.8.8.8', mock_get.call_args[0][0])


if __name__ == '__main__':
    unittest.main()
