import unittest

from flask_app.utils.validators import parse_signed_in, validate_login, validate_signup


class ValidatorTests(unittest.TestCase):
    def _signup(self, **overrides):
        data = {
            'username': 'alice',
            'email': 'alice@example.com',
            'timezone': 'Europe/Istanbul',
            'password': 'pw',
        }
        data.update(overrides)
        return data

    def test_valid_signup(self):
        self.assertEqual(validate_signup(self._signup()), [])

    def test_signup_requires_every_field(self):
        for key in ('username', 'email', 'timezone', 'password'):
            self.assertEqual(validate_signup(self._signup(**{key: '  '})), ['All fields are required'])
        self.assertEqual(validate_signup({}), ['All fields are required'])

    def test_signup_collects_all_errors(self):
        errors = validate_signup(self._signup(email='nope', timezone='Not/AZone'))
        self.assertEqual(len(errors), 2)

    def test_login(self):
        self.assertEqual(validate_login({'username': 'a', 'password': 'b'}), [])
        self.assertEqual(validate_login({'username': 'a'}), ['Username and password are required'])

    def test_parse_signed_in(self):
        self.assertTrue(parse_signed_in('true'))
        for value in (None, '', 'false', '1', 'yes', 'TRUE', 'True', ' true '):
            self.assertFalse(parse_signed_in(value), value)


if __name__ == '__main__':
    unittest.main()
