"""
Luggage Share Core Tests
=========================

Tests for:
1. User model and manager
2. Owner identity
3. Startup configuration checks
4. Health endpoints
5. Users API
"""

from django.apps import apps
from django.contrib.auth.models import AnonymousUser
from django.test import TestCase, override_settings
from rest_framework import status
from rest_framework.test import APIClient

from core.checks import check_owner_identity, check_uploads_bucket
from core.exceptions import ConfigurationError
from core.identity import is_owner, viewer_is_owner, validate_owner_identity
from core.models import User

OWNER = 'owner@luggageshare.app'


class TestUserModel(TestCase):
    """Tests for the custom User model."""

    def test_create_user(self):
        user = User.objects.create_user(
            email='amal@example.com',
            password='testpass123',
            full_name='Amal H.'
        )
        self.assertEqual(user.email, 'amal@example.com')
        self.assertTrue(user.check_password('testpass123'))
        self.assertFalse(user.is_staff)
        self.assertEqual(str(user), 'Amal H.')

    def test_email_domain_is_normalized(self):
        user = User.objects.create_user(email='yousef@EXAMPLE.COM', password='testpass123')
        self.assertEqual(user.email, 'yousef@example.com')

    def test_str_falls_back_to_email(self):
        user = User.objects.create_user(email='lina@example.com', password='testpass123')
        self.assertEqual(str(user), 'lina@example.com')

    def test_email_required(self):
        with self.assertRaises(ValueError):
            User.objects.create_user(email='', password='testpass123')

    def test_user_without_password_cannot_log_in(self):
        user = User.objects.create_user(email='nopass@example.com')
        self.assertFalse(user.has_usable_password())

    def test_create_superuser(self):
        admin = User.objects.create_superuser(email='admin@example.com', password='adminpass123')
        self.assertTrue(admin.is_staff)
        self.assertTrue(admin.is_superuser)

    def test_superuser_flags_enforced(self):
        with self.assertRaises(ValueError):
            User.objects.create_superuser(
                email='admin@example.com', password='adminpass123', is_staff=False
            )

    @override_settings(OWNER_EMAIL=OWNER)
    def test_is_owner_property(self):
        owner = User.objects.create_user(email=OWNER, password='testpass123')
        member = User.objects.create_user(email='member@example.com', password='testpass123')
        self.assertTrue(owner.is_owner)
        self.assertFalse(member.is_owner)


class TestOwnerIdentity(TestCase):
    """Tests for the owner flag."""

    def test_exact_match(self):
        self.assertTrue(is_owner(OWNER, OWNER))

    def test_case_insensitive(self):
        self.assertTrue(is_owner('Owner@LuggageShare.app', OWNER))

    def test_surrounding_whitespace_ignored(self):
        self.assertTrue(is_owner('  owner@luggageshare.app ', OWNER))

    def test_other_email(self):
        self.assertFalse(is_owner('member@example.com', OWNER))

    def test_missing_values(self):
        self.assertFalse(is_owner(None, OWNER))
        self.assertFalse(is_owner('', OWNER))
        self.assertFalse(is_owner(OWNER, ''))
        self.assertFalse(is_owner(OWNER, None))

    def test_anonymous_viewer_is_never_owner(self):
        self.assertFalse(viewer_is_owner(AnonymousUser()))
        self.assertFalse(viewer_is_owner(None))

    def test_viewer_follows_owner_setting(self):
        user = User.objects.create_user(email='ops@example.com', password='testpass123')
        with override_settings(OWNER_EMAIL='ops@example.com'):
            self.assertTrue(viewer_is_owner(user))
        with override_settings(OWNER_EMAIL=OWNER):
            self.assertFalse(viewer_is_owner(user))


class TestStartupChecks(TestCase):
    """Tests for the core system checks."""

    @override_settings(OWNER_EMAIL=OWNER, UPLOADS_BUCKET='uploads')
    def test_configured(self):
        self.assertEqual(check_owner_identity(None), [])
        self.assertEqual(check_uploads_bucket(None), [])

    @override_settings(OWNER_EMAIL='')
    def test_missing_owner_email(self):
        errors = check_owner_identity(None)
        self.assertEqual([e.id for e in errors], ['core.E001'])

    @override_settings(OWNER_EMAIL='not-an-email')
    def test_malformed_owner_email(self):
        errors = check_owner_identity(None)
        self.assertEqual([e.id for e in errors], ['core.E001'])

    def test_validate_owner_identity(self):
        validate_owner_identity(OWNER)
        for bad in ['', '   ', 'not-an-email']:
            with self.assertRaises(ConfigurationError, msg=repr(bad)):
                validate_owner_identity(bad)

    @override_settings(OWNER_EMAIL='')
    def test_startup_fails_without_owner_email(self):
        with self.assertRaises(ConfigurationError):
            apps.get_app_config('core').ready()

    @override_settings(OWNER_EMAIL=OWNER)
    def test_startup_passes_with_owner_email(self):
        apps.get_app_config('core').ready()

    @override_settings(UPLOADS_BUCKET='')
    def test_missing_uploads_bucket(self):
        errors = check_uploads_bucket(None)
        self.assertEqual([e.id for e in errors], ['core.E002'])


class TestHealthEndpoints(TestCase):
    """Tests for the liveness and readiness probes."""

    def test_health_endpoint(self):
        response = self.client.get('/health/')
        self.assertEqual(response.status_code, 200)
        data = response.json()
        self.assertEqual(data['status'], 'ok')
        self.assertEqual(data['service'], 'luggage-share')

    def test_health_rejects_post(self):
        response = self.client.post('/health/')
        self.assertEqual(response.status_code, 405)

    @override_settings(OWNER_EMAIL=OWNER, UPLOADS_BUCKET='uploads')
    def test_readiness_endpoint(self):
        response = self.client.get('/health/ready/')
        self.assertEqual(response.status_code, 200)
        data = response.json()
        self.assertEqual(data['status'], 'healthy')
        self.assertEqual(data['checks']['database']['status'], 'healthy')
        self.assertEqual(data['checks']['cache']['status'], 'healthy')

        rules = data['checks']['business_rules']
        self.assertTrue(rules['rate_table_complete']['pass'])
        self.assertTrue(rules['price_rule_80_uae_me']['pass'])
        self.assertTrue(rules['haversine_sanity']['pass'])

    @override_settings(UPLOADS_BUCKET='')
    def test_readiness_fails_without_bucket(self):
        response = self.client.get('/health/ready/')
        self.assertEqual(response.status_code, 503)
        self.assertFalse(response.json()['checks']['business_rules']['storage_bucket']['pass'])


@override_settings(OWNER_EMAIL=OWNER)
class TestUsersAPI(TestCase):
    """Tests for the users endpoints."""

    def setUp(self):
        self.client = APIClient()
        self.user = User.objects.create_user(
            email='amal@example.com', password='testpass123', full_name='Amal H.'
        )

    def test_me_requires_authentication(self):
        response = self.client.get('/api/users/me/')
        self.assertEqual(response.status_code, status.HTTP_401_UNAUTHORIZED)

    def test_me(self):
        self.client.force_authenticate(self.user)
        response = self.client.get('/api/users/me/')
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data['email'], 'amal@example.com')
        self.assertFalse(response.data['is_owner'])

    def test_me_for_owner(self):
        owner = User.objects.create_user(email=OWNER, password='testpass123')
        self.client.force_authenticate(owner)
        response = self.client.get('/api/users/me/')
        self.assertTrue(response.data['is_owner'])

    def test_update_profile(self):
        self.client.force_authenticate(self.user)
        response = self.client.patch(
            '/api/users/me/', {'full_name': 'Amal Hassan'}, format='json'
        )
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.user.refresh_from_db()
        self.assertEqual(self.user.full_name, 'Amal Hassan')

    def test_email_is_read_only(self):
        self.client.force_authenticate(self.user)
        self.client.patch('/api/users/me/', {'email': 'other@example.com'}, format='json')
        self.user.refresh_from_db()
        self.assertEqual(self.user.email, 'amal@example.com')

    def test_register(self):
        response = self.client.post('/api/users/', {
            'email': 'new@example.com',
            'password': 'Zq8!long-enough-pass',
            'full_name': 'New Member',
        }, format='json')
        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertTrue(User.objects.filter(email='new@example.com').exists())

    def test_list_is_staff_only(self):
        self.client.force_authenticate(self.user)
        response = self.client.get('/api/users/')
        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)
