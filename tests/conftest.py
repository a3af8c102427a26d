"""
Shared pytest fixtures for model, service and API tests.
"""
import pytest
from django.contrib.auth import get_user_model
from rest_framework.test import APIClient

User = get_user_model()


@pytest.fixture
def api_client():
    """API client for making requests."""
    return APIClient()


@pytest.fixture
def farmer(db):
    """Create farmer user."""
    return User.objects.create_user(
        username='farmer',
        email='farmer@test.com',
        password='testpass123',
        first_name='John',
        last_name='Farmer',
    )


@pytest.fixture
def another_farmer(db):
    """Create another farmer user for cross-user scoping tests."""
    return User.objects.create_user(
        username='other',
        email='other@test.com',
        password='testpass123',
        first_name='Jane',
        last_name='Farmer',
    )
