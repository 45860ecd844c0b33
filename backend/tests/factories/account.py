"""Factories for registration payloads (HTTP bodies and service DTOs)."""

from __future__ import annotations

import factory

from restaurant_auth.services.auth.dto import LoginIn, RegisterIn

from . import STRONG_PASSWORD


class RegisterPayloadFactory(factory.DictFactory):
    """JSON body accepted by ``POST /api/v1/auth/register``."""

    email = factory.Sequence(lambda n: f"owner{n}@example.com")
    password = STRONG_PASSWORD
    firstName = factory.Faker("first_name")
    lastName = factory.Faker("last_name")
    restaurantName = factory.Faker("company")
    role = "owner"


class RegisterInFactory(factory.Factory):
    """Build :class:`RegisterIn` DTOs for service-level tests."""

    class Meta:
        model = RegisterIn

    email = factory.Sequence(lambda n: f"manager{n}@example.com")
    password = STRONG_PASSWORD
    first_name = factory.Faker("first_name")
    last_name = factory.Faker("last_name")
    restaurant_name = factory.Faker("company")
    role = "manager"
    phone = ""


class LoginInFactory(factory.Factory):
    """Build :class:`LoginIn` DTOs."""

    class Meta:
        model = LoginIn

    email = factory.Sequence(lambda n: f"manager{n}@example.com")
    password = STRONG_PASSWORD
