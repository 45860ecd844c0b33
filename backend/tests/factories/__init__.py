"""Factory Boy helpers for building auth payloads and DTOs."""

from __future__ import annotations

from faker import Faker

faker = Faker()
Faker.seed(1337)

STRONG_PASSWORD = "Str0ng!Passw0rd"
