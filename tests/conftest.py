import os
from pathlib import Path

import pytest

# Settings are read from the environment on first use; pin them before any
# storefront module is imported.
os.environ.setdefault("PROTEAN_ENV", "test")
os.environ.setdefault("JWT_SECRET", "test-secret-do-not-use-in-production")
os.environ.setdefault("FRONTEND_URL", "http://localhost:5173")
os.environ.setdefault("PAYMENT_GATEWAY", "fake")
os.environ.setdefault("BCRYPT_ROUNDS", "4")
os.environ.pop("DATABASE_URL", None)


def pytest_collection_modifyitems(config, items):
    """Automatically mark tests based on their directory location."""
    for item in items:
        test_path = str(Path(item.fspath))

        if "/domain/" in test_path:
            item.add_marker(pytest.mark.domain)
        elif "/application/" in test_path or "/bdd/" in test_path:
            item.add_marker(pytest.mark.application)
        elif "/integration/" in test_path:
            item.add_marker(pytest.mark.integration)
            if not any(m.name == "fast" for m in item.iter_markers()):
                item.add_marker(pytest.mark.slow)


@pytest.fixture(scope="session")
def storefront_bed():
    from protean.integrations.pytest import DomainFixture

    from storefront.config import get_settings
    from storefront.domain import storefront

    get_settings.cache_clear()

    bed = DomainFixture(storefront)
    bed.setup()
    yield bed
    bed.teardown()


@pytest.fixture(autouse=True)
def _ctx(storefront_bed):
    with storefront_bed.domain_context():
        yield


@pytest.fixture(autouse=True)
def run_around_tests(_ctx):
    """Cleanup infrastructure and the payment gateway after every test."""
    from storefront.payments.gateway import reset_gateway

    reset_gateway()

    yield

    from protean import current_domain

    for _, provider in current_domain.providers.items():
        provider._data_reset()

    reset_gateway()


# ---------------------------------------------------------------------------
# Shared builders
# ---------------------------------------------------------------------------
@pytest.fixture
def make_category():
    from protean import current_domain

    from storefront.catalogue.category import Category

    def _make(name="Home & Living", slug="home-living"):
        category = Category.create(name=name, slug=slug)
        current_domain.repository_for(Category).add(category)
        return category

    return _make


@pytest.fixture
def make_product():
    from protean import current_domain

    from storefront.catalogue.product import Product

    def _make(name="Linen Cushion", slug=None, price_cents=500, currency="GBP", images=(), **kwargs):
        product = Product.create(
            name=name,
            slug=slug or name.lower().replace(" ", "-"),
            price_cents=price_cents,
            currency=currency,
            **kwargs,
        )
        for index, path in enumerate(images):
            product.add_image(path, is_primary=index == 0)
        current_domain.repository_for(Product).add(product)
        return product

    return _make


@pytest.fixture
def make_user():
    from protean import current_domain

    from storefront.identity.passwords import hash_password
    from storefront.identity.user import Role, User

    def _make(email="ada@example.com", password="s3cret-pass", name="Ada", role=Role.CUSTOMER):
        user = User.register(name=name, email=email, password_hash=hash_password(password), role=role)
        current_domain.repository_for(User).add(user)
        return user

    return _make


@pytest.fixture
def bearer():
    from storefront.identity.tokens import issue_access_token

    def _headers(user):
        return {"Authorization": f"Bearer {issue_access_token(str(user.id), user.role, user.email)}"}

    return _headers


@pytest.fixture
def client():
    from fastapi.testclient import TestClient

    from storefront.app import create_app

    return TestClient(create_app())


@pytest.fixture
def fake_gateway():
    from storefront.payments.gateway import get_gateway

    return get_gateway()
