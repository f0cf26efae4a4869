"""
Pytest fixtures shared by the engine and API tests.
"""

import pytest
from fastapi.testclient import TestClient

from iproas.main import app
from iproas.schemas.roas import ClientParameters, Product


@pytest.fixture
def product_a() -> Product:
    return Product(name="Producto A", price=1000, gross_margin=0.30)  # m = 300


@pytest.fixture
def product_b() -> Product:
    return Product(name="Producto B", price=500, gross_margin=0.20)  # m = 100


@pytest.fixture
def product_c() -> Product:
    return Product(name="Producto C", price=2000, gross_margin=0.50)  # m = 1000


@pytest.fixture
def base_params(product_a, product_b, product_c) -> ClientParameters:
    """IP 50k, TF 10k, IE 15k -> total cost 75k, critical product B."""
    return ClientParameters(
        ad_spend=50_000,
        fixed_fee=10_000,
        expected_income=15_000,
        products=[product_a, product_b, product_c],
    )


@pytest.fixture
def empty_params() -> ClientParameters:
    return ClientParameters(ad_spend=50_000, fixed_fee=10_000, expected_income=15_000)


@pytest.fixture
def client() -> TestClient:
    return TestClient(app)
