"""Shared fixtures for the seller performance tests."""

import copy

import pytest

from sales_engine.processors.seller_performance.diagnostics import CollectingSink


SELLERS = [
    {"id": "seller_1", "first_name": "Ivan", "last_name": "Petrov"},
    {"id": "seller_2", "first_name": "Anna", "last_name": "Smirnova"},
    {"id": "seller_3", "first_name": "Oleg", "last_name": "Ivanov"},
    {"id": "seller_4", "first_name": "Maria", "last_name": "Volkova"},
]

PRODUCTS = [
    {"sku": "SKU_001", "purchase_price": 60, "sale_price": 100},
    {"sku": "SKU_002", "purchase_price": 10, "sale_price": 20},
    {"sku": "SKU_003", "purchase_price": 5, "sale_price": 8},
]


def receipt(seller_id, *items, **extra):
    return {"seller_id": seller_id, "items": list(items), **extra}


def item(sku, quantity, discount=0, **extra):
    return {"sku": sku, "quantity": quantity, "discount": discount, **extra}


@pytest.fixture
def sink():
    return CollectingSink()


@pytest.fixture
def single_seller_data():
    """One seller, one product, one receipt: revenue 200, profit 80."""
    return {
        "sellers": [copy.deepcopy(SELLERS[0])],
        "products": [copy.deepcopy(PRODUCTS[0])],
        "purchase_records": [receipt("seller_1", item("SKU_001", 2))],
    }


@pytest.fixture
def team_data():
    """
    Four sellers with distinct profits:
        seller_1 → 100, seller_2 → 40, seller_3 → 30, seller_4 → 10
    Sellers are listed out of profit order on purpose.
    """
    return {
        "sellers": copy.deepcopy([SELLERS[2], SELLERS[0], SELLERS[3], SELLERS[1]]),
        "products": copy.deepcopy(PRODUCTS),
        "purchase_records": [
            receipt("seller_1", item("SKU_002", 10)),
            receipt("seller_2", item("SKU_001", 1)),
            receipt("seller_3", item("SKU_003", 10)),
            receipt("seller_4", item("SKU_002", 1)),
        ],
    }
