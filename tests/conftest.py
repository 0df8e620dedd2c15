"""Shared fixtures for erdiagram tests."""

import pytest

from erdiagram.core.schema import ColumnRecord, ForeignKeyRecord, SchemaSnapshot
from erdiagram.utils.config import Config, set_config


@pytest.fixture(autouse=True)
def default_config():
    """Run every test against the built-in defaults."""
    config = Config()
    set_config(config)
    yield config
    set_config(None)


@pytest.fixture
def orders_snapshot():
    """Orders(id PK, customer_id) -> Customers(id PK, name)."""
    return SchemaSnapshot(
        tables=["Orders", "Customers"],
        columns=[
            ColumnRecord("Orders", "id", "int", "int", "PRI"),
            ColumnRecord("Orders", "customer_id", "int", "int", ""),
            ColumnRecord("Customers", "id", "int", "int", "PRI"),
            ColumnRecord("Customers", "name", "varchar(255)", "varchar", ""),
        ],
        foreign_keys=[
            ForeignKeyRecord("Orders", "customer_id", "Customers", "id", "fk_orders_customer"),
        ],
    )


@pytest.fixture
def isolated_snapshot():
    """Five tables, no foreign keys."""
    tables = ["alpha", "beta", "gamma", "delta", "epsilon"]
    return SchemaSnapshot(
        tables=tables,
        columns=[ColumnRecord(name, "id", "int", "int", "PRI") for name in tables],
        foreign_keys=[],
    )


@pytest.fixture
def shop_snapshot():
    """A small shop schema with a cycle, a fan-out table and one isolated table."""
    tables = [
        "customers",
        "orders",
        "order_items",
        "products",
        "categories",
        "suppliers",
        "employees",
        "audit_log",
    ]
    columns = []
    for table in tables:
        columns.append(ColumnRecord(table, "id", "bigint", "bigint", "PRI"))
    columns += [
        ColumnRecord("orders", "customer_id", "bigint", "bigint"),
        ColumnRecord("orders", "employee_id", "bigint", "bigint"),
        ColumnRecord("order_items", "order_id", "bigint", "bigint"),
        ColumnRecord("order_items", "product_id", "bigint", "bigint"),
        ColumnRecord("products", "category_id", "bigint", "bigint"),
        ColumnRecord("products", "supplier_id", "bigint", "bigint"),
        ColumnRecord("categories", "featured_product_id", "bigint", "bigint"),
        ColumnRecord("employees", "manager_id", "bigint", "bigint"),
        ColumnRecord("customers", "referred_by", "bigint", "bigint"),
    ]
    foreign_keys = [
        ForeignKeyRecord("orders", "customer_id", "customers", "id", "fk_orders_customer"),
        ForeignKeyRecord("orders", "employee_id", "employees", "id", "fk_orders_employee"),
        ForeignKeyRecord("order_items", "order_id", "orders", "id", "fk_items_order"),
        ForeignKeyRecord("order_items", "product_id", "products", "id", "fk_items_product"),
        ForeignKeyRecord("products", "category_id", "categories", "id", "fk_products_category"),
        ForeignKeyRecord("products", "supplier_id", "suppliers", "id", "fk_products_supplier"),
        # categories -> products closes a cycle with products -> categories
        ForeignKeyRecord("categories", "featured_product_id", "products", "id", "fk_categories_product"),
        # self reference
        ForeignKeyRecord("employees", "manager_id", "employees", "id", "fk_employees_manager"),
        ForeignKeyRecord("customers", "referred_by", "customers", "id", ""),
        # dangling: warehouses is not in the snapshot
        ForeignKeyRecord("products", "warehouse_id", "warehouses", "id", "fk_products_warehouse"),
    ]
    return SchemaSnapshot(tables=tables, columns=columns, foreign_keys=foreign_keys)
