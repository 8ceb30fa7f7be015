"""Allowlisted entity graph of the product catalog tables (see `src/db/migrations/`)."""

from __future__ import annotations

from src.sql.schema import Entity, EntityGraph, Relationship

PRODUCT = "product"

CATALOG_GRAPH = EntityGraph(
    [
        Entity(
            name="product",
            table="products",
            columns=(
                "id",
                "name",
                "description",
                "price",
                "status",
                "category_id",
                "created_at",
            ),
            relationships={
                "category": Relationship(
                    name="category",
                    target="category",
                    local_column="category_id",
                    remote_column="id",
                ),
                "reviews": Relationship(
                    name="reviews",
                    target="review",
                    local_column="id",
                    remote_column="product_id",
                    to_many=True,
                ),
            },
        ),
        Entity(
            name="category",
            table="categories",
            columns=("id", "name", "department_id"),
            relationships={
                "department": Relationship(
                    name="department",
                    target="department",
                    local_column="department_id",
                    remote_column="id",
                ),
            },
        ),
        Entity(
            name="department",
            table="departments",
            columns=("id", "name", "manager_id"),
            relationships={
                "manager": Relationship(
                    name="manager",
                    target="employee",
                    local_column="manager_id",
                    remote_column="id",
                ),
            },
        ),
        Entity(
            name="employee",
            table="employees",
            columns=("id", "name", "email"),
        ),
        Entity(
            name="review",
            table="reviews",
            columns=("id", "product_id", "rating", "body", "created_at"),
        ),
    ]
)
