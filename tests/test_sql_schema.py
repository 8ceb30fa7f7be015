"""Tests for the allowlisted entity graph."""

from __future__ import annotations

import pytest

from src.catalog.graph import CATALOG_GRAPH
from src.sql.errors import SQLBuilderError
from src.sql.schema import Entity, EntityGraph, Relationship


def test_catalog_graph_is_consistent() -> None:
    product = CATALOG_GRAPH.entity("product")

    assert product.relationship("category").target == "category"
    assert product.relationship("reviews").to_many is True
    assert "employee" in CATALOG_GRAPH


@pytest.mark.parametrize("table", ["Products", "products; DROP TABLE x", "1products", ""])
def test_invalid_identifiers_are_rejected(table: str) -> None:
    with pytest.raises(SQLBuilderError):
        Entity(name="product", table=table, columns=("id",))


def test_relationship_target_must_exist() -> None:
    with pytest.raises(SQLBuilderError, match="Unknown entity: brand"):
        EntityGraph(
            [
                Entity(
                    name="product",
                    table="products",
                    columns=("id", "brand_id"),
                    relationships={
                        "brand": Relationship(
                            name="brand",
                            target="brand",
                            local_column="brand_id",
                            remote_column="id",
                        )
                    },
                )
            ]
        )


def test_relationship_columns_must_exist() -> None:
    with pytest.raises(SQLBuilderError, match="Unknown attribute"):
        EntityGraph(
            [
                Entity(
                    name="product",
                    table="products",
                    columns=("id",),
                    relationships={
                        "brand": Relationship(
                            name="brand",
                            target="brand",
                            local_column="brand_id",
                            remote_column="id",
                        )
                    },
                ),
                Entity(name="brand", table="brands", columns=("id",)),
            ]
        )


def test_duplicate_entity_is_rejected() -> None:
    with pytest.raises(SQLBuilderError, match="Duplicate entity"):
        EntityGraph(
            [
                Entity(name="brand", table="brands", columns=("id",)),
                Entity(name="brand", table="brands_v2", columns=("id",)),
            ]
        )
