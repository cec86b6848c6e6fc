"""
Unit tests for the index planner.

Tests IndexSpec construction, plan ordering, skipping of unannotated
fields and fail-fast / collect-all error reporting.
"""

from dataclasses import dataclass, field

import pytest
from pydantic import BaseModel, Field
from pymongo.operations import IndexModel

from mdb_indexer.exceptions import (
    ConflictingOptionsError,
    FieldIndexError,
    IndexPlanningError,
    UnknownOptionError,
)
from mdb_indexer.indexes.annotation import IndexDirection, IndexOption
from mdb_indexer.indexes.descriptor import FieldDescriptor
from mdb_indexer.indexes.planner import IndexPlan, IndexSpec, plan_indexes


@pytest.mark.unit
class TestIndexSpec:
    """Test IndexSpec views."""

    def test_from_regular_option(self):
        option = IndexOption(direction=IndexDirection.DESCENDING, unique=True, name="by_score")
        spec = IndexSpec.from_option("score", option)
        assert spec == IndexSpec(
            field="score", direction=IndexDirection.DESCENDING, unique=True, name="by_score"
        )
        assert spec.key == {"score": -1}
        assert spec.keys == [("score", -1)]
        assert spec.document() == {"key": {"score": -1}, "unique": True, "name": "by_score"}

    def test_from_ttl_option(self):
        spec = IndexSpec.from_option("created_at", IndexOption(ttl_seconds=0))
        assert spec.document() == {"key": {"created_at": 1}, "expireAfterSeconds": 0}
        assert spec.unique is False

    def test_unset_options_are_omitted(self):
        assert IndexSpec("email").document() == {"key": {"email": 1}}
        assert IndexSpec("email").index_options() == {}

    def test_to_index_model(self):
        model = IndexSpec("email", unique=True, name="email_idx").to_index_model()
        assert isinstance(model, IndexModel)
        assert model.document["key"] == {"email": 1}
        assert model.document["unique"] is True
        assert model.document["name"] == "email_idx"

    def test_to_index_model_ttl(self):
        model = IndexSpec("created_at", expire_after_seconds=3600).to_index_model()
        assert model.document["expireAfterSeconds"] == 3600
        assert model.document["name"] == "created_at_1"

    @pytest.mark.parametrize(
        "option",
        [
            IndexOption(),
            IndexOption(direction=IndexDirection.DESCENDING),
            IndexOption(unique=True, name="u"),
            IndexOption(ttl_seconds=42, name="t"),
        ],
    )
    def test_option_survives_in_spec(self, option):
        spec = IndexSpec.from_option("f", option)
        assert spec.direction == option.direction
        assert spec.unique == option.unique
        assert spec.expire_after_seconds == option.ttl_seconds
        assert spec.name == option.name


@pytest.mark.unit
class TestPlanIndexes:
    """Test plan_indexes."""

    def test_user_record_plan(self, user_record):
        plan = plan_indexes(user_record)
        assert plan.documents() == [
            {"key": {"email": 1}, "unique": True, "name": "email_idx"},
            {"key": {"created_at": 1}, "expireAfterSeconds": 3600},
        ]

    def test_plan_uses_storage_names(self, audit_record):
        plan = plan_indexes(audit_record)
        assert [spec.key for spec in plan] == [{"eventId": 1}, {"ts": -1}]
        assert plan[0].unique is True

    def test_dataclass_plan(self, session_record):
        plan = plan_indexes(session_record)
        assert plan.documents() == [
            {"key": {"token": 1}, "unique": True, "name": "token_idx"},
            {"key": {"userId": 1}},
            {"key": {"expiresAt": 1}, "expireAfterSeconds": 0},
        ]

    def test_no_annotated_fields_is_empty_plan(self, unindexed_record):
        plan = plan_indexes(unindexed_record)
        assert plan == IndexPlan()
        assert len(plan) == 0
        assert not plan

    def test_empty_annotation_creates_plain_index(self):
        plan = plan_indexes([("status", "")])
        assert plan.documents() == [{"key": {"status": 1}}]

    def test_index_models(self, user_record):
        models = plan_indexes(user_record).index_models()
        assert [m.document["name"] for m in models] == ["email_idx", "created_at_1"]

    def test_custom_annotation_key(self):
        class Product(BaseModel):
            sku: str = Field(json_schema_extra={"mongo_index": "unique", "index": "desc"})
            price: int = Field(json_schema_extra={"index": "desc"})

        plan = plan_indexes(Product, annotation_key="mongo_index")
        assert plan.documents() == [{"key": {"sku": 1}, "unique": True}]

    def test_custom_annotation_key_on_dataclass(self):
        @dataclass
        class Product:
            sku: str = field(metadata={"mongo_index": "desc", "index": "unique"})
            price: int = field(default=0, metadata={"index": "asc"})

        plan = plan_indexes(Product, annotation_key="mongo_index")
        assert plan.documents() == [{"key": {"sku": -1}}]

    def test_planning_is_repeatable(self, user_record):
        assert plan_indexes(user_record) == plan_indexes(user_record)


@pytest.mark.unit
class TestPlanErrors:
    """Test planning failures."""

    def test_field_error_carries_field_and_cause(self):
        fields = [
            FieldDescriptor("Email", "email", "unique"),
            FieldDescriptor("CreatedAt", "created_at", "ttl=60,unique"),
        ]
        with pytest.raises(FieldIndexError) as exc_info:
            plan_indexes(fields)

        error = exc_info.value
        assert error.field == "CreatedAt"
        assert error.storage_field == "created_at"
        assert isinstance(error.cause, ConflictingOptionsError)
        assert error.__cause__ is error.cause
        assert "CreatedAt" in str(error)

    def test_first_error_in_declaration_order_wins(self):
        fields = [
            ("a", "asc"),
            ("b", "bogus"),
            ("c", "asc,desc"),
        ]
        with pytest.raises(FieldIndexError) as exc_info:
            plan_indexes(fields)
        assert exc_info.value.field == "b"
        assert isinstance(exc_info.value.cause, UnknownOptionError)

    def test_collect_all_reports_every_field(self):
        fields = [
            ("a", "asc"),
            ("b", "bogus"),
            ("c", "asc,desc"),
            ("d", None),
        ]
        with pytest.raises(IndexPlanningError) as exc_info:
            plan_indexes(fields, fail_fast=False)

        errors = exc_info.value.errors
        assert [e.field for e in errors] == ["b", "c"]
        assert exc_info.value.context["fields"] == ["b", "c"]

    def test_collect_all_without_errors_returns_plan(self, user_record):
        assert plan_indexes(user_record, fail_fast=False) == plan_indexes(user_record)
