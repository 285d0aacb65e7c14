"""Tests for schema metadata and the library's debug logging."""

import gc
import logging

import zodkit as zk
from zodkit import GlobalMeta, Registry, global_registry


class TestDescribeAndMeta:
    def test_describe_returns_registered_copy(self):
        base = zk.string()
        described = base.describe("A user name")

        assert described.description == "A user name"
        assert base.description is None
        assert described.meta().description == "A user name"

    def test_description_from_factory_params(self):
        assert zk.string(description="from params").description == "from params"

    def test_meta_merges_over_existing(self):
        schema = zk.int_().meta(title="Age").describe("Age in years").meta(examples=[30])
        meta = schema.meta()

        assert meta.title == "Age"
        assert meta.description == "Age in years"
        assert meta.examples == [30]

    def test_meta_accepts_global_meta(self):
        schema = zk.string().meta(GlobalMeta(id="registry-test-email", deprecated=True))
        assert schema.meta().deprecated is True

    def test_extra_keys_kept(self):
        schema = zk.string().meta(owner="payments")
        assert schema.meta().model_dump()["owner"] == "payments"

    def test_by_id(self):
        schema = zk.object_({"id": zk.int_()}).meta(id="registry-test-user")
        assert global_registry.by_id("registry-test-user") is schema
        assert global_registry.by_id("registry-test-missing") is None

    def test_metadata_does_not_change_parsing(self):
        schema = zk.int_().min(1).describe("positive").meta(title="Count")
        assert schema.parse(3) == 3
        assert schema.safe_parse(0).error is not None

    def test_unregistered_schema_has_no_meta(self):
        assert zk.string().meta() is None


class TestRegistry:
    def test_add_get_remove(self):
        registry = Registry()
        schema = zk.string()

        registry.add(schema, {"id": "local"})
        assert schema in registry
        assert registry.get(schema) == {"id": "local"}
        assert registry.by_id("local") is schema
        assert list(registry) == [schema]

        registry.remove(schema)
        assert not registry.has(schema)
        assert len(registry) == 0

    def test_entries_are_weak(self):
        registry = Registry()
        schema = zk.string()
        registry.add(schema, GlobalMeta(title="temporary"))
        assert len(registry) == 1

        del schema
        gc.collect()
        assert len(registry) == 0

    def test_clear(self):
        registry = Registry()
        keep = [zk.string(), zk.int_()]
        for schema in keep:
            registry.add(schema, GlobalMeta())
        registry.clear()
        assert len(registry) == 0


class TestDebugLogging:
    def test_registry_logs_registration(self, caplog):
        registry = Registry()
        schema = zk.string()
        with caplog.at_level(logging.DEBUG, logger="zodkit.kernel.registry"):
            registry.add(schema, GlobalMeta())
        assert "registered metadata for string schema" in caplog.text

    def test_construction_error_logged_on_parse(self, caplog):
        with caplog.at_level(logging.DEBUG, logger="zodkit.kernel.engine"):
            zk.enum().safe_parse("a")
        assert "deferred construction error" in caplog.text

    def test_unmatched_discriminator_logged(self, caplog):
        schema = zk.discriminated_union("kind", zk.object_({"kind": zk.literal("a")}))
        with caplog.at_level(logging.DEBUG, logger="zodkit.schemas.union"):
            schema.safe_parse({"kind": "b"})
        assert "trying every option" in caplog.text

    def test_nothing_logged_above_debug(self, caplog):
        with caplog.at_level(logging.INFO, logger="zodkit"):
            zk.enum().safe_parse("a")
            zk.string().describe("quiet")
        assert caplog.records == []
