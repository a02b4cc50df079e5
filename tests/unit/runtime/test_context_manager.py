"""Unit tests for the application context."""

import asyncio
from contextvars import copy_context

import pytest

from src.authbridge.runtime.config.config_data import ConfigData
from src.authbridge.runtime.context import (
    AppContext,
    get_config,
    get_context,
    set_config,
    with_context,
)


class TestContextManager:
    def test_default_context_available(self):
        context = get_context()

        assert isinstance(context, AppContext)
        assert isinstance(get_config(), ConfigData)
        assert context.config is get_config()

    def test_override_applies_and_reverts(self):
        original = get_config()
        override = ConfigData()
        override.tenancy.namespace_key = "ofbiz#acme"

        with with_context(override):
            assert get_config().tenancy.namespace_key == "ofbiz#acme"
            assert get_config() is not original

        assert get_config() is original

    def test_unset_fields_are_inherited(self):
        outer = ConfigData()
        outer.tenancy.namespace_key = "ofbiz#outer"
        outer.app.environment = "test"

        with with_context(outer):
            inner = ConfigData()
            inner.tenancy.namespace_key = "ofbiz#inner"

            with with_context(inner):
                assert get_config().tenancy.namespace_key == "ofbiz#inner"
                assert get_config().app.environment == "test"

            assert get_config().tenancy.namespace_key == "ofbiz#outer"

    def test_no_override(self):
        original = get_config()

        with with_context():
            assert get_config() is original

    def test_rejects_non_config_override(self):
        with pytest.raises(ValueError, match="config_override must be ConfigData"):
            with with_context({"tenancy": {"namespace_key": "x"}}):
                pass

    def test_restored_after_exception(self):
        original = get_config()
        override = ConfigData()
        override.credentials.require_enabled = False

        with pytest.raises(RuntimeError):
            with with_context(override):
                assert get_config().credentials.require_enabled is False
                raise RuntimeError("boom")

        assert get_config() is original

    def test_set_config_is_scoped_to_the_running_context(self):
        replacement = ConfigData()
        replacement.tenancy.namespace_key = "ofbiz#replaced"

        def run() -> str:
            set_config(replacement)
            return get_config().tenancy.namespace_key

        assert copy_context().run(run) == "ofbiz#replaced"
        assert get_config() is not replacement


class TestAsyncContext:
    def test_concurrent_tasks_are_isolated(self):
        async def worker(index: int) -> str:
            override = ConfigData()
            override.tenancy.namespace_key = f"ofbiz#t{index}"
            with with_context(override):
                await asyncio.sleep(0.01)
                return get_config().tenancy.namespace_key

        async def main() -> list[str]:
            return await asyncio.gather(*(worker(i) for i in range(5)))

        assert asyncio.run(main()) == [f"ofbiz#t{i}" for i in range(5)]
