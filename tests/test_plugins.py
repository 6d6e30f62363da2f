"""Tests for fauxify.plugins: sequential, failure-tolerant plugin loading."""

import logging

import anyio
import pytest

from fauxify.errors import PluginLoadError
from fauxify.plugins import PluginEntry, PluginLoader, as_load_error


class _Context:
    def __init__(self) -> None:
        self.log: list[str] = []


class TestRunAll:
    @pytest.mark.anyio
    async def test_runs_in_registration_order(self) -> None:
        loader = PluginLoader()

        async def first(ctx, options, done):
            ctx.log.append("first")

        def second(ctx, options, done):
            ctx.log.append("second")
            done()

        async def third(ctx, options, done):
            await anyio.sleep(0)
            ctx.log.append("third")

        for plugin in (first, second, third):
            loader.register(plugin)
        ctx = _Context()
        assert await loader.run_all(ctx) == 0
        assert ctx.log == ["first", "second", "third"]
        assert loader.finished

    @pytest.mark.anyio
    async def test_failure_does_not_stop_later_plugins(
        self, caplog: pytest.LogCaptureFixture
    ) -> None:
        loader = PluginLoader()

        async def broken(ctx, options, done):
            raise RuntimeError("no database")

        def reports_error(ctx, options, done):
            done(ValueError("bad options"))

        async def healthy(ctx, options, done):
            ctx.log.append("healthy")

        for plugin in (broken, reports_error, healthy):
            loader.register(plugin)
        ctx = _Context()
        with caplog.at_level(logging.ERROR, logger="fauxify"):
            failures = await loader.run_all(ctx)

        assert failures == 2
        assert ctx.log == ["healthy"]
        assert caplog.text.count("Error loading plugin") == 2

    @pytest.mark.anyio
    async def test_options_passed_and_default_to_empty(self) -> None:
        seen: list[object] = []
        loader = PluginLoader()

        def plugin(ctx, options, done):
            seen.append(options)
            done()

        loader.register(plugin, {"prefix": "/api"})
        loader.register(plugin)
        await loader.run_all(_Context())
        assert seen == [{"prefix": "/api"}, {}]

    @pytest.mark.anyio
    async def test_same_context_for_every_plugin(self) -> None:
        seen: list[object] = []
        loader = PluginLoader()

        async def plugin(ctx, options, done):
            seen.append(ctx)

        loader.register(plugin)
        loader.register(plugin)
        ctx = _Context()
        await loader.run_all(ctx)
        assert seen == [ctx, ctx]

    @pytest.mark.anyio
    async def test_nested_registration_loads_after_parent(self) -> None:
        loader = PluginLoader()

        async def child(ctx, options, done):
            ctx.log.append("child")

        async def parent(ctx, options, done):
            ctx.log.append("parent")
            loader.register(child)

        async def sibling(ctx, options, done):
            ctx.log.append("sibling")

        loader.register(parent)
        loader.register(sibling)
        ctx = _Context()
        await loader.run_all(ctx)
        assert ctx.log == ["parent", "sibling", "child"]

    @pytest.mark.anyio
    async def test_registration_after_finish_is_ignored(self) -> None:
        loader = PluginLoader()
        await loader.run_all(_Context())

        async def late(ctx, options, done):
            ctx.log.append("late")

        loader.register(late)
        assert len(loader) == 0


class TestLoadAsync:
    @pytest.mark.anyio
    async def test_done_with_error_rejects_immediately(self) -> None:
        finished: list[bool] = []

        async def plugin(ctx, options, done):
            done(ValueError("early"))
            await anyio.sleep(10)
            finished.append(True)

        loader = PluginLoader()
        with anyio.fail_after(2):
            with pytest.raises(PluginLoadError) as exc_info:
                await loader.load(PluginEntry(plugin), _Context())
        assert isinstance(exc_info.value.__cause__, ValueError)
        assert finished == []

    @pytest.mark.anyio
    async def test_done_without_error_then_return_settles_once(self) -> None:
        async def plugin(ctx, options, done):
            done()
            done()

        await PluginLoader().load(PluginEntry(plugin), _Context())

    @pytest.mark.anyio
    async def test_raise_after_done_error_keeps_first_error(self) -> None:
        async def plugin(ctx, options, done):
            done(KeyError("first"))
            raise RuntimeError("second")

        with pytest.raises(PluginLoadError) as exc_info:
            await PluginLoader().load(PluginEntry(plugin), _Context())
        assert isinstance(exc_info.value.__cause__, KeyError)


class TestLoadSync:
    @pytest.mark.anyio
    async def test_done_success(self) -> None:
        def plugin(ctx, options, done):
            done()

        await PluginLoader().load(PluginEntry(plugin), _Context())

    @pytest.mark.anyio
    async def test_raise(self) -> None:
        def plugin(ctx, options, done):
            raise RuntimeError("boom")

        with pytest.raises(PluginLoadError) as exc_info:
            await PluginLoader().load(PluginEntry(plugin), _Context())
        assert exc_info.value.plugin_name.endswith("plugin")

    @pytest.mark.anyio
    async def test_timeout_bounds_a_plugin_that_never_settles(self) -> None:
        def plugin(ctx, options, done):
            pass

        loader = PluginLoader(timeout=0.05)
        with pytest.raises(PluginLoadError) as exc_info:
            await loader.load(PluginEntry(plugin), _Context())
        assert isinstance(exc_info.value.__cause__, TimeoutError)

    @pytest.mark.anyio
    @pytest.mark.parametrize("value", [None, False, 0, ""])
    async def test_falsy_done_value_is_success(self, value: object) -> None:
        def plugin(ctx, options, done):
            done(value)

        await PluginLoader().load(PluginEntry(plugin), _Context())

    @pytest.mark.anyio
    async def test_non_exception_error_is_wrapped(self) -> None:
        def plugin(ctx, options, done):
            done("boom")

        with pytest.raises(PluginLoadError) as exc_info:
            await PluginLoader().load(PluginEntry(plugin), _Context())
        cause = exc_info.value.__cause__
        assert isinstance(cause, RuntimeError)
        assert "boom" in str(cause)


class TestNonExceptionErrors:
    def test_as_load_error(self) -> None:
        error = ValueError("x")
        assert as_load_error(None) is None
        assert as_load_error(False) is None
        assert as_load_error(error) is error
        assert isinstance(as_load_error("boom"), RuntimeError)

    @pytest.mark.anyio
    async def test_string_error_does_not_stop_later_plugins(
        self, caplog: pytest.LogCaptureFixture
    ) -> None:
        loader = PluginLoader()

        def reports_string(ctx, options, done):
            done("boom")

        async def later(ctx, options, done):
            ctx.log.append("later")

        loader.register(reports_string)
        loader.register(later)
        ctx = _Context()
        with caplog.at_level(logging.ERROR, logger="fauxify"):
            failures = await loader.run_all(ctx)

        assert failures == 1
        assert ctx.log == ["later"]
        assert "Error loading plugin" in caplog.text

    @pytest.mark.anyio
    async def test_async_plugin_string_error(self) -> None:
        async def plugin(ctx, options, done):
            done("boom")
            await anyio.sleep(10)

        with anyio.fail_after(2):
            with pytest.raises(PluginLoadError) as exc_info:
                await PluginLoader().load(PluginEntry(plugin), _Context())
        assert isinstance(exc_info.value.__cause__, RuntimeError)
