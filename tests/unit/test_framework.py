"""Tests for the Framework object and the module-level helpers."""

from unittest.mock import MagicMock, patch

import pytest

import robotsession
from robotsession import Framework, get_framework, reset_framework
from robotsession.servers.handle import ServerHandle
from tests.helpers.drivers import FakeHandle, RecordingDriver


# =============================================================================
# framework.server
# =============================================================================


class TestServerProperty:
    def test_defaults_to_run_default_server(self, framework):
        mock_app = object()
        with patch.object(framework, "run_default_server") as run_default:
            framework.server(mock_app, 8000)
        run_default.assert_called_once_with(mock_app, 8000)

    def test_returns_custom_server(self, framework):
        server = lambda app, port, host=None: None  # noqa: E731
        framework.register_server("custom", server)
        framework.config.server = "custom"
        assert framework.server is server

    def test_wsgiref_registered(self):
        with patch("robotsession.servers.registry.run_wsgiref") as run:
            framework = Framework()
            framework.config.server = "wsgiref"
            framework.server("app", 8000)
        run.assert_called_once_with("app", 8000)

    def test_uvicorn_registered(self):
        with patch("robotsession.servers.registry.run_uvicorn") as run:
            framework = Framework()
            framework.config.server = "uvicorn"
            framework.server("app", 8000)
        run.assert_called_once_with("app", 8000)

    def test_passes_options_to_server(self, framework):
        framework.config.server = ("uvicorn", {"log_level": "error"})
        with patch("robotsession.servers.backends.uvicorn") as uvicorn_mock, \
                patch.object(ServerHandle, "_wait_until_responsive"):
            framework.server("app", 9000)
        uvicorn_mock.Config.assert_called_once_with(
            "app", host="127.0.0.1", port=9000, log_level="error"
        )

    def test_unknown_server_fails_on_use(self, framework):
        framework.config.server = "nope"
        with pytest.raises(robotsession.ServerNotFoundError):
            framework.server

    def test_run_default_server_uses_wsgiref_on_server_host(self, framework):
        factory = MagicMock()
        framework.register_server("wsgiref", factory)
        framework.config.server_host = "0.0.0.0"
        framework.run_default_server("app", 8000)
        factory.assert_called_once_with("app", 8000, "0.0.0.0")


# =============================================================================
# start_server
# =============================================================================


class TestStartServer:
    @pytest.fixture
    def blob(self, framework):
        factory = MagicMock(side_effect=FakeHandle)
        framework.register_server("blob", factory)
        framework.config.set_server("blob", silent=True)
        return factory

    def test_uses_configured_host_port_and_options(self, framework, blob):
        framework.config.server_host = "0.0.0.0"
        framework.config.server_port = 8123
        handle = framework.start_server("app")
        blob.assert_called_once_with("app", 8123, "0.0.0.0", silent=True)
        assert handle.options == {"silent": True}

    def test_explicit_port_and_host(self, framework, blob):
        framework.start_server("app", port=9000, host="localhost")
        blob.assert_called_once_with("app", 9000, "localhost", silent=True)

    def test_reuse_server_true(self, framework, blob):
        framework.config.reuse_server = True
        assert framework.start_server("app", port=9000) is framework.start_server("app", port=9000)

    def test_reuse_server_false(self, framework, blob):
        framework.config.reuse_server = False
        assert framework.start_server("app", port=9000) is not framework.start_server("app", port=9000)

    def test_named_server_honours_reuse_and_options(self, framework, blob):
        framework.config.set_server("wsgiref", {"quiet": True})
        framework.config.reuse_server = True
        first = framework.start_server("app", 8000, "h", name="blob")
        second = framework.start_server("app", 8000, "h", name="blob")
        assert first is second
        blob.assert_called_once_with("app", 8000, "h", quiet=True)

    def test_named_server_without_reuse(self, framework, blob):
        framework.config.reuse_server = False
        framework.start_server("app", 8000, "h", name="blob")
        framework.start_server("app", 8000, "h", name="blob")
        assert blob.call_count == 2

    def test_shutdown_stops_servers(self, framework, blob):
        handle = framework.start_server("app", port=9000)
        framework.shutdown()
        assert handle.stop_calls == 1


# =============================================================================
# registration and settings helpers
# =============================================================================


class TestRegistration:
    def test_register_driver(self, framework):
        assert framework.register_driver("schmoo", RecordingDriver) is None
        assert isinstance(framework.resolve_driver("schmoo", "app"), RecordingDriver)

    def test_register_driver_decorator(self, framework):
        @framework.register_driver("decorated")
        def build(app):
            return RecordingDriver(app, content="decorated")

        assert build("x").content == "decorated"
        assert framework.new_session("decorated", "app").body == "decorated"

    def test_register_server_decorator(self, framework):
        @framework.register_server("decorated")
        def serve(app, port, host=None, **options):
            return FakeHandle(app, port, host)

        assert framework.servers.get("decorated") is serve


class TestSettings:
    def test_using_wait_time_restores(self, framework):
        framework.config.wait_time = 2
        with framework.using_wait_time(10):
            assert framework.config.wait_time == 10
        assert framework.config.wait_time == 2

    def test_using_wait_time_restores_on_error(self, framework):
        with pytest.raises(RuntimeError):
            with framework.using_wait_time(10):
                raise RuntimeError("boom")
        assert framework.config.wait_time == 2

    def test_new_session_uses_default_driver(self, framework):
        framework.config.default_driver = "selenium"
        assert framework.new_session(app="app").driver_name == "selenium"

    def test_reset_restores_everything(self, framework):
        framework.register_driver("schmoo", RecordingDriver)
        framework.register_server("blob", FakeHandle)
        framework.config.wait_time = 9
        framework.reset()
        assert "schmoo" not in framework.drivers
        assert "blob" not in framework.servers
        assert framework.config.wait_time == 2


# =============================================================================
# module-level API
# =============================================================================


class TestModuleApi:
    def test_get_framework_is_singleton(self):
        assert get_framework() is get_framework()

    def test_reset_framework_creates_new_instance(self):
        first = get_framework()
        reset_framework()
        assert get_framework() is not first

    def test_register_driver_on_default_framework(self):
        robotsession.register_driver("schmoo", RecordingDriver)
        assert "schmoo" in get_framework().drivers

    def test_register_server_on_default_framework(self):
        robotsession.register_server("blob", FakeHandle)
        assert get_framework().servers.get("blob") is FakeHandle

    def test_reset_framework_stops_servers(self):
        robotsession.register_server("blob", FakeHandle)
        get_framework().config.server = "blob"
        handle = get_framework().start_server("app", port=9000)
        reset_framework()
        assert not handle.is_running
