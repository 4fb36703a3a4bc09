"""Tests for the in-process WSGI driver."""

import pytest

from robotsession.config.settings import ConfigStore
from robotsession.drivers.base import Driver
from robotsession.drivers.wsgi import WSGIDriver
from tests.helpers.apps import HELLO, hello_app


@pytest.fixture
def driver():
    instance = WSGIDriver(hello_app)
    yield instance
    instance.quit()


def test_satisfies_driver_protocol(driver):
    assert isinstance(driver, Driver)


def test_requires_app():
    with pytest.raises(ValueError):
        WSGIDriver(None)


class TestVisit:
    def test_body_before_visit(self, driver):
        assert driver.body == ""
        assert driver.current_url is None
        assert driver.status_code is None

    def test_visit_root(self, driver):
        driver.visit("/")
        assert HELLO in driver.body
        assert driver.status_code == 200
        assert driver.current_url == "http://www.example.com/"
        assert driver.response_headers["content-type"] == "text/html"

    def test_follows_redirects(self, driver):
        driver.visit("/redirect")
        assert HELLO in driver.html
        assert driver.current_url == "http://www.example.com/"

    def test_not_found(self, driver):
        driver.visit("/missing")
        assert driver.status_code == 404
        assert driver.body == "Not found"


class TestBaseUrl:
    def test_app_host_wins(self):
        config = ConfigStore()
        config.app_host = "http://app.test:3000"
        driver = WSGIDriver(hello_app, config=config)
        driver.visit("/")
        assert driver.current_url == "http://app.test:3000/"

    def test_default_host_used_without_app_host(self):
        config = ConfigStore()
        config.default_host = "http://default.test"
        assert WSGIDriver(hello_app, config=config).base_url == "http://default.test"

    def test_explicit_base_url(self):
        assert WSGIDriver(hello_app, base_url="http://explicit.test").base_url == "http://explicit.test"


class TestLifecycle:
    def test_reset_clears_page(self, driver):
        driver.visit("/")
        driver.reset()
        assert driver.body == ""

    def test_quit_then_visit_reopens_client(self, driver):
        driver.visit("/")
        driver.quit()
        driver.visit("/")
        assert HELLO in driver.body
