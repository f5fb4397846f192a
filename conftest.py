import json
import logging
import os

import pytest

import nodelog

# Tests run without a display
os.environ.setdefault('QT_QPA_PLATFORM', 'offscreen')

# Try to import Qt - it may not be available in all environments
try:
    from nodelog import qt
    QT_AVAILABLE = True
except ImportError:
    QT_AVAILABLE = False

# Global reference to keep QApplication alive for entire process
_qt_app = None


def pytest_addoption(parser):
    parser.addoption(
        "--log",
        nargs='?',
        default=None,
        const='DEBUG',
        help="Enable logging at the specified level."
    )


def pytest_configure(config):
    """ called after command line options have been parsed and all plugins and initial conftest files been loaded. """
    log_level = config.getoption("--log")
    if log_level is not None:
        print(f"Setting log level to {log_level}")
        nodelog.basic_config(log_level.upper())


@pytest.fixture(scope="session")
def qapp():
    """Session-scoped QApplication fixture.

    Creates exactly one QApplication for the entire test session and keeps
    it alive until all tests complete. Skips if Qt is not available.
    """
    global _qt_app

    if not QT_AVAILABLE:
        pytest.skip("Qt not available - skipping Qt-dependent test")

    if _qt_app is None:
        _qt_app = qt.make_qapp()

    return _qt_app


@pytest.fixture
def caplog_warnings(caplog):
    """caplog capturing WARNING and above from the nodelog loggers."""
    caplog.set_level(logging.WARNING, logger='nodelog')
    return caplog


def _log_line(t, node='N1', msg='hello', lvl='info', module='m', caller='x.go:1', **extra):
    obj = {'module': module, 'msg': msg, 'lvl': lvl, 't': t, 'caller': caller}
    if node is not None:
        obj['node'] = node
    obj.update(extra)
    return json.dumps(obj)


@pytest.fixture
def log_line():
    """Factory for one JSON log line; pass node=None to omit the node key."""
    return _log_line
