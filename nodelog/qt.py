# Qt binding shim: exposes QtCore, QtGui and QtWidgets names from the first available binding
# Import as `from nodelog import qt` and use `qt.QWidget`, `qt.Signal`, ...

import importlib
import sys

QT_LIBS = ['PyQt6', 'PySide6', 'PyQt5', 'PySide2']


def _find_qt_lib():
    # prefer a binding the application has already imported
    for qt_lib in QT_LIBS:
        if qt_lib + '.QtCore' in sys.modules:
            return qt_lib
    for qt_lib in QT_LIBS:
        try:
            importlib.import_module(qt_lib + '.QtCore')
            return qt_lib
        except ImportError:
            pass
    raise ImportError(f'No importable Qt library found (tried {", ".join(QT_LIBS)})')


def import_qt_namespace(qt_lib):
    """Return a dict of the public names in *qt_lib*'s QtCore, QtGui and QtWidgets modules."""
    ns = {}
    for submodule in ('QtCore', 'QtGui', 'QtWidgets'):
        module = importlib.import_module(qt_lib + '.' + submodule)
        ns.update({k: v for k, v in module.__dict__.items() if not k.startswith('__')})
    if 'PySide' not in qt_lib:
        ns['Signal'] = ns['pyqtSignal']
    return ns


QT_LIB = _find_qt_lib()
globals().update(import_qt_namespace(QT_LIB))


def make_qapp():
    """Create a QApplication object if one does not already exist.

    Returns
    -------
    app : QApplication
        The QApplication object.
    """
    app = QApplication.instance()  # noqa: F821 (imported from the Qt namespace)
    if app is None:
        app = QApplication([])  # noqa: F821
    return app
