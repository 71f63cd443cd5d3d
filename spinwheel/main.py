import os
import sys

from PyQt5.QtCore import QCoreApplication
from PyQt5.QtGui import QFont
from PyQt5.QtWidgets import QApplication

from spinwheel.log import log_transaction
from spinwheel.storage import JsonWheelStore
from spinwheel.utils.config import data_file_path
from spinwheel.windows.control_window import ControlWindow


def main():
    # Windows venvs sometimes miss the Qt plugin path
    venv_root = os.path.dirname(os.path.dirname(sys.executable))
    plugin_path = os.path.join(venv_root, "Lib", "site-packages", "PyQt5", "Qt5", "plugins")
    if os.path.exists(plugin_path):
        QCoreApplication.addLibraryPath(plugin_path)

    app = QApplication(sys.argv)
    app.setFont(QFont("Segoe UI", 10))

    store = JsonWheelStore(data_file_path())
    log_transaction(f"application started, data file {store.path}")

    # the console creates and owns the spin page window
    control_window = ControlWindow(store)
    control_window.show()

    return app.exec_()


if __name__ == '__main__':
    sys.exit(main())
