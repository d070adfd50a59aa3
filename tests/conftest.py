# Headless Qt for widget tests; must be set before pytest-qt creates the
# session QApplication.

import os

os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")
