"""
Styles for the depmap window chrome.

Dark theme; the map itself is painted by StyleManager.
"""

COLORS = {
    "bg_primary": "#101010",
    "bg_secondary": "#181818",
    "bg_tertiary": "#222222",
    "text_primary": "#dddddd",
    "text_secondary": "#888888",
    "accent": "#ff6b6b",
    "border": "#2c2c2c",
}

DARK_STYLESHEET = """
QMainWindow, QWidget {
    background-color: #101010;
    color: #dddddd;
    font-family: "Segoe UI", sans-serif;
}

QFrame#infoPanel {
    background-color: rgba(24, 24, 24, 230);
    border: 1px solid #2c2c2c;
    border-radius: 6px;
}
QLabel#infoTitle {
    font-size: 14px;
    font-weight: bold;
    color: #ff6b6b;
}
QLabel#infoMeta {
    color: #888888;
    font-family: monospace;
}

QPushButton {
    background-color: #222222;
    color: #dddddd;
    border: 1px solid #2c2c2c;
    border-radius: 4px;
    padding: 6px 14px;
}
QPushButton:hover {
    background-color: #2c2c2c;
    border-color: #ff6b6b;
}
QPushButton:disabled {
    color: #555555;
}

QStatusBar {
    background-color: #181818;
    color: #888888;
}
QProgressBar {
    border: 1px solid #2c2c2c;
    border-radius: 3px;
    text-align: center;
    background-color: #181818;
}
QProgressBar::chunk {
    background-color: #ff6b6b;
}

QToolTip {
    background-color: #222222;
    color: #dddddd;
    border: 1px solid #2c2c2c;
}
"""
