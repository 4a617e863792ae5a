# npmrange/core/__init__.py
