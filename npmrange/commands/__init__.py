# npmrange/commands/__init__.py
