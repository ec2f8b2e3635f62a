# src/termtest/cli/__init__.py
