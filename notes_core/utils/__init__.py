"""Вспомогательные модули Notes Core."""
