"""CLI команды.

Модули:
    notes_cmd: add, update, delete, list, search, show.
    config_cmd: config show.
"""
