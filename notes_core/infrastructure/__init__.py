"""Инфраструктурный слой: реализации интерфейсов поверх внешних библиотек."""
