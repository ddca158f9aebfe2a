"""Визуализация и веб-интерфейс."""
